"""Demo scenarios exercising the cache client.

Each scenario awaits one cache call at a time, discriminates the returned
outcome exhaustively, and records a ``StepRecord`` per call.  Error
outcomes are recorded, never raised, so a failing step does not stop the
scenario from cleaning up its key.

Scenarios, in run order:

    scalar       set, get and delete a plain value
    concatenate  build a list with batch appends and a batch prepend
    pop          pop one element from each end of a list
    push         push one element onto each end of a list
    remove       remove a value from the middle of a list
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Union

import structlog
from typing_extensions import assert_never

from cachedemo.models.outcomes import (
    CacheDeleteResponse,
    CacheGet,
    CacheGetResponse,
    CacheListConcatenateBackResponse,
    CacheListConcatenateFrontResponse,
    CacheListFetch,
    CacheListFetchResponse,
    CacheListPopBack,
    CacheListPopBackResponse,
    CacheListPopFront,
    CacheListPopFrontResponse,
    CacheListPushBack,
    CacheListPushBackResponse,
    CacheListPushFront,
    CacheListPushFrontResponse,
    CacheListRemoveValueResponse,
    CacheSetResponse,
    ErrorOutcome,
    Outcome,
    SuccessOutcome,
)
from cachedemo.models.scenario import ScenarioReport, StepRecord
from cachedemo.services.cache_client import CacheClient

logger = structlog.get_logger(logger_name=__name__)

SCALAR_KEY = "my_key"
SCALAR_VALUE = "Hello_world"
LIST_KEY = "my_list_key"

MutationResponse = Union[
    CacheSetResponse,
    CacheDeleteResponse,
    CacheListConcatenateFrontResponse,
    CacheListConcatenateBackResponse,
    CacheListRemoveValueResponse,
]
PopResponse = Union[CacheListPopFrontResponse, CacheListPopBackResponse]
PushResponse = Union[CacheListPushFrontResponse, CacheListPushBackResponse]


# ---------------------------------------------------------------------------
# Outcome discrimination
# ---------------------------------------------------------------------------


def _describe_error(outcome: ErrorOutcome) -> str:
    return f"{outcome.error_code.value}: {outcome.message}"


def describe_get(outcome: CacheGetResponse) -> str:
    match outcome:
        case CacheGet.Hit():
            return f"value={outcome.value_string!r}"
        case CacheGet.Miss():
            return "key not found"
        case CacheGet.Error():
            return _describe_error(outcome)
        case _:
            assert_never(outcome)


def describe_fetch(outcome: CacheListFetchResponse) -> str:
    match outcome:
        case CacheListFetch.Hit():
            return f"values={outcome.value_list_string!r}"
        case CacheListFetch.Miss():
            return "list not found"
        case CacheListFetch.Error():
            return _describe_error(outcome)
        case _:
            assert_never(outcome)


def describe_pop(outcome: PopResponse) -> str:
    match outcome:
        case CacheListPopFront.Hit() | CacheListPopBack.Hit():
            return f"removed value={outcome.value_string!r}"
        case CacheListPopFront.Miss() | CacheListPopBack.Miss():
            return "list empty or not found"
        case CacheListPopFront.Error() | CacheListPopBack.Error():
            return _describe_error(outcome)
        case _:
            assert_never(outcome)


def describe_push(outcome: PushResponse) -> str:
    match outcome:
        case CacheListPushFront.Success() | CacheListPushBack.Success():
            return f"list_length={outcome.list_length}"
        case CacheListPushFront.Error() | CacheListPushBack.Error():
            return _describe_error(outcome)
        case _:
            assert_never(outcome)


def describe_mutation(outcome: MutationResponse) -> str:
    match outcome:
        case SuccessOutcome():
            return "ok"
        case ErrorOutcome():
            return _describe_error(outcome)
        case _:
            assert_never(outcome)


def _step(operation: str, outcome: Outcome, summary: str) -> StepRecord:
    if isinstance(outcome, ErrorOutcome):
        logger.error("scenario_step_failed", operation=operation, error=summary)
    return StepRecord(operation=operation, tag=outcome.tag, summary=summary)


async def _fetch_list(client: CacheClient, steps: list[StepRecord]) -> list[str] | None:
    outcome = await client.list_fetch(LIST_KEY)
    steps.append(_step("list_fetch", outcome, describe_fetch(outcome)))
    if isinstance(outcome, CacheListFetch.Hit):
        return outcome.value_list_string
    return None


async def _seed_list(client: CacheClient, steps: list[StepRecord]) -> None:
    outcome = await client.list_concatenate_back(LIST_KEY, ["a", "b", "c"])
    steps.append(_step("list_concatenate_back", outcome, describe_mutation(outcome)))


async def _cleanup_list(client: CacheClient, steps: list[StepRecord]) -> None:
    outcome = await client.delete(LIST_KEY)
    steps.append(_step("delete", outcome, describe_mutation(outcome)))


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


async def scalar_scenario(client: CacheClient) -> ScenarioReport:
    """Store a value, read it back, then delete it."""
    steps: list[StepRecord] = []

    set_outcome = await client.set(SCALAR_KEY, SCALAR_VALUE)
    steps.append(_step("set", set_outcome, describe_mutation(set_outcome)))

    get_outcome = await client.get(SCALAR_KEY)
    steps.append(_step("get", get_outcome, describe_get(get_outcome)))

    delete_outcome = await client.delete(SCALAR_KEY)
    steps.append(_step("delete", delete_outcome, describe_mutation(delete_outcome)))

    return ScenarioReport(name="scalar", description=scalar_scenario.__doc__ or "", steps=steps)


async def concatenate_scenario(client: CacheClient) -> ScenarioReport:
    """Append two batches to a list, prepend a third, and fetch the result."""
    steps: list[StepRecord] = []

    await _seed_list(client, steps)

    back = await client.list_concatenate_back(LIST_KEY, ["d", "e", "f"])
    steps.append(_step("list_concatenate_back", back, describe_mutation(back)))

    front = await client.list_concatenate_front(LIST_KEY, ["g", "h", "i"])
    steps.append(_step("list_concatenate_front", front, describe_mutation(front)))

    final_list = await _fetch_list(client, steps)
    await _cleanup_list(client, steps)
    return ScenarioReport(
        name="concatenate",
        description=concatenate_scenario.__doc__ or "",
        steps=steps,
        final_list=final_list,
    )


async def pop_scenario(client: CacheClient) -> ScenarioReport:
    """Pop the last and then the first element of a three-element list."""
    steps: list[StepRecord] = []

    await _seed_list(client, steps)

    back = await client.list_pop_back(LIST_KEY)
    steps.append(_step("list_pop_back", back, describe_pop(back)))

    front = await client.list_pop_front(LIST_KEY)
    steps.append(_step("list_pop_front", front, describe_pop(front)))

    final_list = await _fetch_list(client, steps)
    await _cleanup_list(client, steps)
    return ScenarioReport(
        name="pop", description=pop_scenario.__doc__ or "", steps=steps, final_list=final_list
    )


async def push_scenario(client: CacheClient) -> ScenarioReport:
    """Push one element onto the back and one onto the front of a list."""
    steps: list[StepRecord] = []

    await _seed_list(client, steps)

    back = await client.list_push_back(LIST_KEY, "d")
    steps.append(_step("list_push_back", back, describe_push(back)))

    front = await client.list_push_front(LIST_KEY, "e")
    steps.append(_step("list_push_front", front, describe_push(front)))

    final_list = await _fetch_list(client, steps)
    await _cleanup_list(client, steps)
    return ScenarioReport(
        name="push", description=push_scenario.__doc__ or "", steps=steps, final_list=final_list
    )


async def remove_scenario(client: CacheClient) -> ScenarioReport:
    """Remove the middle value from a three-element list."""
    steps: list[StepRecord] = []

    await _seed_list(client, steps)

    removed = await client.list_remove_value(LIST_KEY, "b")
    steps.append(_step("list_remove_value", removed, describe_mutation(removed)))

    final_list = await _fetch_list(client, steps)
    await _cleanup_list(client, steps)
    return ScenarioReport(
        name="remove", description=remove_scenario.__doc__ or "", steps=steps, final_list=final_list
    )


SCENARIOS: dict[str, Callable[[CacheClient], Awaitable[ScenarioReport]]] = {
    "scalar": scalar_scenario,
    "concatenate": concatenate_scenario,
    "pop": pop_scenario,
    "push": push_scenario,
    "remove": remove_scenario,
}


async def run_scenarios(
    client: CacheClient, names: Iterable[str] | None = None
) -> list[ScenarioReport]:
    """Run the named scenarios (all of them by default) one after another.

    Raises:
        KeyError: If a name is not in :data:`SCENARIOS`.
    """
    selected = list(names) if names is not None else list(SCENARIOS)
    unknown = [name for name in selected if name not in SCENARIOS]
    if unknown:
        raise KeyError(f"Unknown scenario(s): {', '.join(unknown)}")

    reports: list[ScenarioReport] = []
    for name in selected:
        logger.info("scenario_started", scenario=name)
        report = await SCENARIOS[name](client)
        logger.info(
            "scenario_finished",
            scenario=name,
            succeeded=report.succeeded,
            steps=len(report.steps),
        )
        reports.append(report)
    return reports
