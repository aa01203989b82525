"""Integration tests: the demo scenarios against the in-process backend."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from cachedemo.models.outcomes import (
    CacheGet,
    CacheListPopBack,
    CacheListPushFront,
    CacheSet,
    ErrorDetail,
    OutcomeTag,
)
from cachedemo.services.cache_client import CacheClient
from cachedemo.services.demo_scenarios import (
    SCENARIOS,
    describe_get,
    describe_mutation,
    describe_pop,
    describe_push,
    run_scenarios,
)
from cachedemo.utils.errors import ErrorCode, ProviderUnavailableError


class TestScenarios:
    @pytest.mark.asyncio
    async def test_scalar(self, client: CacheClient) -> None:
        [report] = await run_scenarios(client, ["scalar"])
        assert report.succeeded
        assert [s.operation for s in report.steps] == ["set", "get", "delete"]
        assert report.steps[1].tag == OutcomeTag.HIT
        assert report.steps[1].summary == "value='Hello_world'"
        assert isinstance(await client.get("my_key"), CacheGet.Miss)

    @pytest.mark.asyncio
    async def test_concatenate(self, client: CacheClient) -> None:
        [report] = await run_scenarios(client, ["concatenate"])
        assert report.succeeded
        assert report.final_list == ["g", "h", "i", "a", "b", "c", "d", "e", "f"]

    @pytest.mark.asyncio
    async def test_pop(self, client: CacheClient) -> None:
        [report] = await run_scenarios(client, ["pop"])
        summaries = {s.operation: s.summary for s in report.steps}
        assert summaries["list_pop_back"] == "removed value='c'"
        assert summaries["list_pop_front"] == "removed value='a'"
        assert report.final_list == ["b"]

    @pytest.mark.asyncio
    async def test_push(self, client: CacheClient) -> None:
        [report] = await run_scenarios(client, ["push"])
        summaries = {s.operation: s.summary for s in report.steps}
        assert summaries["list_push_back"] == "list_length=4"
        assert summaries["list_push_front"] == "list_length=5"
        assert report.final_list == ["e", "a", "b", "c", "d"]

    @pytest.mark.asyncio
    async def test_remove(self, client: CacheClient) -> None:
        [report] = await run_scenarios(client, ["remove"])
        assert report.final_list == ["a", "c"]

    @pytest.mark.asyncio
    async def test_all_scenarios_leave_cache_clean(self, client: CacheClient) -> None:
        reports = await run_scenarios(client)
        assert [r.name for r in reports] == list(SCENARIOS)
        assert all(r.succeeded for r in reports)
        assert (await client.list_fetch("my_list_key")).tag == OutcomeTag.MISS

    @pytest.mark.asyncio
    async def test_unknown_scenario(self, client: CacheClient) -> None:
        with pytest.raises(KeyError):
            await run_scenarios(client, ["nope"])


class TestScenarioFailures:
    @pytest.mark.asyncio
    async def test_errors_are_recorded_not_raised(
        self, mock_client: CacheClient, mock_backend: MagicMock
    ) -> None:
        mock_backend.list_concatenate_back.side_effect = ProviderUnavailableError()
        [report] = await run_scenarios(mock_client, ["remove"])
        assert not report.succeeded
        assert report.errors[0].operation == "list_concatenate_back"
        assert report.errors[0].summary.startswith("SERVER_UNAVAILABLE")
        # The scenario still cleans up after the failure.
        assert report.steps[-1].operation == "delete"
        assert report.final_list is None


class TestDescribe:
    def test_describe_get_variants(self) -> None:
        assert describe_get(CacheGet.Miss()) == "key not found"
        error = CacheGet.Error(ErrorDetail("slow", ErrorCode.TIMEOUT_ERROR))
        assert describe_get(error) == "TIMEOUT_ERROR: slow"

    def test_describe_pop_and_push(self) -> None:
        assert describe_pop(CacheListPopBack.Miss()) == "list empty or not found"
        assert describe_push(CacheListPushFront.Success(2)) == "list_length=2"

    def test_describe_mutation(self) -> None:
        assert describe_mutation(CacheSet.Success()) == "ok"
