"""Report models produced by the demo scenarios.

A scenario records one ``StepRecord`` per cache call it awaits, in call
order.  Reports are frozen so the CLI can render them as text or dump them
as JSON via ``model_dump(mode="json")``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from cachedemo.models.outcomes import OutcomeTag


class StepRecord(BaseModel):
    """One awaited cache call and the variant it returned."""

    model_config = ConfigDict(frozen=True)

    operation: str
    tag: OutcomeTag
    # Variant-specific detail, e.g. "value='c'" or "list_length=4".
    summary: str = ""


class ScenarioReport(BaseModel):
    """Everything one scenario did, in order."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    steps: list[StepRecord] = Field(default_factory=list)
    # Contents of the list fetched at the end of a list scenario, or None
    # when the scenario fetches nothing or the fetch missed.
    final_list: list[str] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        return all(step.tag != OutcomeTag.ERROR for step in self.steps)

    @property
    def errors(self) -> list[StepRecord]:
        return [step for step in self.steps if step.tag == OutcomeTag.ERROR]
