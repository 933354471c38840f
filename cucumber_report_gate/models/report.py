"""Models for the Cucumber JSON report format."""

from collections.abc import Sequence

from pydantic import Field, TypeAdapter

from cucumber_report_gate.models.base import Model


class StepResult(Model):
    """Outcome of a single step execution."""

    status: str = Field(default="", description="Step status (e.g. 'passed')")
    duration: int = Field(default=0, description="Step duration in nanoseconds")
    error_message: str | None = Field(
        default=None, description="Failure message reported by the runner"
    )


class Step(Model):
    """A single step in a scenario."""

    keyword: str = ""
    name: str = ""
    line: int = 0
    result: StepResult = Field(default_factory=StepResult)


class Element(Model):
    """A scenario or scenario outline example."""

    id: str = ""
    keyword: str = ""
    name: str = ""
    description: str = ""
    line: int = 0
    type: str = Field(default="", description="Element type (e.g. 'scenario')")
    steps: Sequence[Step] = Field(default_factory=list)


class Feature(Model):
    """A feature file entry in the report."""

    id: str = Field(default="", description="Stable identifier, used for merging")
    uri: str = ""
    keyword: str = ""
    name: str = ""
    description: str = ""
    line: int = 0
    elements: Sequence[Element] = Field(default_factory=list)


report_adapter: TypeAdapter[list[Feature] | None] = TypeAdapter(
    list[Feature] | None
)
