"""Test factories for report and result models."""

from polyfactory import Use
from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory

from cucumber_report_gate.models.report import Element, Feature, Step, StepResult
from cucumber_report_gate.models.result import FailedStepDetail


class StepResultFactory(ModelFactory[StepResult]):
    """Factory for StepResult."""

    status = "passed"
    duration = Use(ModelFactory.__random__.randint, 0, 5_000_000_000)
    error_message = None


class StepFactory(ModelFactory[Step]):
    """Factory for Step."""

    result = Use(StepResultFactory.build)


class ElementFactory(ModelFactory[Element]):
    """Factory for Element."""

    type = "scenario"
    steps = Use(StepFactory.batch, size=3)


class FeatureFactory(ModelFactory[Feature]):
    """Factory for Feature."""

    elements = Use(ElementFactory.batch, size=2)


class FailedStepDetailFactory(DataclassFactory[FailedStepDetail]):
    """Factory for FailedStepDetail."""

    __model__ = FailedStepDetail


def step(
    status: str,
    *,
    name: str = "a step",
    duration: int = 0,
    error_message: str | None = None,
) -> Step:
    """Build a step with the given outcome."""
    return StepFactory.build(
        name=name,
        result=StepResult(
            status=status, duration=duration, error_message=error_message
        ),
    )


def scenario(name: str, *statuses: str) -> Element:
    """Build a scenario with one step per status."""
    return ElementFactory.build(
        name=name,
        steps=[
            step(status, name=f"{name} step {i}") for i, status in enumerate(statuses)
        ],
    )
