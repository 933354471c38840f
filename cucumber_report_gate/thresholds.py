"""Evaluation of configured limits against aggregate results."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from cucumber_report_gate.config import GateConfig, Thresholds
from cucumber_report_gate.errors import BuildStoppedError, ThresholdViolation
from cucumber_report_gate.models.result import Results, percentage


@dataclass(frozen=True, kw_only=True)
class ThresholdCheck:
    """Outcome of one active limit."""

    dimension: str
    observed: float
    limit: float
    percentage: bool

    @property
    def passed(self) -> bool:
        """Whether the observed value stays within the limit."""
        return self.observed <= self.limit

    @property
    def label(self) -> str:
        """Human-readable name of the checked value."""
        suffix = "Percentage" if self.percentage else "Count"
        return f"{self.dimension.title()} {suffix}"

    def to_violation(self) -> ThresholdViolation:
        """Build the error describing this check's violation."""
        return ThresholdViolation(
            self.dimension, self.observed, self.limit, percentage=self.percentage
        )


@dataclass(frozen=True, kw_only=True)
class ThresholdEvaluation:
    """Checks performed up to and including the first violation."""

    checks: Sequence[ThresholdCheck] = field(default_factory=list)

    @property
    def violation(self) -> ThresholdCheck | None:
        """The violating check, if evaluation stopped on one."""
        if self.checks and not self.checks[-1].passed:
            return self.checks[-1]
        return None

    @property
    def passed(self) -> bool:
        """Whether every active limit was respected."""
        return self.violation is None


@dataclass(frozen=True, kw_only=True)
class _Dimension:
    name: str
    counter: Callable[[Results], int]
    total: Callable[[Results], int]
    number_limit: Callable[[Thresholds], int]
    percentage_limit: Callable[[Thresholds], float]


FAILED_FEATURES = _Dimension(
    name="failed features",
    counter=lambda r: r.total_failed_features,
    total=lambda r: r.feature_count,
    number_limit=lambda t: t.failed_features_number,
    percentage_limit=lambda t: t.failed_features_percentage,
)
FAILED_SCENARIOS = _Dimension(
    name="failed scenarios",
    counter=lambda r: r.total_failed_scenarios,
    total=lambda r: r.scenario_count,
    number_limit=lambda t: t.failed_scenarios_number,
    percentage_limit=lambda t: t.failed_scenarios_percentage,
)
FAILED_STEPS = _Dimension(
    name="failed steps",
    counter=lambda r: r.failed_tests,
    total=lambda r: r.step_count,
    number_limit=lambda t: t.failed_steps_number,
    percentage_limit=lambda t: t.failed_steps_percentage,
)
PENDING_STEPS = _Dimension(
    name="pending steps",
    counter=lambda r: r.pending_tests,
    total=lambda r: r.step_count,
    number_limit=lambda t: t.pending_steps_number,
    percentage_limit=lambda t: t.pending_steps_percentage,
)
SKIPPED_STEPS = _Dimension(
    name="skipped steps",
    counter=lambda r: r.skipped_tests,
    total=lambda r: r.step_count,
    number_limit=lambda t: t.skipped_steps_number,
    percentage_limit=lambda t: t.skipped_steps_percentage,
)
UNDEFINED_STEPS = _Dimension(
    name="undefined steps",
    counter=lambda r: r.undefined_tests,
    total=lambda r: r.step_count,
    number_limit=lambda t: t.undefined_steps_number,
    percentage_limit=lambda t: t.undefined_steps_percentage,
)

# (dimension, is_percentage) in evaluation order
EVALUATION_ORDER: Sequence[tuple[_Dimension, bool]] = (
    (FAILED_FEATURES, False),
    (FAILED_SCENARIOS, False),
    (FAILED_STEPS, False),
    (FAILED_FEATURES, True),
    (FAILED_SCENARIOS, True),
    (FAILED_STEPS, True),
    (PENDING_STEPS, False),
    (PENDING_STEPS, True),
    (SKIPPED_STEPS, False),
    (SKIPPED_STEPS, True),
    (UNDEFINED_STEPS, False),
    (UNDEFINED_STEPS, True),
)


def evaluate_thresholds(
    results: Results, thresholds: Thresholds
) -> ThresholdEvaluation:
    """Check active limits in order, stopping at the first violation.

    A limit is active when it is greater than zero. Percentages of an empty
    total are 0.0.
    """
    checks: list[ThresholdCheck] = []

    for dimension, is_percentage in EVALUATION_ORDER:
        if is_percentage:
            limit: float = dimension.percentage_limit(thresholds)
            observed: float = percentage(
                dimension.counter(results), dimension.total(results)
            )
        else:
            limit = dimension.number_limit(thresholds)
            observed = dimension.counter(results)

        if limit <= 0:
            continue

        check = ThresholdCheck(
            dimension=dimension.name,
            observed=observed,
            limit=limit,
            percentage=is_percentage,
        )
        checks.append(check)
        if not check.passed:
            break

    return ThresholdEvaluation(checks=checks)


def check_thresholds(results: Results, thresholds: Thresholds) -> ThresholdEvaluation:
    """Evaluate thresholds and raise on the first violation.

    Raises:
        ThresholdViolation: If any active limit is exceeded

    """
    evaluation = evaluate_thresholds(results, thresholds)
    if (violation := evaluation.violation) is not None:
        raise violation.to_violation()
    return evaluation


def check_stop_build(results: Results, config: GateConfig) -> None:
    """Stop the build on any failing step when configured to.

    This gate takes precedence over every threshold.

    Raises:
        BuildStoppedError: If enabled and at least one step failed

    """
    if config.stop_build_on_failed_report and results.failed_tests > 0:
        raise BuildStoppedError(results.failed_tests)
