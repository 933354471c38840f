"""Models for aggregated report statistics."""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class FailedStepDetail:
    """Location and message of a step that counted as failing."""

    feature: str
    scenario: str
    step: str
    error_message: str | None = None


@dataclass(kw_only=True)
class Results:
    """Step, scenario and feature counters for one or more reports.

    A zero-valued instance is the identity for ``add``, so per-file results
    can be folded into an aggregate in any grouping.
    """

    feature_count: int = 0
    scenario_count: int = 0
    step_count: int = 0
    passed_tests: int = 0
    failed_tests: int = 0
    skipped_tests: int = 0
    pending_tests: int = 0
    undefined_tests: int = 0
    duration_ms: float = 0.0
    failed_steps: list[FailedStepDetail] = field(default_factory=list)
    total_failed_features: int = 0
    total_passed_features: int = 0
    total_failed_scenarios: int = 0
    total_passed_scenarios: int = 0
    total_failed_steps: int = 0
    total_passed_steps: int = 0

    def add(self, other: "Results") -> None:
        """Fold another result set into this one by field-wise summation."""
        self.feature_count += other.feature_count
        self.scenario_count += other.scenario_count
        self.step_count += other.step_count
        self.passed_tests += other.passed_tests
        self.failed_tests += other.failed_tests
        self.skipped_tests += other.skipped_tests
        self.pending_tests += other.pending_tests
        self.undefined_tests += other.undefined_tests
        self.duration_ms += other.duration_ms
        self.failed_steps.extend(other.failed_steps)
        self.total_failed_features += other.total_failed_features
        self.total_passed_features += other.total_passed_features
        self.total_failed_scenarios += other.total_failed_scenarios
        self.total_passed_scenarios += other.total_passed_scenarios
        self.total_failed_steps += other.total_failed_steps
        self.total_passed_steps += other.total_passed_steps

    @property
    def failure_rate(self) -> float:
        """Percentage of steps that counted as failing."""
        return percentage(self.failed_tests, self.step_count)

    @property
    def skipped_rate(self) -> float:
        """Percentage of steps that counted as skipped."""
        return percentage(self.skipped_tests, self.step_count)


def percentage(part: int, total: int) -> float:
    """Return ``part`` as a percentage of ``total``, or 0.0 for an empty total."""
    if total <= 0:
        return 0.0
    return part / total * 100
