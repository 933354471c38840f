"""Tests for threshold evaluation."""

import pytest

from cucumber_report_gate.config import GateConfig, Thresholds
from cucumber_report_gate.errors import BuildStoppedError, ThresholdViolation
from cucumber_report_gate.models.result import Results
from cucumber_report_gate.thresholds import (
    ThresholdCheck,
    check_stop_build,
    check_thresholds,
    evaluate_thresholds,
)


def test_passes_all_thresholds() -> None:
    """Passes when every value is within its limit."""
    results = Results(
        feature_count=10,
        total_failed_features=1,
        total_failed_scenarios=1,
        failed_tests=1,
        passed_tests=9,
    )
    thresholds = Thresholds(
        failed_features_number=2, failed_scenarios_number=3, failed_steps_number=5
    )

    evaluation = check_thresholds(results, thresholds)

    assert evaluation.passed
    assert [check.dimension for check in evaluation.checks] == [
        "failed features",
        "failed scenarios",
        "failed steps",
    ]


def test_failed_features_exceed_threshold() -> None:
    """Reports the failed feature count against its limit."""
    results = Results(feature_count=10, total_failed_features=5, failed_tests=5)

    with pytest.raises(ThresholdViolation) as exc_info:
        check_thresholds(results, Thresholds(failed_features_number=4))

    assert str(exc_info.value) == "failed features count (5) exceeds the threshold (4)"
    assert exc_info.value.dimension == "failed features"
    assert exc_info.value.observed == 5
    assert exc_info.value.limit == 4
    assert exc_info.value.percentage is False


def test_failed_steps_percentage_exceeds() -> None:
    """Formats percentage violations with two decimals."""
    results = Results(step_count=100, failed_tests=21)

    with pytest.raises(
        ThresholdViolation,
        match=r"failed steps percentage \(21\.00%\) exceeds the threshold \(20\.00%\)",
    ):
        check_thresholds(results, Thresholds(failed_steps_percentage=20.0))


def test_feature_and_scenario_limits_use_their_own_counters() -> None:
    """Feature and scenario limits ignore the step-level failure count."""
    results = Results(
        feature_count=4,
        scenario_count=10,
        step_count=40,
        failed_tests=12,
        total_failed_features=1,
        total_failed_scenarios=2,
    )
    thresholds = Thresholds(
        failed_features_number=1,
        failed_scenarios_number=2,
        failed_features_percentage=25.0,
        failed_scenarios_percentage=20.0,
    )

    evaluation = evaluate_thresholds(results, thresholds)

    assert evaluation.passed
    assert [check.observed for check in evaluation.checks] == [1, 2, 25.0, 20.0]


def test_limit_equal_to_observed_passes() -> None:
    """Only values strictly above the limit violate it."""
    results = Results(step_count=10, skipped_tests=2)

    evaluation = evaluate_thresholds(
        results, Thresholds(skipped_steps_number=2, skipped_steps_percentage=20.0)
    )

    assert evaluation.passed
    assert len(evaluation.checks) == 2


def test_zero_limits_are_inactive() -> None:
    """No checks run when no limit is configured."""
    results = Results(step_count=10, failed_tests=10, pending_tests=5)

    evaluation = evaluate_thresholds(results, Thresholds())

    assert evaluation.checks == []
    assert evaluation.passed


def test_zero_steps_never_violate_percentages() -> None:
    """Percentages of an empty total are 0% rather than NaN."""
    thresholds = Thresholds(
        failed_features_percentage=0.5,
        failed_scenarios_percentage=0.5,
        failed_steps_percentage=0.5,
        pending_steps_percentage=0.5,
        skipped_steps_percentage=0.5,
        undefined_steps_percentage=0.5,
    )

    evaluation = evaluate_thresholds(Results(), thresholds)

    assert evaluation.passed
    assert len(evaluation.checks) == 6
    assert all(check.observed == 0.0 for check in evaluation.checks)


def test_stops_at_first_violation() -> None:
    """Evaluation short-circuits on the first violated limit."""
    results = Results(
        step_count=10, failed_tests=3, pending_tests=4, undefined_tests=5
    )
    thresholds = Thresholds(
        failed_steps_number=5,
        pending_steps_number=1,
        undefined_steps_number=1,
    )

    evaluation = evaluate_thresholds(results, thresholds)

    assert [check.dimension for check in evaluation.checks] == [
        "failed steps",
        "pending steps",
    ]
    assert evaluation.violation == ThresholdCheck(
        dimension="pending steps", observed=4, limit=1, percentage=False
    )


def test_evaluation_order() -> None:
    """Counts come before percentages for failures, then pending, skipped, undefined."""
    thresholds = Thresholds(
        failed_features_number=100,
        failed_features_percentage=100.0,
        failed_scenarios_number=100,
        failed_scenarios_percentage=100.0,
        failed_steps_number=100,
        failed_steps_percentage=100.0,
        pending_steps_number=100,
        pending_steps_percentage=100.0,
        skipped_steps_number=100,
        skipped_steps_percentage=100.0,
        undefined_steps_number=100,
        undefined_steps_percentage=100.0,
    )

    evaluation = evaluate_thresholds(Results(), thresholds)

    assert [check.label for check in evaluation.checks] == [
        "Failed Features Count",
        "Failed Scenarios Count",
        "Failed Steps Count",
        "Failed Features Percentage",
        "Failed Scenarios Percentage",
        "Failed Steps Percentage",
        "Pending Steps Count",
        "Pending Steps Percentage",
        "Skipped Steps Count",
        "Skipped Steps Percentage",
        "Undefined Steps Count",
        "Undefined Steps Percentage",
    ]


@pytest.mark.parametrize(
    ("results", "thresholds", "message"),
    [
        (
            Results(step_count=10, pending_tests=3),
            Thresholds(pending_steps_percentage=25.0),
            "pending steps percentage (30.00%) exceeds the threshold (25.00%)",
        ),
        (
            Results(step_count=10, skipped_tests=3),
            Thresholds(skipped_steps_number=2),
            "skipped steps count (3) exceeds the threshold (2)",
        ),
        (
            Results(step_count=3, undefined_tests=1),
            Thresholds(undefined_steps_percentage=33.0),
            "undefined steps percentage (33.33%) exceeds the threshold (33.00%)",
        ),
        (
            Results(scenario_count=4, total_failed_scenarios=3),
            Thresholds(failed_scenarios_percentage=50.0),
            "failed scenarios percentage (75.00%) exceeds the threshold (50.00%)",
        ),
    ],
)
def test_violation_messages(
    results: Results, thresholds: Thresholds, message: str
) -> None:
    """Violation messages name the dimension, value and limit."""
    with pytest.raises(ThresholdViolation) as exc_info:
        check_thresholds(results, thresholds)

    assert str(exc_info.value) == message


class TestCheckStopBuild:
    """Tests for check_stop_build function."""

    def test_stops_on_failed_steps(self) -> None:
        """Raises when enabled and a step failed."""
        config = GateConfig(stop_build_on_failed_report=True)

        with pytest.raises(
            BuildStoppedError, match="Total failed tests: 2"
        ) as exc_info:
            check_stop_build(Results(failed_tests=2), config)

        assert exc_info.value.failed_tests == 2

    def test_ignores_failures_when_disabled(self) -> None:
        """Does nothing when the option is off."""
        check_stop_build(Results(failed_tests=2), GateConfig())

    def test_passes_without_failures(self) -> None:
        """Does nothing when no step failed."""
        config = GateConfig(stop_build_on_failed_report=True)

        check_stop_build(Results(step_count=5, passed_tests=5), config)
