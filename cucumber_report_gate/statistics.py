"""Compute step, scenario and feature statistics from parsed reports."""

from collections.abc import Sequence

from cucumber_report_gate.config import StatusPolicy
from cucumber_report_gate.models.report import Element, Feature, Step
from cucumber_report_gate.models.result import FailedStepDetail, Results

NANOSECONDS_PER_MILLISECOND = 1_000_000


def compute_stats(features: Sequence[Feature], policy: StatusPolicy) -> Results:
    """Walk the feature tree and count every step by status.

    Every visited step counts towards ``step_count``. A failed step only
    counts as failing (and only fails its scenario and feature) when
    ``policy.failed_as_not_failing`` is unset; with the flag set it is
    counted nowhere else. The skipped, pending and undefined flags suppress
    their own counter and never affect scenario or feature outcomes.
    """
    results = Results()

    for feature in features:
        results.feature_count += 1
        feature_failed = False

        for element in feature.elements:
            if _count_scenario(results, feature, element, policy):
                feature_failed = True

        if feature_failed:
            results.total_failed_features += 1
        else:
            results.total_passed_features += 1

    return results


def _count_scenario(
    results: Results, feature: Feature, element: Element, policy: StatusPolicy
) -> bool:
    """Count one scenario's steps and return whether the scenario failed."""
    results.scenario_count += 1
    scenario_failed = False

    for step in element.steps:
        if _count_step(results, step, policy):
            scenario_failed = True
            results.failed_steps.append(
                FailedStepDetail(
                    feature=feature.name,
                    scenario=element.name,
                    step=step.name,
                    error_message=step.result.error_message,
                )
            )

    if scenario_failed:
        results.total_failed_scenarios += 1
    else:
        results.total_passed_scenarios += 1

    return scenario_failed


def _count_step(results: Results, step: Step, policy: StatusPolicy) -> bool:
    """Count one step and return whether it took the failing path."""
    results.step_count += 1
    results.duration_ms += step.result.duration / NANOSECONDS_PER_MILLISECOND
    failing = False

    match step.result.status:
        case "passed":
            results.passed_tests += 1
            results.total_passed_steps += 1
        case "failed":
            if not policy.failed_as_not_failing:
                results.failed_tests += 1
                results.total_failed_steps += 1
                failing = True
        case "skipped":
            if not policy.skipped_as_not_failing:
                results.skipped_tests += 1
        case "pending":
            if not policy.pending_as_not_failing:
                results.pending_tests += 1
        case "undefined":
            if not policy.undefined_as_not_failing:
                results.undefined_tests += 1

    return failing
