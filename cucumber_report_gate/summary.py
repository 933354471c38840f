"""Console summary and CI output statistics for aggregate results."""

import logging
from collections.abc import Mapping
from pathlib import Path

from cucumber_report_gate.models.result import Results
from cucumber_report_gate.thresholds import ThresholdEvaluation

CHECK_SYMBOLS = {True: "✅", False: "❌"}

SEPARATOR = "=" * 47
DIVIDER = "-" * 47


def log_results_summary(log: logging.Logger, results: Results) -> None:
    """Log every aggregate counter followed by the failed step details."""
    log.info(SEPARATOR)
    log.info("Cucumber Test Report Summary")
    log.info(SEPARATOR)
    log.info("📁 Total Features: %d", results.feature_count)
    log.info("📄 Total Scenarios: %d", results.scenario_count)
    log.info("🔍 Total Steps: %d", results.step_count)
    log.info("❌ Total Failed Features: %d", results.total_failed_features)
    log.info("❌ Total Failed Scenarios: %d", results.total_failed_scenarios)
    log.info("❌ Total Failed Steps: %d", results.total_failed_steps)
    log.info("✅ Total Passed Features: %d", results.total_passed_features)
    log.info("✅ Total Passed Scenarios: %d", results.total_passed_scenarios)
    log.info("✅ Total Passed Steps: %d", results.total_passed_steps)
    log.info("✅ Total Passed Tests: %d", results.passed_tests)
    log.info("❌ Total Failed Tests: %d", results.failed_tests)
    log.info("⏸️ Total Skipped Tests: %d", results.skipped_tests)
    log.info("🔄 Total Pending Tests: %d", results.pending_tests)
    log.info("❓ Total Undefined Tests: %d", results.undefined_tests)
    log.info("⏱️ Total Duration: %.2f ms", results.duration_ms)
    log.info(SEPARATOR)

    if not results.failed_steps:
        return

    log.info("Failed Step Details:")
    log.info(DIVIDER)
    for index, detail in enumerate(results.failed_steps, start=1):
        log.info("%d. Feature: %s", index, detail.feature)
        log.info("   Scenario: %s", detail.scenario)
        log.info("   Step: %s", detail.step)
        log.info("   Error: %s", detail.error_message or "")
        log.info(DIVIDER)


def log_threshold_evaluation(
    log: logging.Logger, evaluation: ThresholdEvaluation
) -> None:
    """Log each performed threshold check with its outcome."""
    log.info("Threshold Validation:")
    log.info(DIVIDER)

    for check in evaluation.checks:
        symbol = CHECK_SYMBOLS[check.passed]
        if check.percentage:
            log.info(
                "%s: %.2f%% (Threshold: %.2f%%) %s",
                check.label,
                check.observed,
                check.limit,
                symbol,
            )
        else:
            log.info(
                "%s: %d (Threshold: %d) %s",
                check.label,
                check.observed,
                check.limit,
                symbol,
            )

    log.info(SEPARATOR)


def format_output_stats(results: Results) -> dict[str, str]:
    """Format aggregate results as CI output variables."""
    return {
        "FAILED_FEATURES": str(results.total_failed_features),
        "FAILED_SCENARIOS": str(results.total_failed_scenarios),
        "FAILED_STEPS": str(results.total_failed_steps),
        "PASSED_FEATURES": str(results.total_passed_features),
        "PASSED_SCENARIOS": str(results.total_passed_scenarios),
        "PASSED_STEPS": str(results.total_passed_steps),
        "SKIPPED_STEPS": str(results.skipped_tests),
        "PENDING_STEPS": str(results.pending_tests),
        "UNDEFINED_STEPS": str(results.undefined_tests),
        "TOTAL_FEATURES": str(results.feature_count),
        "TOTAL_SCENARIOS": str(results.scenario_count),
        "TOTAL_STEPS": str(results.step_count),
        "FAILURE_RATE": f"{results.failure_rate:.2f}",
        "SKIPPED_RATE": f"{results.skipped_rate:.2f}",
    }


def write_output_stats(
    log: logging.Logger, output_file: Path | None, stats: Mapping[str, str]
) -> bool:
    """Append ``KEY=VALUE`` lines to the CI output file.

    Write errors are logged and reported through the return value; they
    never fail the build.

    Returns:
        True if every line was written

    """
    if output_file is None:
        log.warning("No output file configured, statistics were not exported")
        return False

    try:
        with output_file.open("a", encoding="utf-8") as handle:
            for key, value in stats.items():
                handle.write(f"{key}={value}\n")
    except OSError as e:
        log.error("Failed to write statistics to %s: %s", output_file, e)
        return False

    log.debug("Wrote %d statistics to %s", len(stats), output_file)
    return True
