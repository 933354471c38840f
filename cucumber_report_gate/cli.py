"""CLI entry point for the Cucumber report gate."""

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from cucumber_report_gate.aggregator import ReportAggregator
from cucumber_report_gate.config import LOG_LEVELS, GateConfig
from cucumber_report_gate.errors import ConfigError, GateError
from cucumber_report_gate.locator import locate_files
from cucumber_report_gate.summary import (
    format_output_stats,
    log_results_summary,
    log_threshold_evaluation,
    write_output_stats,
)
from cucumber_report_gate.thresholds import (
    check_stop_build,
    evaluate_thresholds,
)

OUTPUT_FILE_ENV = "DRONE_OUTPUT"


async def run(config: GateConfig, output_file: Path | None = None) -> int:
    """Aggregate the configured reports and return exit code."""
    log = logging.getLogger("cucumber_report_gate")

    try:
        await evaluate(log, config, output_file)
    except GateError as e:
        log.error("%s", e)
        return 1

    return 0


async def evaluate(
    log: logging.Logger, config: GateConfig, output_file: Path | None
) -> None:
    """Run the whole pipeline, raising on the first fatal error.

    Raises:
        GateError: If discovery, aggregation or any gate fails

    """
    log.info(
        "Locating reports in %s (include=%s, exclude=%s)",
        config.report_directory,
        config.file_include_pattern,
        config.file_exclude_pattern,
    )
    files = locate_files(
        config.report_directory,
        config.file_include_pattern,
        config.file_exclude_pattern,
    )

    aggregator = ReportAggregator(config=config)
    outcome = await aggregator.aggregate(files)
    results = outcome.results

    log_results_summary(log, results)
    write_output_stats(log, output_file, format_output_stats(results))

    check_stop_build(results, config)

    evaluation = evaluate_thresholds(results, config.thresholds)
    log_threshold_evaluation(log, evaluation)
    if (violation := evaluation.violation) is not None:
        log.error(
            "Feature Count=%d Scenario Count=%d Step Count=%d Failed=%d "
            "Skipped=%d Pending=%d Undefined=%d",
            results.feature_count,
            results.scenario_count,
            results.step_count,
            results.failed_tests,
            results.skipped_tests,
            results.pending_tests,
            results.undefined_tests,
        )
        raise violation.to_violation()


def load_config(
    environ: Mapping[str, str], report_directory: Path | None = None
) -> GateConfig:
    """Load configuration from the environment, applying CLI overrides.

    Raises:
        ConfigError: If the configuration is invalid

    """
    config = GateConfig.from_env(environ)
    if report_directory is not None:
        config = config.model_copy(update={"report_directory": report_directory})
    return config


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description=(
            "Aggregate Cucumber JSON reports and fail the build when thresholds "
            "are exceeded. Settings are read from PLUGIN_* environment variables."
        )
    )
    parser.add_argument(
        "--report-directory",
        type=Path,
        default=None,
        help="Report directory (overrides PLUGIN_JSON_REPORT_DIRECTORY)",
    )
    parser.add_argument(
        "--output-file",
        type=Path,
        default=None,
        help=f"File receiving KEY=VALUE statistics (default: ${OUTPUT_FILE_ENV})",
    )
    parser.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS),
        default=None,
        help="Log level (overrides PLUGIN_LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def main() -> None:
    """CLI entry point."""
    args = parse_args()

    try:
        config = load_config(os.environ, args.report_directory)
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr)
        logging.getLogger("cucumber_report_gate").error("%s", e)
        sys.exit(1)

    level_name = (args.log_level or config.log_level).lower()
    logging.basicConfig(
        level=LOG_LEVELS[level_name],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    output_file = args.output_file
    if output_file is None and os.environ.get(OUTPUT_FILE_ENV):
        output_file = Path(os.environ[OUTPUT_FILE_ENV])

    exit_code = asyncio.run(run(config, output_file))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
