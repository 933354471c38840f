"""Read and decode Cucumber JSON report files."""

import logging
from pathlib import Path

from pydantic import ValidationError

from cucumber_report_gate.config import GateConfig
from cucumber_report_gate.errors import ReportParseError, ReportReadError
from cucumber_report_gate.features import (
    merge_features_by_id,
    sort_features_alphabetically,
)
from cucumber_report_gate.models.report import Feature, report_adapter
from cucumber_report_gate.models.result import Results
from cucumber_report_gate.statistics import compute_stats

log = logging.getLogger(__name__)


def parse_report(path: Path, *, skip_empty: bool) -> list[Feature]:
    """Decode a report file into its features.

    Args:
        path: Report file to read
        skip_empty: Treat an empty file as a report without features

    Returns:
        Features in report order

    Raises:
        ReportReadError: If the file cannot be read
        ReportParseError: If the content is not a JSON array of features
            (a top-level ``null`` is an empty report)

    """
    content = read_report_bytes(path)

    if not content and skip_empty:
        log.info("Skipping empty file: %s", path)
        return []

    try:
        features = report_adapter.validate_json(content)
    except ValidationError as e:
        raise ReportParseError(path, e) from e

    return features or []


def read_report_bytes(path: Path) -> bytes:
    """Read the raw report content."""
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise ReportReadError(path, f"file not found: {path}") from e
    except PermissionError as e:
        raise ReportReadError(path, f"permission denied for file: {path}") from e
    except OSError as e:
        raise ReportReadError(path, f"error opening file: {path}. Error: {e}") from e


def process_report_file(path: Path, config: GateConfig) -> Results:
    """Parse one report and compute its statistics.

    Features are merged by id and sorted when the configuration asks for it.
    """
    log.info("Processing file: %s", path)

    features = parse_report(path, skip_empty=config.skip_empty_json_files)

    if config.merge_features_by_id:
        features = merge_features_by_id(features)

    if config.sorting_method == "ALPHABETICAL":
        features = sort_features_alphabetically(features)

    return compute_stats(features, config.policy)
