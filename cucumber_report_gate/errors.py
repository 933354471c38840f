"""Errors raised by the report gate."""

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cucumber_report_gate.aggregator import FileFailure


class GateError(Exception):
    """Base class for every error that fails the gate."""


class ConfigError(GateError):
    """Raised when the gate configuration is invalid."""


class DiscoveryError(GateError):
    """Raised when no usable report files are found."""


class ReportError(GateError):
    """Raised when a single report file cannot be processed."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class ReportReadError(ReportError):
    """Raised when a report file cannot be read."""


class ReportParseError(ReportError):
    """Raised when a report file is not a valid Cucumber JSON report."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(
            path, f"failed to parse Cucumber JSON for file: {path}. Error: {cause}"
        )
        self.cause = cause


class AggregationError(GateError):
    """Raised when every located report file failed to process."""

    def __init__(self, failures: Sequence["FileFailure"]) -> None:
        paths = ", ".join(str(failure.path) for failure in failures)
        super().__init__(
            f"none of the {len(failures)} report file(s) could be processed: {paths}"
        )
        self.failures = failures


class ThresholdViolation(GateError):
    """Raised when an aggregate value exceeds a configured threshold."""

    def __init__(
        self, dimension: str, observed: float, limit: float, *, percentage: bool
    ) -> None:
        if percentage:
            message = (
                f"{dimension} percentage ({observed:.2f}%) "
                f"exceeds the threshold ({limit:.2f}%)"
            )
        else:
            message = f"{dimension} count ({observed}) exceeds the threshold ({limit})"
        super().__init__(message)
        self.dimension = dimension
        self.observed = observed
        self.limit = limit
        self.percentage = percentage


class BuildStoppedError(GateError):
    """Raised when failed steps stop the build regardless of thresholds."""

    def __init__(self, failed_tests: int) -> None:
        super().__init__(
            f"build failed due to failed tests. Total failed tests: {failed_tests}"
        )
        self.failed_tests = failed_tests
