"""Configuration for the report gate, loaded from plugin environment variables."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cucumber_report_gate.errors import ConfigError

ENV_PREFIX = "PLUGIN_"
DEFAULT_INCLUDE_PATTERN = "**/*.json"

LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

type SortingMethod = Literal["NATURAL", "ALPHABETICAL"]


class StatusPolicy(BaseModel):
    """Which step statuses are excluded from their failing counters."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    failed_as_not_failing: bool = Field(
        default=False, alias="PLUGIN_FAILED_AS_NOT_FAILING_STATUS"
    )
    skipped_as_not_failing: bool = Field(
        default=False, alias="PLUGIN_SKIPPED_AS_NOT_FAILING_STATUS"
    )
    pending_as_not_failing: bool = Field(
        default=False, alias="PLUGIN_PENDING_AS_NOT_FAILING_STATUS"
    )
    undefined_as_not_failing: bool = Field(
        default=False, alias="PLUGIN_UNDEFINED_AS_NOT_FAILING_STATUS"
    )


class Thresholds(BaseModel):
    """Absolute and percentage limits; zero disables a limit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    failed_features_number: int = Field(
        default=0, alias="PLUGIN_FAILED_FEATURES_NUMBER"
    )
    failed_features_percentage: float = Field(
        default=0.0, alias="PLUGIN_FAILED_FEATURES_PERCENTAGE"
    )
    failed_scenarios_number: int = Field(
        default=0, alias="PLUGIN_FAILED_SCENARIOS_NUMBER"
    )
    failed_scenarios_percentage: float = Field(
        default=0.0, alias="PLUGIN_FAILED_SCENARIOS_PERCENTAGE"
    )
    failed_steps_number: int = Field(default=0, alias="PLUGIN_FAILED_STEPS_NUMBER")
    failed_steps_percentage: float = Field(
        default=0.0, alias="PLUGIN_FAILED_STEPS_PERCENTAGE"
    )
    pending_steps_number: int = Field(default=0, alias="PLUGIN_PENDING_STEPS_NUMBER")
    pending_steps_percentage: float = Field(
        default=0.0, alias="PLUGIN_PENDING_STEPS_PERCENTAGE"
    )
    skipped_steps_number: int = Field(default=0, alias="PLUGIN_SKIPPED_STEPS_NUMBER")
    skipped_steps_percentage: float = Field(
        default=0.0, alias="PLUGIN_SKIPPED_STEPS_PERCENTAGE"
    )
    undefined_steps_number: int = Field(
        default=0, alias="PLUGIN_UNDEFINED_STEPS_NUMBER"
    )
    undefined_steps_percentage: float = Field(
        default=0.0, alias="PLUGIN_UNDEFINED_STEPS_PERCENTAGE"
    )

    @field_validator("*")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("threshold values must be non-negative")
        return value


class GateConfig(BaseModel):
    """Complete gate configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    report_directory: Path = Field(
        default=Path("."), alias="PLUGIN_JSON_REPORT_DIRECTORY"
    )
    file_include_pattern: str = Field(
        default=DEFAULT_INCLUDE_PATTERN, alias="PLUGIN_FILE_INCLUDE_PATTERN"
    )
    file_exclude_pattern: str | None = Field(
        default=None, alias="PLUGIN_FILE_EXCLUDE_PATTERN"
    )
    skip_empty_json_files: bool = Field(
        default=False, alias="PLUGIN_SKIP_EMPTY_JSON_FILES"
    )
    merge_features_by_id: bool = Field(
        default=False, alias="PLUGIN_MERGE_FEATURES_BY_ID"
    )
    sorting_method: SortingMethod = Field(
        default="NATURAL", alias="PLUGIN_SORTING_METHOD"
    )
    stop_build_on_failed_report: bool = Field(
        default=False, alias="PLUGIN_STOP_BUILD_ON_FAILED_REPORT"
    )
    log_level: str = Field(default="info", alias="PLUGIN_LOG_LEVEL")
    policy: StatusPolicy = Field(default_factory=StatusPolicy)
    thresholds: Thresholds = Field(default_factory=Thresholds)

    @field_validator("sorting_method", mode="before")
    @classmethod
    def _normalise_sorting_method(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"unknown log level {value!r}, expected one of: "
                + ", ".join(sorted(LOG_LEVELS))
            )
        return level

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "GateConfig":
        """Build the configuration from ``PLUGIN_*`` environment variables.

        Empty values are treated as unset so that CI systems exporting every
        plugin setting still get the defaults.

        Raises:
            ConfigError: If any value fails validation

        """
        values = {
            key: value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX) and value.strip()
        }
        return cls.validate_settings({**values, "policy": values, "thresholds": values})

    @classmethod
    def validate_settings(cls, data: Mapping[str, object]) -> "GateConfig":
        """Validate raw settings, converting validation failures to ConfigError."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(format_validation_error(e)) from e


def format_validation_error(error: ValidationError) -> str:
    """Render every validation problem on one line."""
    problems = [
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    ]
    return "invalid configuration: " + "; ".join(problems)
