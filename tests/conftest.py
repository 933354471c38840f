"""Shared fixtures for report gate tests."""

import json
import shutil
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from cucumber_report_gate.models.report import Feature

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> Path:
    """Directory holding the JSON report fixtures."""
    return DATA_DIR


@pytest.fixture
def report_dir(tmp_path: Path) -> Path:
    """Empty directory for reports written by a test."""
    directory = tmp_path / "reports"
    directory.mkdir()
    return directory


@pytest.fixture
def write_report(report_dir: Path) -> Callable[[str, Sequence[Feature] | str], Path]:
    """Return a function writing features (or raw text) as a report file."""

    def _write(name: str, features: Sequence[Feature] | str) -> Path:
        path = report_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(features, str):
            path.write_text(features)
        else:
            payload: list[dict[str, Any]] = [
                feature.model_dump(mode="json") for feature in features
            ]
            path.write_text(json.dumps(payload))
        return path

    return _write


@pytest.fixture
def fixture_report(report_dir: Path) -> Path:
    """Copy of the two-feature sample report inside ``report_dir``."""
    return Path(shutil.copy(DATA_DIR / "cucumber_report.json", report_dir))
