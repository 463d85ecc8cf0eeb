"""
Pytest configuration and fixtures for Vision Report.
"""

import base64
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from vision_report.core.config import CONFIG_ENV_VAR

# 1x1 PNG
PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
PNG_BYTES = base64.b64decode(PNG_BASE64)


class StepClock:
    """Deterministic clock advancing by a fixed step on every call."""

    def __init__(self, start: datetime = datetime(2024, 5, 17, 9, 30, 0), step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty directory with no config file override."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()


@pytest.fixture
def png_base64() -> str:
    return PNG_BASE64


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "screenshot.png"
    path.write_bytes(PNG_BYTES)
    return path
