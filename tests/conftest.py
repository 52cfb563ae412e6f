"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_STOREKEY_ENV_VARS = ("STOREKEY_LAYOUT_PATH", "STOREKEY_SS58_FORMAT", "STOREKEY_LOG_LEVEL")


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def isolated_storekey_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear storekey environment overrides so tests see defaults."""
    for variable in _STOREKEY_ENV_VARS:
        monkeypatch.delenv(variable, raising=False)
