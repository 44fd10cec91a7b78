"""Shared pytest fixtures for resibo tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from resibo.runtime.paths import reset_paths


@pytest.fixture
def resibo_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point RESIBO_HOME at a temporary directory for the duration of a test."""
    monkeypatch.setenv("RESIBO_HOME", str(tmp_path))
    reset_paths()
    yield tmp_path
    reset_paths()
