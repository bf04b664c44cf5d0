"""Global test fixtures for the invocation analyzer."""

from __future__ import annotations

from pathlib import Path

import pytest

from invocation_analyzer.core import DataManager

_CONFIG_ENV_VARS = (
    "IA_DEBUG",
    "IA_PLAINTEXT",
    "IA_OUTPUT_MODE",
    "NO_COLOR",
    "BUILD_WORKING_DIRECTORY",
)


@pytest.fixture
def data_manager() -> DataManager:
    return DataManager()


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config dir at an empty home and clear analyzer env vars."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return home
