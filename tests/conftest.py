"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from apathy.core.config import cached_config


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Point XDG_CONFIG_HOME at an empty directory and clear APATHY_* overrides.

    Keeps a developer's real ~/.config/apathy/config.toml out of the tests,
    and drops any configuration cached by a previous test.
    """
    config_home = tmp_path_factory.mktemp("xdg_config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("APATHY_LOG_LEVEL", raising=False)
    monkeypatch.delenv("APATHY_MAX_DEPTH", raising=False)
    cached_config.cache_clear()
    yield config_home
    cached_config.cache_clear()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside a fresh empty working directory."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work
