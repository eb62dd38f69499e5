"""Unit tests for ApathyConfig and related functions.

Tests for the configuration module that provides the Pydantic model
and TOML I/O functions for apathy defaults.
"""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from apathy.core.config import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MODE,
    ApathyConfig,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    cached_config,
    get_config,
    load_config,
    save_config,
)
from apathy.core.paths import get_config_path
from pydantic import ValidationError


class TestApathyConfig:
    """Tests for ApathyConfig Pydantic model."""

    def test_default_values(self) -> None:
        """ApathyConfig has correct default values."""
        config = ApathyConfig()

        assert config.default_mode == 0o777
        assert config.max_depth == 256
        assert config.log_level == "WARNING"

    def test_custom_values(self) -> None:
        """ApathyConfig accepts custom values."""
        config = ApathyConfig(default_mode=0o755, max_depth=10, log_level="DEBUG")

        assert config.default_mode == 0o755
        assert config.max_depth == 10
        assert config.log_level == "DEBUG"

    def test_max_depth_minimum_validation(self) -> None:
        """ApathyConfig validates minimum depth."""
        with pytest.raises(ValidationError):
            ApathyConfig(max_depth=0)

    def test_mode_range_validation(self) -> None:
        """ApathyConfig rejects modes beyond 0o7777."""
        with pytest.raises(ValidationError):
            ApathyConfig(default_mode=0o10000)

    def test_invalid_log_level(self) -> None:
        """ApathyConfig rejects unknown log levels."""
        with pytest.raises(ValidationError):
            ApathyConfig(log_level="LOUD")  # type: ignore[arg-type]

    def test_extra_fields_forbidden(self) -> None:
        """ApathyConfig rejects unknown fields."""
        with pytest.raises(ValidationError):
            ApathyConfig(unknown_field="value")  # type: ignore[call-arg]


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """load_config loads a valid TOML file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('max_depth = 32\nlog_level = "INFO"\n')

        config = load_config(config_file)

        assert config.max_depth == 32
        assert config.log_level == "INFO"
        assert config.default_mode == DEFAULT_MODE

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """load_config raises ConfigNotFoundError for a missing file."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_load_invalid_toml(self, tmp_path: Path) -> None:
        """load_config raises ConfigParseError for invalid syntax."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("max_depth = = 3")

        with pytest.raises(ConfigParseError):
            load_config(config_file)

    def test_load_invalid_content(self, tmp_path: Path) -> None:
        """load_config raises ConfigError for schema violations."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("max_depth = -1\n")

        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables take precedence over file values."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('max_depth = 32\nlog_level = "INFO"\n')
        monkeypatch.setenv("APATHY_MAX_DEPTH", "8")
        monkeypatch.setenv("APATHY_LOG_LEVEL", "debug")

        config = load_config(config_file)

        assert config.max_depth == 8
        assert config.log_level == "DEBUG"

    def test_invalid_env_keeps_file_values(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An invalid override is dropped without discarding the file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('max_depth = 32\nlog_level = "INFO"\n')
        monkeypatch.setenv("APATHY_MAX_DEPTH", "many")

        with patch("apathy.core.config.logger") as mock_logger:
            config = get_config(config_file)

        assert config.max_depth == 32
        assert config.log_level == "INFO"
        mock_logger.warning.assert_called_once()
        assert "environment overrides" in mock_logger.warning.call_args.args[0]

    def test_uses_default_path(self) -> None:
        """load_config reads from the XDG config path by default."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text("max_depth = 12\n")

        assert load_config().max_depth == 12


class TestGetConfig:
    """Tests for get_config fallback behavior."""

    def test_defaults_without_file(self) -> None:
        """get_config returns defaults when no file exists."""
        assert get_config() == ApathyConfig()

    def test_defaults_on_invalid_file(self, tmp_path: Path) -> None:
        """get_config falls back to defaults for a broken file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("not toml ][")

        assert get_config(config_file) == ApathyConfig()

    def test_env_applies_without_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment overrides apply even without a config file."""
        monkeypatch.setenv("APATHY_MAX_DEPTH", "5")

        assert get_config().max_depth == 5

    def test_invalid_env_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Invalid environment overrides fall back to defaults."""
        monkeypatch.setenv("APATHY_MAX_DEPTH", "many")

        assert get_config().max_depth == DEFAULT_MAX_DEPTH


class TestCachedConfig:
    """Tests for cached_config."""

    def test_file_read_once(self) -> None:
        """Repeated calls reuse the loaded configuration."""
        with patch("apathy.core.config.get_config", return_value=ApathyConfig()) as mock_get:
            first = cached_config()
            second = cached_config()

        assert first is second
        mock_get.assert_called_once_with()

    def test_save_refreshes_cache(self) -> None:
        """save_config makes the next call see the new file."""
        assert cached_config().max_depth == DEFAULT_MAX_DEPTH

        save_config(ApathyConfig(max_depth=7))

        assert cached_config().max_depth == 7


class TestSaveConfig:
    """Tests for save_config function."""

    def test_save_roundtrip(self, tmp_path: Path) -> None:
        """Saved config can be loaded back."""
        config_file = tmp_path / "sub" / "config.toml"
        config = ApathyConfig(default_mode=0o700, max_depth=64, log_level="ERROR")

        saved = save_config(config, config_file)

        assert saved == config_file
        assert load_config(config_file) == config

    def test_save_omits_defaults(self, tmp_path: Path) -> None:
        """Only non-default values are written, plus log_level."""
        config_file = tmp_path / "config.toml"
        save_config(ApathyConfig(), config_file)

        with open(config_file, "rb") as f:
            data = tomllib.load(f)
        assert data == {"log_level": "WARNING"}

    def test_save_no_temp_files_left(self, tmp_path: Path) -> None:
        """No temporary files remain after saving."""
        save_config(ApathyConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_save_failure(self, tmp_path: Path) -> None:
        """save_config raises ConfigError when the write fails."""
        with (
            patch("apathy.core.config.os.replace", side_effect=OSError("disk full")),
            pytest.raises(ConfigError),
        ):
            save_config(ApathyConfig(), tmp_path / "config.toml")

        assert list(tmp_path.iterdir()) == []
