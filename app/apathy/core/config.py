"""Configuration model and TOML I/O for apathy.

Settings control the defaults used by the filesystem operations:
the permission mode for new files and directories, the recursion
limit for tree walks, and the log level of the CLI.

Resolution order (highest priority first):
1. Environment variables (APATHY_LOG_LEVEL, APATHY_MAX_DEPTH)
2. ~/.config/apathy/config.toml
3. Built-in defaults
"""

import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from apathy.core.paths import get_config_path

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_MODE = 0o777
DEFAULT_MAX_DEPTH = 256
DEFAULT_LOG_LEVEL: LogLevel = "WARNING"


class ApathyConfig(BaseModel):
    """Defaults for filesystem operations and logging.

    Attributes:
        default_mode: Permission bits for directories and files created by
            makedirs and touch (before umask).
        max_depth: Maximum recursion depth for makedirs and rmdirs.
        log_level: Log level used by the CLI.
    """

    model_config = ConfigDict(extra="forbid")

    default_mode: Annotated[
        int,
        Field(ge=0, le=0o7777, description="Mode for created files and directories"),
    ] = DEFAULT_MODE
    max_depth: Annotated[
        int,
        Field(ge=1, le=4096, description="Recursion limit for tree operations (1-4096)"),
    ] = DEFAULT_MAX_DEPTH
    log_level: Annotated[
        LogLevel,
        Field(description="CLI log level"),
    ] = DEFAULT_LOG_LEVEL


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> ApathyConfig:
    """Load configuration from a TOML file.

    Environment overrides are applied on top of the file contents.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ApathyConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        config = ApathyConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: ApathyConfig) -> ApathyConfig:
    """Apply APATHY_* environment variables over an already valid config.

    Invalid overrides are logged and dropped; the given config is kept.
    """
    overrides: dict[str, object] = {}
    if "APATHY_LOG_LEVEL" in os.environ:
        overrides["log_level"] = os.environ["APATHY_LOG_LEVEL"].upper()
    if "APATHY_MAX_DEPTH" in os.environ:
        overrides["max_depth"] = os.environ["APATHY_MAX_DEPTH"]
    if not overrides:
        return config

    try:
        return ApathyConfig.model_validate({**config.model_dump(), **overrides})
    except ValidationError as e:
        logger.warning("Ignoring invalid environment overrides: %s", e)
        return config


def get_config(path: Path | None = None) -> ApathyConfig:
    """Load configuration, falling back to defaults on any error.

    A missing file is silent; an unreadable or invalid one is logged.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        ApathyConfig from the file, or defaults with environment overrides.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        pass
    except ConfigError as e:
        logger.warning("Ignoring config file: %s", e)

    return _apply_env_overrides(ApathyConfig())


@lru_cache(maxsize=1)
def cached_config() -> ApathyConfig:
    """Return the configuration from the default path, loaded once.

    Filesystem operations read their defaults through this so the file
    is parsed once per process. save_config() clears the cache.
    """
    return get_config()


def save_config(config: ApathyConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ApathyConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    cached_config.cache_clear()
    return config_path


def _config_to_dict(config: ApathyConfig) -> dict[str, object]:
    """Convert ApathyConfig to a dictionary for TOML serialization.

    Only non-default values are written, except log_level which is
    always present so the file is never empty.

    Args:
        config: The ApathyConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {"log_level": config.log_level}

    if config.default_mode != DEFAULT_MODE:
        result["default_mode"] = config.default_mode

    if config.max_depth != DEFAULT_MAX_DEPTH:
        result["max_depth"] = config.max_depth

    return result
