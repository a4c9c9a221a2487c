# src/questlog/config/loader.py
"""
Configuration loading for questlog.

Sources are merged in order, later ones winning:
    1. Model defaults (``QuestLogConfig``)
    2. The ``[questlog]`` section of a TOML file
    3. ``QUESTLOG_*`` environment variables
    4. Runtime overrides
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import ConfigError
from .models import QuestLogConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/questlog/config.toml")
ENV_PREFIX = "QUESTLOG_"


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_toml_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the ``[questlog]`` section from a TOML file.

    A missing default file yields ``{}``. A missing file that was asked for
    explicitly, or a file that is not valid TOML, raises ``ConfigError``.
    """
    explicit = config_path is not None
    path = Path(os.path.expanduser(str(config_path or DEFAULT_CONFIG_PATH)))

    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            full_config = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigError(f"Failed to read config from {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return full_config.get("questlog", {})


def _parse_env_value(value: str) -> Any:
    """
    Parse environment variable value to appropriate type.

    Returns:
        Parsed value (bool, int, list, or string)
    """
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    # Lists are '|'-separated; quotes may contain commas
    if "|" in value:
        return [v.strip() for v in value.split("|") if v.strip()]

    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """
    Apply ``QUESTLOG_*`` environment variables.

    Examples:
        QUESTLOG_POINTS_PER_LEVEL=1000
        QUESTLOG_SAVE_PATH=~/quests.txt
        QUESTLOG_LOGGING__CONSOLE_LEVEL=DEBUG

    Nested keys use a double underscore.
    """
    known = set(QuestLogConfig.model_fields)
    result = dict(config)

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        parts = key[len(ENV_PREFIX):].lower().split("__")
        if parts[0] not in known:
            continue

        if len(parts) == 1:
            if parts[0] == "motivational_quotes":
                result[parts[0]] = [v.strip() for v in value.split("|") if v.strip()]
            else:
                result[parts[0]] = _parse_env_value(value)
        else:
            section = dict(result.get(parts[0]) or {})
            section["__".join(parts[1:])] = _parse_env_value(value)
            result[parts[0]] = section

    return result


def load_config(
    config_path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> QuestLogConfig:
    """
    Load and validate the questlog configuration.

    Args:
        config_path: Optional TOML file (default ``~/.config/questlog/config.toml``).
        overrides: Optional runtime overrides, applied last.

    Returns:
        QuestLogConfig instance

    Raises:
        ConfigError: When a source cannot be read or the merged values fail
            validation.
    """
    config: dict[str, Any] = {}

    toml_config = load_toml_config(config_path)
    if toml_config:
        config = _deep_merge(config, toml_config)

    config = _apply_env_overrides(config)

    if overrides:
        config = _deep_merge(config, overrides)

    try:
        return QuestLogConfig(**config)
    except ValidationError as e:
        raise ConfigError(f"Invalid questlog configuration: {e}") from e
