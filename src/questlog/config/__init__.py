# src/questlog/config/__init__.py
"""
Configuration module for questlog.

Settings come from packaged defaults, an optional TOML file, environment
variables and runtime overrides, and are validated by Pydantic.

Configuration files:
    - User config: ~/.config/questlog/config.toml (``[questlog]`` section)
    - Custom config: ``questlog --config PATH`` or ``load_config(config_path=...)``

Environment variables:
    - Prefix: QUESTLOG_
    - Nested keys use double underscores: QUESTLOG_LOGGING__CONSOLE_LEVEL
"""

from .loader import load_config
from .models import QuestLogConfig

__all__ = ["QuestLogConfig", "load_config"]
