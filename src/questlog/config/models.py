# src/questlog/config/models.py
"""
Configuration models for questlog.

These Pydantic models give the loader a typed, validated target:

    QuestLogConfig (root)
    ├── points_per_level      - score needed per level
    ├── progress_bar_width    - width of checklist progress bars
    ├── save_path             - default file for save/load
    ├── motivational_quotes   - pool shown after each event
    └── logging               - passed to configure_logging()

Usage:
    >>> from questlog.config.models import QuestLogConfig
    >>> QuestLogConfig().points_per_level
    500
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..quotes import DEFAULT_QUOTES


class QuestLogConfig(BaseModel):
    """
    Root configuration for a questlog host.

    Examples:
        >>> config = QuestLogConfig(points_per_level=1000)
        >>> config.progress_bar_width
        20
    """

    points_per_level: int = Field(
        default=500,
        ge=1,
        description="Score needed to advance one level (level = score // points_per_level + 1)",
    )
    progress_bar_width: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Number of cells in a checklist goal's progress bar",
    )
    save_path: str = Field(
        default="goals.txt",
        description=(
            "Default goal file for save/load. "
            "Tilde and environment variable expansion is applied."
        ),
    )
    motivational_quotes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_QUOTES),
        description="Pool of messages, one chosen at random after each event",
    )
    logging: dict[str, Any] = Field(
        default_factory=dict,
        description="Logging section, merged over DEFAULT_LOGGING_CONFIG",
    )

    @field_validator("save_path")
    @classmethod
    def expand_save_path(cls, v: str) -> str:
        """Expand ~ and environment variables in save_path."""
        return os.path.expanduser(os.path.expandvars(v))

    @field_validator("motivational_quotes")
    @classmethod
    def require_quotes(cls, v: list[str]) -> list[str]:
        """The quote pool must not be empty."""
        if not v:
            raise ValueError("motivational_quotes must contain at least one entry")
        return v
