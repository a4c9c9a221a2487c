# src/questlog/goals.py
"""
Goal model for questlog.

A goal is a trackable objective that awards points when an event is recorded
against it. Three variants share one contract and differ only in what a
single event does:

- ``SimpleGoal``: pays ``base_points`` once, then reports itself complete.
- ``EternalGoal``: pays ``base_points`` on every event and never completes.
- ``ChecklistGoal``: pays ``base_points`` per event until ``target`` events
  have been recorded; the event that reaches the target also pays ``bonus``.

Goals know nothing about the running score. ``record_event()`` returns an
``EventOutcome`` and the owning ledger applies it.

Example:
    >>> goal = ChecklistGoal("Read", "Read a chapter", 10, target=3, bonus=50)
    >>> goal.record_event().points
    10
    >>> goal.serialize()
    'ChecklistGoal:Read,Read a chapter,10,3,50,1'
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

logger = logging.getLogger(__name__)

PROGRESS_BAR_WIDTH = 20


# =============================================================================
# Enums
# =============================================================================


class GoalKind(Enum):
    """Goal variants, valued by their persistence tag."""

    SIMPLE = "SimpleGoal"
    """Completes after a single event."""

    ETERNAL = "EternalGoal"
    """Never completes; every event pays out."""

    CHECKLIST = "ChecklistGoal"
    """Completes after ``target`` events, with a one-time bonus."""

    @property
    def tag(self) -> str:
        return self.value


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class EventOutcome:
    """
    Result of recording one event against a goal.

    Attributes:
        points: Total points earned by this call, bonus included.
        bonus: The bonus part of ``points`` (0 when no bonus was paid).
        already_complete: True when the goal was already finished and the
            event was a no-op.
    """

    points: int
    bonus: int = 0
    already_complete: bool = False

    @property
    def bonus_awarded(self) -> bool:
        return self.bonus > 0

    @property
    def base_points(self) -> int:
        """Points earned without the bonus."""
        return self.points - self.bonus


@dataclass
class Goal(ABC):
    """
    Abstract goal contract.

    Attributes:
        name: Short identifier shown in listings.
        description: Free-text description.
        base_points: Points awarded per qualifying event (>= 0).

    Subclasses set ``kind`` and ``extra_field_count`` and implement
    ``record_event``, ``_extra_fields`` and ``_from_extra_fields``. Defining
    a subclass with a ``kind`` registers it for deserialization.
    """

    name: str
    description: str
    base_points: int

    kind: ClassVar[GoalKind]
    extra_field_count: ClassVar[int] = 0
    _registry: ClassVar[dict[str, type[Goal]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if "kind" in cls.__dict__:
            Goal._registry[cls.kind.tag] = cls

    def __post_init__(self) -> None:
        if self.base_points < 0:
            raise ValueError(f"base_points must be >= 0, got {self.base_points}")

    @classmethod
    def for_tag(cls, tag: str) -> type[Goal] | None:
        """Look up the goal class registered under a persistence tag."""
        return cls._registry.get(tag)

    @classmethod
    def registered_tags(cls) -> list[str]:
        return list(cls._registry)

    @abstractmethod
    def record_event(self) -> EventOutcome:
        """Apply one event and report the points it earned."""

    def is_completed(self) -> bool:
        return False

    def describe(self, bar_width: int = PROGRESS_BAR_WIDTH) -> str:
        """Human-readable ``name (description)`` string."""
        return f"{self.name} ({self.description})"

    def already_completed_message(self) -> str:
        """What to tell the user when an event lands on a finished goal."""
        return "You have already completed this goal."

    def progress_note(self, bar_width: int = PROGRESS_BAR_WIDTH) -> str | None:
        """Extra line shown after an event that earned points, if any."""
        return None

    def serialize(self) -> str:
        """
        Produce the single tagged persistence line for this goal.

        Format: ``<Tag>:<name>,<description>,<base_points>[,<extra>...]``
        """
        fields = [self.name, self.description, str(self.base_points)]
        fields.extend(self._extra_fields())
        return f"{self.kind.tag}:{','.join(fields)}"

    def _extra_fields(self) -> list[str]:
        return []

    @classmethod
    @abstractmethod
    def _from_extra_fields(
        cls, name: str, description: str, base_points: int, extra: list[str]
    ) -> Goal:
        """Rebuild an instance from parsed common fields and raw extra fields."""


@dataclass
class SimpleGoal(Goal):
    """A one-shot goal: the first event pays out and completes it."""

    completed: bool = False

    kind = GoalKind.SIMPLE
    extra_field_count = 1

    def record_event(self) -> EventOutcome:
        if self.completed:
            logger.debug("Simple goal '%s' already completed", self.name)
            return EventOutcome(points=0, already_complete=True)
        self.completed = True
        return EventOutcome(points=self.base_points)

    def is_completed(self) -> bool:
        return self.completed

    def _extra_fields(self) -> list[str]:
        return [str(self.completed)]

    @classmethod
    def _from_extra_fields(cls, name, description, base_points, extra):
        return cls(name, description, base_points, completed=parse_bool(extra[0]))


@dataclass
class EternalGoal(Goal):
    """A goal that is never finished; every event pays ``base_points``."""

    kind = GoalKind.ETERNAL
    extra_field_count = 0

    def record_event(self) -> EventOutcome:
        return EventOutcome(points=self.base_points)

    @classmethod
    def _from_extra_fields(cls, name, description, base_points, extra):
        return cls(name, description, base_points)


@dataclass
class ChecklistGoal(Goal):
    """
    A goal that must be accomplished ``target`` times.

    Each event pays ``base_points`` and advances ``progress``. The event that
    brings ``progress`` to ``target`` also pays ``bonus``. Events recorded
    after that pay nothing and leave ``progress`` clamped at ``target``.
    """

    target: int
    bonus: int
    progress: int = 0

    kind = GoalKind.CHECKLIST
    extra_field_count = 3

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.target <= 0:
            raise ValueError(f"target must be > 0, got {self.target}")
        if self.bonus < 0:
            raise ValueError(f"bonus must be >= 0, got {self.bonus}")
        if not 0 <= self.progress <= self.target:
            raise ValueError(f"progress must be within 0..{self.target}, got {self.progress}")

    def record_event(self) -> EventOutcome:
        if self.progress >= self.target:
            self.progress = self.target
            logger.debug("Checklist goal '%s' already at target %d", self.name, self.target)
            return EventOutcome(points=0, already_complete=True)

        self.progress += 1
        if self.progress == self.target:
            return EventOutcome(points=self.base_points + self.bonus, bonus=self.bonus)
        return EventOutcome(points=self.base_points)

    def is_completed(self) -> bool:
        return self.progress >= self.target

    def progress_bar(self, width: int = PROGRESS_BAR_WIDTH) -> str:
        """
        Render progress as a bracketed fixed-width bar.

        ``round(progress / target * width)`` cells are filled with ``=``.

        Example:
            >>> ChecklistGoal("a", "b", 1, target=4, bonus=0, progress=1).progress_bar()
            '[=====               ] 1/4'
        """
        filled = round(self.progress / self.target * width)
        return f"[{'=' * filled}{' ' * (width - filled)}] {self.progress}/{self.target}"

    def describe(self, bar_width: int = PROGRESS_BAR_WIDTH) -> str:
        return f"{super().describe()} -- Currently completed: {self.progress_bar(bar_width)}"

    def already_completed_message(self) -> str:
        return "You have already completed this goal the required number of times."

    def progress_note(self, bar_width: int = PROGRESS_BAR_WIDTH) -> str | None:
        return self.progress_bar(bar_width)

    def _extra_fields(self) -> list[str]:
        return [str(self.target), str(self.bonus), str(self.progress)]

    @classmethod
    def _from_extra_fields(cls, name, description, base_points, extra):
        target, bonus, progress = (int(value) for value in extra)
        return cls(name, description, base_points, target=target, bonus=bonus, progress=progress)


def parse_bool(value: str) -> bool:
    """Parse a ``True``/``False`` literal (case-insensitive)."""
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"not a boolean literal: {value!r}")
