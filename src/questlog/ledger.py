# src/questlog/ledger.py
"""
Goal ledger: the ordered set of goals plus the running score.

The ledger is the only thing that touches the score. Goals report what an
event earned (``EventOutcome``) and the ledger adds it up, derives the
level, and persists everything in the line format of
``questlog.serialization``.

Example:
    from questlog.ledger import GoalLedger

    ledger = GoalLedger()
    ledger.create_goal("checklist", "Read", "Read a chapter", 10, target=3, bonus=50)
    receipt = ledger.record_event(1)
    print(receipt.message)
    ledger.save("goals.txt")

    restored = GoalLedger()
    restored.load("goals.txt")
    assert restored.score == ledger.score

Loading is all-or-nothing: the whole source is parsed before the current
goals and score are replaced, so a corrupt file leaves the ledger as it was.
"""

from __future__ import annotations

import copy
import io
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from .exceptions import (
    CorruptDataError,
    GoalNotFoundError,
    GoalStorageError,
    InvalidInputError,
    OutOfRangeError,
)
from .goals import (
    PROGRESS_BAR_WIDTH,
    ChecklistGoal,
    EternalGoal,
    EventOutcome,
    Goal,
    GoalKind,
    SimpleGoal,
)
from .quotes import QuoteSource, RandomQuoteSource
from .serialization import format_ledger, parse_ledger, validate_text_field

if TYPE_CHECKING:
    from .config.models import QuestLogConfig

logger = logging.getLogger(__name__)

DEFAULT_POINTS_PER_LEVEL = 500

_KIND_ALIASES: dict[str, GoalKind] = {
    "1": GoalKind.SIMPLE,
    "simple": GoalKind.SIMPLE,
    "simplegoal": GoalKind.SIMPLE,
    "2": GoalKind.ETERNAL,
    "eternal": GoalKind.ETERNAL,
    "eternalgoal": GoalKind.ETERNAL,
    "3": GoalKind.CHECKLIST,
    "checklist": GoalKind.CHECKLIST,
    "checklistgoal": GoalKind.CHECKLIST,
}


def resolve_kind(kind: GoalKind | str) -> GoalKind:
    """
    Map a user-supplied goal kind to ``GoalKind``.

    Accepts a ``GoalKind``, its name (``"simple"``), its persistence tag
    (``"SimpleGoal"``) or its menu number (``"1"``).

    Raises:
        InvalidInputError: If the kind is not recognised.
    """
    if isinstance(kind, GoalKind):
        return kind
    resolved = _KIND_ALIASES.get(str(kind).strip().lower())
    if resolved is None:
        raise InvalidInputError("kind", f"unknown goal kind {kind!r}")
    return resolved


def _parse_int(field: str, value: Any, minimum: int) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError(field, "a value is required")
    if isinstance(value, bool):
        raise InvalidInputError(field, f"expected an integer, got {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise InvalidInputError(field, f"expected an integer, got {value!r}") from None
    else:
        raise InvalidInputError(field, f"expected an integer, got {value!r}")

    if number < minimum:
        raise InvalidInputError(field, f"must be >= {minimum}, got {number}")
    return number


def _check_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(field, f"expected text, got {value!r}")
    problem = validate_text_field(value)
    if problem:
        raise InvalidInputError(field, problem)
    return value


@dataclass(frozen=True)
class EventReceipt:
    """
    What happened when an event was recorded.

    Attributes:
        index: 1-based position of the goal in the ledger.
        goal: The goal the event was recorded against.
        outcome: Points earned and bonus information.
        score: Ledger score after the event.
        quote: The motivational line chosen for this event.
        message: User-facing text combining all of the above.
    """

    index: int
    goal: Goal
    outcome: EventOutcome
    score: int
    quote: str
    message: str

    def __str__(self) -> str:
        return self.message


class GoalLedger:
    """
    Owns the goals and the score, and persists both.

    Goals are addressed by their 1-based position in creation order, which
    is also the listing order.

    Args:
        quote_source: Where motivational lines come from. Defaults to a
            ``RandomQuoteSource`` over the built-in pool.
        points_per_level: Score needed per level.
        progress_bar_width: Width of checklist progress bars in details.
    """

    def __init__(
        self,
        quote_source: QuoteSource | None = None,
        points_per_level: int = DEFAULT_POINTS_PER_LEVEL,
        progress_bar_width: int = PROGRESS_BAR_WIDTH,
    ) -> None:
        if points_per_level < 1:
            raise ValueError(f"points_per_level must be >= 1, got {points_per_level}")
        self._goals: list[Goal] = []
        self._score = 0
        self._quotes = quote_source or RandomQuoteSource()
        self._points_per_level = points_per_level
        self._bar_width = progress_bar_width

    @classmethod
    def from_config(
        cls, config: QuestLogConfig, quote_source: QuoteSource | None = None
    ) -> GoalLedger:
        """Build a ledger from a ``QuestLogConfig``."""
        return cls(
            quote_source=quote_source or RandomQuoteSource(config.motivational_quotes),
            points_per_level=config.points_per_level,
            progress_bar_width=config.progress_bar_width,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def score(self) -> int:
        return self._score

    @property
    def goals(self) -> tuple[Goal, ...]:
        """Snapshot copies of the goals in ledger order."""
        return tuple(copy.copy(goal) for goal in self._goals)

    @property
    def points_per_level(self) -> int:
        return self._points_per_level

    def __len__(self) -> int:
        return len(self._goals)

    def current_level(self) -> int:
        """``score // points_per_level + 1``."""
        return self._score // self._points_per_level + 1

    def points_to_next_level(self) -> int:
        return self._points_per_level - self._score % self._points_per_level

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_goal(
        self,
        kind: GoalKind | str,
        name: str,
        description: str,
        base_points: int | str,
        target: int | str | None = None,
        bonus: int | str | None = None,
    ) -> Goal:
        """
        Create a goal and append it to the ledger.

        Numeric arguments may be integers or numeric strings, as typed at a
        prompt. ``target`` and ``bonus`` are required for checklist goals and
        ignored otherwise.

        Returns:
            The new goal.

        Raises:
            InvalidInputError: Unknown kind, missing or non-numeric fields,
                negative points or bonus, a target below 1, or a name or
                description containing a separator character. The ledger is
                unchanged.
        """
        goal_kind = resolve_kind(kind)
        name = _check_text("name", name)
        description = _check_text("description", description)
        points = _parse_int("base_points", base_points, minimum=0)

        goal: Goal
        if goal_kind is GoalKind.SIMPLE:
            goal = SimpleGoal(name, description, points)
        elif goal_kind is GoalKind.ETERNAL:
            goal = EternalGoal(name, description, points)
        else:
            goal = ChecklistGoal(
                name,
                description,
                points,
                target=_parse_int("target", target, minimum=1),
                bonus=_parse_int("bonus", bonus, minimum=0),
            )

        self._goals.append(goal)
        logger.info("Created %s '%s' at position %d", goal_kind.tag, name, len(self._goals))
        return goal

    def record_event(self, index: int) -> EventReceipt:
        """
        Record one event against the goal at 1-based ``index``.

        Raises:
            OutOfRangeError: If ``index`` is not an integer in
                ``[1, len(goals)]``. Score and goals are unchanged.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise OutOfRangeError(index, len(self._goals), "Goal index must be an integer.")
        if not 1 <= index <= len(self._goals):
            raise OutOfRangeError(index, len(self._goals))

        goal = self._goals[index - 1]
        outcome = goal.record_event()
        self._score += outcome.points

        quote = self._quotes.next_quote()
        message = self._format_event_message(goal, outcome, quote)
        logger.info(
            "Recorded event on '%s': +%d points (bonus %d), score=%d",
            goal.name,
            outcome.points,
            outcome.bonus,
            self._score,
        )
        return EventReceipt(
            index=index,
            goal=copy.copy(goal),
            outcome=outcome,
            score=self._score,
            quote=quote,
            message=message,
        )

    def _format_event_message(self, goal: Goal, outcome: EventOutcome, quote: str) -> str:
        lines = []
        if outcome.already_complete:
            lines.append(goal.already_completed_message())
        elif outcome.bonus_awarded:
            lines.append(
                f"Congratulations! You have earned {outcome.base_points} points "
                f"plus a bonus of {outcome.bonus} points!"
            )
            lines.append(f"Total: {outcome.points} points!")
        else:
            lines.append(f"Congratulations! You have earned {outcome.points} points!")

        if not outcome.already_complete:
            note = goal.progress_note(self._bar_width)
            if note:
                lines.append(note)
        if quote:
            lines.append(quote)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_names(self) -> list[tuple[int, str]]:
        """``(index, name)`` pairs in ledger order."""
        return [(i, goal.name) for i, goal in enumerate(self._goals, start=1)]

    def list_details(self) -> list[tuple[int, bool, str]]:
        """``(index, completed, description)`` triples in ledger order."""
        return [
            (i, goal.is_completed(), goal.describe(self._bar_width))
            for i, goal in enumerate(self._goals, start=1)
        ]

    def get_status_summary(self) -> dict[str, Any]:
        """
        Summarise the ledger for display.

        Returns:
            Dict with total/completed goal counts, counts per kind, score,
            level and points needed for the next level.
        """
        by_kind = {kind.tag: 0 for kind in GoalKind}
        for goal in self._goals:
            by_kind[goal.kind.tag] += 1

        return {
            "total_goals": len(self._goals),
            "completed_goals": sum(1 for goal in self._goals if goal.is_completed()),
            "by_kind": by_kind,
            "score": self._score,
            "level": self.current_level(),
            "points_to_next_level": self.points_to_next_level(),
        }

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def serialize_all(self, stream: TextIO | None = None) -> str:
        """
        Render the score line followed by one line per goal.

        Args:
            stream: Optional writable text stream that also receives the text.

        Returns:
            The serialized text.
        """
        text = format_ledger(self._score, self._goals)
        if stream is not None:
            stream.write(text)
        return text

    def deserialize_all(self, stream: TextIO | Iterable[str] | str) -> None:
        """
        Replace all goals and the score with the contents of ``stream``.

        ``stream`` may be a text stream, any iterable of lines, or the
        serialized text itself. Text is split on ``\\n`` only, so control
        characters such as form feeds stay inside their field.

        Raises:
            CorruptDataError: If any part of the stream fails to parse.
                The ledger keeps its previous goals and score.
        """
        lines = io.StringIO(stream) if isinstance(stream, str) else stream
        try:
            score, goals = parse_ledger(lines)
        except CorruptDataError as exc:
            logger.warning("Rejected goal data, ledger left unchanged: %s", exc)
            raise

        self._score = score
        self._goals = goals
        logger.info("Loaded %d goals, score=%d", len(goals), score)

    def save(self, destination: str | os.PathLike[str] | TextIO) -> None:
        """
        Persist the ledger to a file path or a writable text stream.

        Files are written to a temporary sibling and renamed into place.
        The temporary file is removed if the write fails.

        Raises:
            GoalStorageError: If the file cannot be written.
        """
        if hasattr(destination, "write"):
            self.serialize_all(destination)
            return

        path = Path(os.path.expanduser(os.fspath(destination)))
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(self.serialize_all(), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            if tmp_path.is_file():
                tmp_path.unlink()
            logger.warning("Failed to save goals to %s: %s", path, exc)
            raise GoalStorageError(path, f"Could not save goals: {exc.strerror or exc}.") from exc
        logger.info("Saved %d goals to %s", len(self._goals), path)

    def load(self, source: str | os.PathLike[str] | TextIO) -> None:
        """
        Replace the ledger's state from a file path or a readable text stream.

        Raises:
            GoalNotFoundError: If ``source`` is a path that does not exist.
            GoalStorageError: If the file exists but cannot be read.
            CorruptDataError: If the contents fail to parse. The ledger is
                unchanged.
        """
        if hasattr(source, "read"):
            self.deserialize_all(source)
            return

        path = Path(os.path.expanduser(os.fspath(source)))
        if not path.is_file():
            raise GoalNotFoundError(path)

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptDataError(0, f"File is not valid UTF-8 text: {exc}.") from exc
        except OSError as exc:
            raise GoalStorageError(path, f"Could not read goals: {exc.strerror or exc}.") from exc
        self.deserialize_all(text)
