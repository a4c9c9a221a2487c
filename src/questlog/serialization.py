# src/questlog/serialization.py
"""
Line-oriented persistence format for goal ledgers.

A saved ledger is plain text::

    <score>
    <Tag>:<name>,<description>,<base_points>[,<extra fields>]
    ...

The tag selects the goal class (see ``Goal.for_tag``) and fixes how many
extra fields follow ``base_points``:

    SimpleGoal     completed (True/False)
    EternalGoal    (none)
    ChecklistGoal  target, bonus, progress

There is no escaping. Names and descriptions must not contain ``,``, ``:``
or a line break; ``validate_text_field`` enforces that before a goal is
created. Records are separated by ``\\n`` alone, so other control
characters are ordinary field content.

Parsing is pure: ``parse_ledger`` returns the score and goals without
touching any ledger, so callers can commit the result only once the whole
stream has been read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .exceptions import CorruptDataError
from .goals import Goal

logger = logging.getLogger(__name__)

TAG_SEPARATOR = ":"
FIELD_SEPARATOR = ","
COMMON_FIELD_COUNT = 3

RESERVED_CHARACTERS = (TAG_SEPARATOR, FIELD_SEPARATOR, "\n", "\r")


def validate_text_field(value: str) -> str | None:
    """
    Check that a name or description can be stored without escaping.

    Returns:
        None when the value is storable, otherwise a short reason.
    """
    for char in RESERVED_CHARACTERS:
        if char in value:
            return f"must not contain {char!r}"
    return None


def format_ledger(score: int, goals: Iterable[Goal]) -> str:
    """Render a score and goals as persistence text (newline-terminated)."""
    lines = [str(score)]
    lines.extend(goal.serialize() for goal in goals)
    return "\n".join(lines) + "\n"


def parse_score_line(line: str, line_number: int = 1) -> int:
    """Parse the leading score line."""
    text = line.strip()
    try:
        score = int(text)
    except ValueError:
        raise CorruptDataError(line_number, f"Score is not an integer: {text!r}.") from None
    if score < 0:
        raise CorruptDataError(line_number, f"Score must not be negative: {score}.")
    return score


def parse_goal_line(line: str, line_number: int = 1) -> Goal:
    """
    Reconstruct one goal from its tagged persistence line.

    Args:
        line: A single line, with or without its trailing newline.
        line_number: Position of the line in its stream, for error reporting.

    Raises:
        CorruptDataError: Unknown tag, wrong field count, unparseable field,
            or a field combination that violates the goal's invariants.
    """
    text = line.rstrip("\r\n")
    tag, separator, payload = text.partition(TAG_SEPARATOR)
    if not separator:
        raise CorruptDataError(line_number, f"Missing '{TAG_SEPARATOR}' after goal tag.")

    goal_cls = Goal.for_tag(tag)
    if goal_cls is None:
        raise CorruptDataError(line_number, f"Unknown goal tag {tag!r}.")

    fields = payload.split(FIELD_SEPARATOR)
    expected = COMMON_FIELD_COUNT + goal_cls.extra_field_count
    if len(fields) != expected:
        raise CorruptDataError(
            line_number,
            f"{tag} expects {expected} fields, found {len(fields)}.",
        )

    name, description, raw_points = fields[:COMMON_FIELD_COUNT]
    try:
        base_points = int(raw_points)
        return goal_cls._from_extra_fields(
            name, description, base_points, fields[COMMON_FIELD_COUNT:]
        )
    except ValueError as exc:
        raise CorruptDataError(line_number, f"Invalid {tag} fields: {exc}.") from exc


def parse_ledger(lines: Iterable[str]) -> tuple[int, list[Goal]]:
    """
    Parse a complete persisted ledger.

    Blank lines after the score line are skipped.

    Returns:
        ``(score, goals)`` in stream order.

    Raises:
        CorruptDataError: If the stream is empty or any line fails to parse.
    """
    score: int | None = None
    goals: list[Goal] = []

    for line_number, line in enumerate(lines, start=1):
        if score is None:
            score = parse_score_line(line, line_number)
            continue
        if not line.strip():
            continue
        goals.append(parse_goal_line(line, line_number))

    if score is None:
        raise CorruptDataError(1, "Stream is empty; expected a score line.")

    logger.debug("Parsed ledger: score=%d, goals=%d", score, len(goals))
    return score, goals
