# src/questlog/__init__.py
"""
questlog: a goal-tracking engine.

Goals earn points when events are recorded against them; a ledger keeps the
score, derives a level from it, and saves everything to a small text format.

Example:
    from questlog import GoalLedger

    ledger = GoalLedger()
    ledger.create_goal("eternal", "Scripture", "Read scriptures daily", 100)
    ledger.record_event(1)
    ledger.save("goals.txt")
"""

from .exceptions import (
    ConfigError,
    CorruptDataError,
    GoalNotFoundError,
    InvalidInputError,
    OutOfRangeError,
    QuestLogError,
)
from .goals import ChecklistGoal, EternalGoal, EventOutcome, Goal, GoalKind, SimpleGoal
from .ledger import EventReceipt, GoalLedger
from .quotes import FixedQuoteSource, QuoteSource, RandomQuoteSource

__version__ = "0.1.0"

__all__ = [
    # Goals
    "Goal",
    "GoalKind",
    "SimpleGoal",
    "EternalGoal",
    "ChecklistGoal",
    "EventOutcome",
    # Ledger
    "GoalLedger",
    "EventReceipt",
    # Quotes
    "QuoteSource",
    "RandomQuoteSource",
    "FixedQuoteSource",
    # Errors
    "QuestLogError",
    "ConfigError",
    "InvalidInputError",
    "OutOfRangeError",
    "CorruptDataError",
    "GoalNotFoundError",
]
