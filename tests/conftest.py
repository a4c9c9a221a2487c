# tests/conftest.py
"""
Shared fixtures for questlog tests.

Provides quote sources with predictable output, ledgers in known states,
temporary save files, and a reset for the logging singleton.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add source to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from questlog.goals import ChecklistGoal, EternalGoal, SimpleGoal  # noqa: E402
from questlog.ledger import GoalLedger  # noqa: E402
from questlog.logging_config import UnifiedLoggingManager  # noqa: E402
from questlog.quotes import FixedQuoteSource  # noqa: E402


@pytest.fixture
def quote_source():
    """Quote source that always returns the same line."""
    return FixedQuoteSource("Keep going.")


@pytest.fixture
def ledger(quote_source):
    """An empty ledger with a fixed quote source."""
    return GoalLedger(quote_source=quote_source)


@pytest.fixture
def populated_ledger(ledger):
    """Ledger holding one goal of each kind, with some events recorded.

    State after setup:
        1. SimpleGoal   Marathon  (completed, +1000)
        2. EternalGoal  Scripture (two events, +200)
        3. ChecklistGoal Temple   (progress 1/3, +50)
    """
    ledger.create_goal("simple", "Marathon", "Run a marathon", 1000)
    ledger.create_goal("eternal", "Scripture", "Read scriptures", 100)
    ledger.create_goal("checklist", "Temple", "Attend the temple", 50, target=3, bonus=500)
    ledger.record_event(1)
    ledger.record_event(2)
    ledger.record_event(2)
    ledger.record_event(3)
    return ledger


@pytest.fixture
def sample_goals():
    """Fresh goal instances, one per kind."""
    return [
        SimpleGoal("Marathon", "Run a marathon", 1000),
        EternalGoal("Scripture", "Read scriptures", 100),
        ChecklistGoal("Temple", "Attend the temple", 50, target=3, bonus=500),
    ]


@pytest.fixture
def save_path(tmp_path):
    """Temporary path for a goal file."""
    return tmp_path / "goals.txt"


@pytest.fixture
def reset_logging_manager():
    """Reset the logging manager singleton around a test."""

    def _reset():
        UnifiedLoggingManager._instance = None
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

    _reset()
    yield
    _reset()
