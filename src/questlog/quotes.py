# src/questlog/quotes.py
"""
Motivational message sources.

The ledger appends one motivational line to every event receipt. The choice
is cosmetic, so it sits behind ``QuoteSource`` and tests can pin it with
``FixedQuoteSource`` or a seeded ``random.Random``.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

DEFAULT_QUOTES: tuple[str, ...] = (
    "Success is not final, failure is not fatal: It is the courage to continue that counts.",
    "The secret of getting ahead is getting started.",
    "Don't watch the clock; do what it does. Keep going.",
    "Believe you can and you're halfway there.",
    "You don't have to be great to start, but you have to start to be great.",
)


@runtime_checkable
class QuoteSource(Protocol):
    """Anything that can hand out a motivational string."""

    def next_quote(self) -> str: ...


class RandomQuoteSource:
    """
    Picks a quote uniformly at random from a fixed pool.

    Args:
        quotes: The pool to draw from. Must not be empty.
        rng: Random generator to draw with. Defaults to a fresh
            ``random.Random()``.
    """

    def __init__(
        self, quotes: Sequence[str] = DEFAULT_QUOTES, rng: random.Random | None = None
    ) -> None:
        if not quotes:
            raise ValueError("quote pool must not be empty")
        self._quotes = tuple(quotes)
        self._rng = rng or random.Random()

    @property
    def quotes(self) -> tuple[str, ...]:
        return self._quotes

    def next_quote(self) -> str:
        return self._rng.choice(self._quotes)


class FixedQuoteSource:
    """Always returns the same quote."""

    def __init__(self, quote: str = "") -> None:
        self.quote = quote

    def next_quote(self) -> str:
        return self.quote
