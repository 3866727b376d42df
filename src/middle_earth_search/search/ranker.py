"""
Ranking helpers for scored paragraph results.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..storage import ParagraphRecord


def display_percent(score: float) -> int:
    """Clamp a ranking score to a 0-100 style percentage for display."""
    # Half-up rounding, as the browser UI did; Python's round() is banker's.
    return min(100, math.floor(score * 100 + 0.5))


@dataclass(frozen=True)
class ScoredResult:
    """A paragraph scored against one query."""

    record: ParagraphRecord
    score: float
    is_exact_match: bool

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def text(self) -> str:
        return self.record.text

    @property
    def book(self) -> str:
        return self.record.book

    @property
    def display_percent(self) -> int:
        return display_percent(self.score)


def rank_results(results: list[ScoredResult]) -> list[ScoredResult]:
    """Sort results by descending score; equal scores keep ascending id order."""
    return sorted(results, key=lambda result: (-result.score, result.id))
