"""Search helpers for the paragraph corpus."""

from .filters import UnknownBookError, normalize_book_selection
from .query import QueryEngine
from .ranker import ScoredResult, display_percent, rank_results
from .semantic import (
    EXACT_MATCH_BOOST,
    DimensionMismatchError,
    combined_score,
    is_exact_match,
    similarity,
)

__all__ = [
    "UnknownBookError",
    "normalize_book_selection",
    "QueryEngine",
    "ScoredResult",
    "display_percent",
    "rank_results",
    "EXACT_MATCH_BOOST",
    "DimensionMismatchError",
    "combined_score",
    "is_exact_match",
    "similarity",
]
