"""
Vector similarity and exact-match scoring.

Corpus and query vectors are unit length, so the dot product is the cosine
similarity. A literal (case-insensitive) occurrence of the query in a
paragraph adds a fixed boost on top of it.
"""

from __future__ import annotations

from typing import Sequence


EXACT_MATCH_BOOST = 0.5


class DimensionMismatchError(ValueError):
    """Raised when two vectors of different lengths are compared.

    This means the corpus and the query were embedded by different models
    and is not recoverable by retrying.
    """

    def __init__(self, left: int, right: int) -> None:
        super().__init__(
            f"Vectors must be of the same length (got {left} and {right}). "
            "The corpus was probably built with a different embedding model."
        )
        self.left = left
        self.right = right


def similarity(u: Sequence[float], v: Sequence[float]) -> float:
    """Return the dot product of two equal-length vectors."""
    if len(u) != len(v):
        raise DimensionMismatchError(len(u), len(v))
    return float(sum(a * b for a, b in zip(u, v)))


def is_exact_match(text: str, query: str) -> bool:
    if not query:
        return False
    return query.lower() in text.lower()


def combined_score(
    *,
    text: str,
    vector: Sequence[float],
    query: str,
    query_vector: Sequence[float],
) -> tuple[float, bool]:
    """Return ``(score, is_exact_match)`` for one candidate paragraph."""
    exact = is_exact_match(text, query)
    score = similarity(vector, query_vector)
    if exact:
        score += EXACT_MATCH_BOOST
    return score, exact
