"""
Book filter helpers.
"""

from __future__ import annotations

from typing import Iterable


class UnknownBookError(ValueError):
    """Raised when a selected book is not part of the corpus catalogue."""


def normalize_book_selection(
    selected: Iterable[str] | None,
    *,
    known_books: Iterable[str],
) -> frozenset[str]:
    """
    Resolve a user's book selection against the known catalogue.

    ``None`` selects every known book. Titles are matched case-insensitively
    and returned in their canonical spelling. An explicit empty selection is
    allowed and simply matches nothing.
    """
    catalogue = list(known_books)
    if selected is None:
        return frozenset(catalogue)

    by_lower = {book.lower(): book for book in catalogue}
    resolved: set[str] = set()
    for title in selected:
        canonical = by_lower.get(title.strip().lower())
        if canonical is None:
            allowed = ", ".join(catalogue) if catalogue else "<none>"
            raise UnknownBookError(f"Unknown book {title!r}. Known books: {allowed}")
        resolved.add(canonical)
    return frozenset(resolved)
