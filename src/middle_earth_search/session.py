"""
Search session state: current results, the visible page window and
context lookup.
"""

from __future__ import annotations

from typing import Iterable, Literal

from .corpus import Corpus, ParagraphContext
from .embeddings import Embedder
from .search import QueryEngine, ScoredResult, normalize_book_selection

PAGE_SIZE = 5

SessionStatus = Literal["ready", "searching"]


class SessionBusyError(RuntimeError):
    """Raised when a search is issued while another one is still running."""


class SearchSession:
    """One user's view over a corpus: selected books, results, pagination."""

    def __init__(self, corpus: Corpus, embedder: Embedder) -> None:
        self.corpus = corpus
        self.engine = QueryEngine(corpus, embedder)
        self.status: SessionStatus = "ready"
        self.query = ""
        self.selected_books: frozenset[str] = frozenset(corpus.books)
        self._results: list[ScoredResult] = []
        self._visible_limit = PAGE_SIZE

    def select_books(self, books: Iterable[str] | None) -> frozenset[str]:
        """Set the book filter; ``None`` selects every book in the corpus."""
        self.selected_books = normalize_book_selection(books, known_books=self.corpus.books)
        return self.selected_books

    def toggle_book(self, book: str) -> frozenset[str]:
        selection = set(normalize_book_selection([book], known_books=self.corpus.books))
        canonical = next(iter(selection))
        if canonical in self.selected_books:
            self.selected_books = self.selected_books - {canonical}
        else:
            self.selected_books = self.selected_books | {canonical}
        return self.selected_books

    def search(
        self, query: str, books: Iterable[str] | None = None
    ) -> list[ScoredResult]:
        """Run *query*, replace the result set and reset the page window.

        When *books* is given it becomes the new selection, but only once the
        search has succeeded. An empty query leaves the previous results and
        selection untouched.
        """
        if self.status == "searching":
            raise SessionBusyError("A search is already in progress.")
        if books is None:
            selection = self.selected_books
        else:
            selection = normalize_book_selection(books, known_books=self.corpus.books)
        if not query:
            return self.visible_results

        self.status = "searching"
        try:
            results = self.engine.search(query, selection)
        finally:
            self.status = "ready"

        self.selected_books = selection
        self.query = query
        self._results = results
        self._visible_limit = PAGE_SIZE
        return self.visible_results

    def load_more(self) -> list[ScoredResult]:
        self._visible_limit += PAGE_SIZE
        return self.visible_results

    @property
    def results(self) -> list[ScoredResult]:
        return list(self._results)

    @property
    def visible_limit(self) -> int:
        return self._visible_limit

    @property
    def visible_results(self) -> list[ScoredResult]:
        return self._results[: self._visible_limit]

    @property
    def has_more(self) -> bool:
        return len(self._results) > self._visible_limit

    def context(self, record_id: int) -> ParagraphContext:
        """Neighbouring paragraphs for *record_id*, regardless of the book filter."""
        return self.corpus.context(record_id)
