"""
Query engine over a loaded paragraph corpus.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..corpus import Corpus
from ..embeddings import Embedder
from .ranker import ScoredResult, rank_results
from .semantic import DimensionMismatchError, combined_score

logger = logging.getLogger(__name__)


class QueryEngine:
    """Embed a query and score every paragraph of the selected books."""

    def __init__(self, corpus: Corpus, embedder: Embedder) -> None:
        self.corpus = corpus
        self.embedder = embedder

    def search(self, query: str, selected_books: Iterable[str]) -> list[ScoredResult]:
        """
        Return every paragraph of *selected_books* ranked against *query*.

        An empty query returns no results without calling the embedder.
        Paragraphs of unselected books are never scored.
        """
        if not query:
            return []

        query_vector = self.embedder.embed(query)
        dimension = self.corpus.dimension
        if dimension is not None and len(query_vector) != dimension:
            raise DimensionMismatchError(dimension, len(query_vector))

        books = set(selected_books)
        scored: list[ScoredResult] = []
        for record in self.corpus:
            if record.book not in books:
                continue
            score, exact = combined_score(
                text=record.text,
                vector=record.vector,
                query=query,
                query_vector=query_vector,
            )
            scored.append(ScoredResult(record=record, score=score, is_exact_match=exact))

        ranked = rank_results(scored)
        logger.debug(
            "Query %r scored %d paragraphs across %d books",
            query,
            len(ranked),
            len(books),
        )
        return ranked
