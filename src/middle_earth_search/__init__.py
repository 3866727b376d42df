"""
Middle Earth Search - semantic paragraph search over a small book corpus.

This package splits book texts into paragraphs, embeds them with a Google
GenAI embedding model, and ranks paragraphs against a query by cosine
similarity plus a boost for literal matches.

Example usage:
    >>> from middle_earth_search import Corpus, EmbeddingProvider, JSONCorpusStorage, SearchSession
    >>> corpus = Corpus.load(JSONCorpusStorage("embeddings.json"))
    >>> session = SearchSession(corpus, EmbeddingProvider())
    >>> session.search("the ring of power")
"""

from .corpus import Corpus, CorpusIntegrityError, ParagraphContext
from .embeddings import Embedder, EmbeddingProvider
from .indexing import BuildResult, CorpusBuilder, ParagraphChunker
from .search import (
    DimensionMismatchError,
    QueryEngine,
    ScoredResult,
    UnknownBookError,
    similarity,
)
from .session import PAGE_SIZE, SearchSession, SessionBusyError
from .storage import DuckDBStorage, JSONCorpusStorage, ParagraphRecord

__all__ = [
    # Corpus
    "Corpus",
    "CorpusIntegrityError",
    "ParagraphContext",
    "ParagraphRecord",
    # Embeddings
    "Embedder",
    "EmbeddingProvider",
    # Indexing
    "BuildResult",
    "CorpusBuilder",
    "ParagraphChunker",
    # Search
    "DimensionMismatchError",
    "QueryEngine",
    "ScoredResult",
    "UnknownBookError",
    "similarity",
    # Session
    "PAGE_SIZE",
    "SearchSession",
    "SessionBusyError",
    # Storage
    "DuckDBStorage",
    "JSONCorpusStorage",
]
