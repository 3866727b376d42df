"""Indexing components for Middle Earth Search."""

from .chunker import MIN_PARAGRAPH_LENGTH, ParagraphChunker
from .pipeline import BuildResult, CorpusBuilder

__all__ = [
    "MIN_PARAGRAPH_LENGTH",
    "ParagraphChunker",
    "BuildResult",
    "CorpusBuilder",
]
