"""
Corpus building pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

from .chunker import ParagraphChunker
from ..embeddings import Embedder
from ..search.semantic import DimensionMismatchError
from ..storage import ParagraphRecord, StorageBackend

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class BuildResult:
    """Summary output for a corpus build."""

    records: list[ParagraphRecord]
    failed_sources: list[str] = field(default_factory=list)
    paragraphs_per_book: dict[str, int] = field(default_factory=dict)
    dimension: int | None = None
    records_persisted: int = 0


class CorpusBuilder:
    """Split sources into paragraphs, embed them and persist the sequence."""

    def __init__(
        self,
        embedder: Embedder,
        chunker: ParagraphChunker | None = None,
        storages: Sequence[StorageBackend] = (),
    ) -> None:
        self.embedder = embedder
        self.chunker = chunker or ParagraphChunker()
        self.storages = list(storages)

    def build(
        self,
        sources: Mapping[str, str],
        *,
        on_progress: ProgressCallback | None = None,
    ) -> BuildResult:
        """
        Build the corpus from a mapping of file path to book label.

        Sources are processed in mapping order and share one id counter.
        Unreadable sources are logged and skipped.
        """
        # Pass 1: read and split every source
        pending: list[tuple[str, str]] = []  # (book, paragraph)
        failed_sources: list[str] = []
        paragraphs_per_book: dict[str, int] = {}

        for source, book in sources.items():
            logger.info("Reading %s (%s)", source, book)
            try:
                raw_text = self._read_source(source)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Error reading %s, skipping: %s", source, exc)
                failed_sources.append(source)
                continue

            paragraphs = self.chunker.split(raw_text)
            logger.info("Found %d paragraphs in %s", len(paragraphs), book)
            paragraphs_per_book[book] = paragraphs_per_book.get(book, 0) + len(paragraphs)
            pending.extend((book, paragraph) for paragraph in paragraphs)

        # Pass 2: embed sequentially, the embedder is not assumed thread-safe
        records: list[ParagraphRecord] = []
        dimension: int | None = None
        total = len(pending)
        for next_id, (book, text) in enumerate(pending):
            vector = self.embedder.embed(text)
            if dimension is None:
                dimension = len(vector)
            elif len(vector) != dimension:
                raise DimensionMismatchError(dimension, len(vector))

            records.append(ParagraphRecord(id=next_id, text=text, book=book, vector=vector))
            if on_progress is not None:
                on_progress((next_id + 1) / total)

        if on_progress is not None and total == 0:
            on_progress(1.0)

        persisted = 0
        for storage in self.storages:
            persisted = storage.save_paragraphs(records)
        logger.info("Saved %d total paragraphs", len(records))

        return BuildResult(
            records=records,
            failed_sources=failed_sources,
            paragraphs_per_book=paragraphs_per_book,
            dimension=dimension,
            records_persisted=persisted,
        )

    @staticmethod
    def _read_source(source: str) -> str:
        with open(source, "r", encoding="utf-8") as f:
            return f.read()
