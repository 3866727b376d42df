"""
Immutable handle over a loaded paragraph corpus.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from .storage import ParagraphRecord, StorageBackend


class CorpusIntegrityError(ValueError):
    """Raised when a paragraph sequence breaks the corpus invariants."""


@dataclass(frozen=True)
class ParagraphContext:
    """A paragraph with its positional neighbours (which may be in other books)."""

    current: ParagraphRecord
    previous: ParagraphRecord | None
    next: ParagraphRecord | None


class Corpus:
    """
    Ordered, read-only paragraph sequence.

    Record ``i`` lives at offset ``i``; every vector has the same length.
    """

    def __init__(self, records: Sequence[ParagraphRecord]) -> None:
        self._records: tuple[ParagraphRecord, ...] = tuple(records)
        self._dimension = self._validate(self._records)
        books: list[str] = []
        for record in self._records:
            if record.book not in books:
                books.append(record.book)
        self._books = tuple(books)

    @classmethod
    def load(cls, storage: StorageBackend) -> "Corpus":
        return cls(storage.load_paragraphs())

    @staticmethod
    def _validate(records: tuple[ParagraphRecord, ...]) -> int | None:
        dimension: int | None = None
        for offset, record in enumerate(records):
            if record.id != offset:
                raise CorpusIntegrityError(
                    f"Record at offset {offset} has id {record.id}; "
                    "ids must be contiguous from 0."
                )
            if dimension is None:
                dimension = len(record.vector)
            elif len(record.vector) != dimension:
                raise CorpusIntegrityError(
                    f"Record {record.id} has a vector of length {len(record.vector)}, "
                    f"expected {dimension}."
                )
        return dimension

    @property
    def dimension(self) -> int | None:
        """Shared vector length, or ``None`` for an empty corpus."""
        return self._dimension

    @property
    def books(self) -> tuple[str, ...]:
        """Book labels in order of first appearance."""
        return self._books

    @property
    def records(self) -> tuple[ParagraphRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ParagraphRecord]:
        return iter(self._records)

    def get(self, record_id: int) -> ParagraphRecord | None:
        if 0 <= record_id < len(self._records):
            return self._records[record_id]
        return None

    def context(self, record_id: int) -> ParagraphContext:
        """Return the record and its neighbours, ignoring any book filter."""
        current = self.get(record_id)
        if current is None:
            raise KeyError(f"No paragraph with id {record_id}")
        return ParagraphContext(
            current=current,
            previous=self.get(record_id - 1),
            next=self.get(record_id + 1),
        )
