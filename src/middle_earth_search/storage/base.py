"""
Storage interfaces and data models for corpus persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence


@dataclass(frozen=True)
class ParagraphRecord:
    """One indexed paragraph: its text, book and embedding."""

    id: int
    text: str
    book: str
    vector: list[float] = field(repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "book": self.book,
            "vector": list(self.vector),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ParagraphRecord":
        return cls(
            id=int(raw["id"]),
            text=str(raw["text"]),
            book=str(raw["book"]),
            vector=[float(value) for value in raw["vector"]],
        )


class StorageBackend(Protocol):
    """Protocol for persisting and loading the paragraph sequence."""

    def save_paragraphs(self, records: Sequence[ParagraphRecord]) -> int:
        """Replace the stored corpus with *records*. Return count written."""

    def load_paragraphs(self) -> list[ParagraphRecord]:
        """Return every stored record ordered by id."""
