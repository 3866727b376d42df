from __future__ import annotations

import hashlib
from typing import Callable

import pytest

from middle_earth_search.corpus import Corpus
from middle_earth_search.embeddings import l2_normalize
from middle_earth_search.storage import ParagraphRecord


class StubEmbedder:
    """Deterministic embedder: table lookup first, hash-based vector otherwise."""

    def __init__(self, table: dict[str, list[float]] | None = None, dim: int = 4) -> None:
        self.table = table or {}
        self.dim = dim
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self.table:
            return list(self.table[text])
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return l2_normalize([digest[i] - 127.5 for i in range(self.dim)])


def paragraph(label: str) -> str:
    """Return a paragraph long enough to survive chunking."""
    return f"{label} " + "x" * 60


@pytest.fixture()
def stub_embedder() -> StubEmbedder:
    return StubEmbedder()


@pytest.fixture()
def make_embedder() -> type[StubEmbedder]:
    return StubEmbedder


@pytest.fixture()
def make_paragraph() -> Callable[[str], str]:
    return paragraph


@pytest.fixture()
def make_corpus() -> Callable[..., Corpus]:
    def _make(rows: list[tuple[str, str, list[float]]]) -> Corpus:
        return Corpus(
            [
                ParagraphRecord(id=i, text=text, book=book, vector=vector)
                for i, (text, book, vector) in enumerate(rows)
            ]
        )

    return _make


@pytest.fixture()
def three_book_corpus(make_corpus) -> Corpus:
    return make_corpus(
        [
            ("Frodo sat in the garden at Bag End for a long while.", "The Fellowship of the Ring", [1.0, 0.0]),
            ("Gandalf spoke of the One Ring and its long history.", "The Fellowship of the Ring", [0.0, 1.0]),
            ("The Ents marched upon Isengard in the grey morning.", "The Two Towers", [0.6, 0.8]),
            ("Gollum led the hobbits through the Dead Marshes slowly.", "The Two Towers", [0.8, 0.6]),
            ("The Ring was cast into the fire of Mount Doom at last.", "The Return of the King", [1.0, 0.0]),
            ("Aragorn was crowned king before the gates of Minas Tirith.", "The Return of the King", [0.0, 1.0]),
        ]
    )
