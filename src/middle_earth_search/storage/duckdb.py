"""
DuckDB storage backend for corpus persistence.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import duckdb

from .base import ParagraphRecord


class DuckDBStorage:
    """DuckDB-backed persistence for the paragraph sequence."""

    def __init__(
        self,
        db_path: str,
        *,
        read_only: bool = False,
        initialize: bool = True,
    ) -> None:
        self.db_path = str(Path(db_path).expanduser().resolve())
        self.read_only = read_only
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = duckdb.connect(self.db_path, read_only=read_only)
        if initialize and not read_only:
            self.initialize()

    def close(self) -> None:
        """Close the underlying DuckDB connection."""
        self._conn.close()

    def initialize(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS paragraphs (
                id INTEGER PRIMARY KEY,
                text VARCHAR NOT NULL,
                book VARCHAR NOT NULL,
                vector DOUBLE[] NOT NULL
            );
            """
        )

    def save_paragraphs(self, records: Sequence[ParagraphRecord]) -> int:
        # The corpus has no versioning; a rebuild always replaces every row.
        self._conn.begin()
        try:
            self._conn.execute("DELETE FROM paragraphs")
            if records:
                self._conn.executemany(
                    "INSERT INTO paragraphs (id, text, book, vector) VALUES (?, ?, ?, ?)",
                    [
                        (record.id, record.text, record.book, list(record.vector))
                        for record in records
                    ],
                )
        except duckdb.Error:
            self._conn.rollback()
            raise
        self._conn.commit()
        return len(records)

    def load_paragraphs(self) -> list[ParagraphRecord]:
        rows = self._conn.execute(
            "SELECT id, text, book, vector FROM paragraphs ORDER BY id"
        ).fetchall()
        return [
            ParagraphRecord(
                id=int(row[0]),
                text=str(row[1]),
                book=str(row[2]),
                vector=[float(value) for value in row[3]],
            )
            for row in rows
        ]

    def count_paragraphs(self, *, book: str | None = None) -> int:
        if book is None:
            row = self._conn.execute("SELECT COUNT(*) FROM paragraphs").fetchone()
        else:
            row = self._conn.execute(
                "SELECT COUNT(*) FROM paragraphs WHERE book = ?", [book]
            ).fetchone()
        return int(row[0]) if row else 0

    def list_books(self) -> list[str]:
        """Return stored book labels in order of first appearance."""
        rows = self._conn.execute(
            """
            SELECT book
            FROM paragraphs
            GROUP BY book
            ORDER BY MIN(id)
            """
        ).fetchall()
        return [str(row[0]) for row in rows]
