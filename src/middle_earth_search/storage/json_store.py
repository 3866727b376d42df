"""
JSON interchange storage for the paragraph sequence.

The file is a single JSON array of ``{"id", "text", "book", "vector"}``
objects, written in one piece.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Sequence

from .base import ParagraphRecord


class JSONCorpusStorage:
    """Persist the corpus as one ``embeddings.json`` document."""

    def __init__(self, path: str) -> None:
        self.path = str(Path(path).expanduser().resolve())

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def save_paragraphs(self, records: Sequence[ParagraphRecord]) -> int:
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump([record.to_dict() for record in records], f)
        os.replace(tmp_path, self.path)
        return len(records)

    def load_paragraphs(self) -> list[ParagraphRecord]:
        with open(self.path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise ValueError(f"Corpus file {self.path} must contain a JSON array.")
        return [ParagraphRecord.from_dict(item) for item in raw]
