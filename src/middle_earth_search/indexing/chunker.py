"""
Chunking utilities for splitting book text into paragraphs.
"""

from __future__ import annotations

import re

_BLANK_LINES_RE = re.compile(r"\n\s*\n")

MIN_PARAGRAPH_LENGTH = 50


class ParagraphChunker:
    """
    Blank-line paragraph splitter.

    Paragraphs are trimmed; only those strictly longer than ``min_length``
    characters are kept.
    """

    def __init__(self, min_length: int = MIN_PARAGRAPH_LENGTH) -> None:
        if min_length < 0:
            raise ValueError("min_length must be >= 0")
        self.min_length = min_length

    def split(self, text: str) -> list[str]:
        paragraphs = (part.strip() for part in _BLANK_LINES_RE.split(text))
        return [p for p in paragraphs if len(p) > self.min_length]
