"""Storage backends for the paragraph corpus."""

from .base import ParagraphRecord, StorageBackend
from .duckdb import DuckDBStorage
from .json_store import JSONCorpusStorage

__all__ = [
    "ParagraphRecord",
    "StorageBackend",
    "DuckDBStorage",
    "JSONCorpusStorage",
]
