"""
Configuration helpers for corpus sources and local index storage.
"""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_CORPUS_PATH = "~/.middle_earth_search/embeddings.json"
DEFAULT_DB_PATH = "~/.middle_earth_search/index.duckdb"
ENV_CORPUS_PATH = "MIDDLE_EARTH_CORPUS_PATH"
ENV_DB_PATH = "MIDDLE_EARTH_DB_PATH"

# Source filename -> book title, in build order.
DEFAULT_SOURCES: dict[str, str] = {
    "The-Fellowship-of-the-Ring.txt": "The Fellowship of the Ring",
    "The-Twin-Towers.txt": "The Two Towers",
    "Return-of-the-King.txt": "The Return of the King",
}

BOOKS: tuple[str, ...] = tuple(DEFAULT_SOURCES.values())


def _resolve(raw_path: str) -> str:
    resolved = Path(raw_path).expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return str(resolved)


def resolve_corpus_path(override_path: str | None = None) -> str:
    """
    Resolve the JSON corpus path from CLI override, env var, or default.

    Precedence:
    1) explicit override_path
    2) MIDDLE_EARTH_CORPUS_PATH
    3) default path
    """
    return _resolve(override_path or os.getenv(ENV_CORPUS_PATH) or DEFAULT_CORPUS_PATH)


def resolve_db_path(override_path: str | None = None) -> str:
    """Resolve the DuckDB path with the same precedence as the corpus path."""
    return _resolve(override_path or os.getenv(ENV_DB_PATH) or DEFAULT_DB_PATH)


def resolve_sources(
    sources: dict[str, str] | None = None,
    *,
    source_dir: str | None = None,
) -> dict[str, str]:
    """Return the source mapping with filenames anchored under *source_dir*."""
    mapping = sources if sources is not None else DEFAULT_SOURCES
    if source_dir is None:
        return dict(mapping)
    base = Path(source_dir).expanduser()
    return {str(base / filename): book for filename, book in mapping.items()}
