"""
Embedding provider for vector-based semantic search.

Wraps the Google GenAI embedding API behind the narrow ``Embedder``
capability used by corpus building and querying. Vectors are L2-normalized
so that a plain dot product equals cosine similarity.
"""

from __future__ import annotations

import math
import os
from typing import Any, Protocol, Sequence

from google.genai import Client as GenAIClient


_DEFAULT_MODEL = "gemini-embedding-001"
_DEFAULT_DIM = 384


class Embedder(Protocol):
    """Anything that turns text into a fixed-length unit vector."""

    def embed(self, text: str) -> list[float]:
        """Return a deterministic, unit-normalized embedding for *text*."""


def l2_normalize(vector: Sequence[float]) -> list[float]:
    """Scale *vector* to unit length. Zero vectors are returned unchanged."""
    norm = math.sqrt(sum(value * value for value in vector))
    if norm == 0.0:
        return [float(value) for value in vector]
    return [float(value) / norm for value in vector]


class EmbeddingProvider:
    """Generate text embeddings via Google GenAI."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        dim: int | None = None,
        client: Any | None = None,
    ) -> None:
        self.model = model or os.getenv("MIDDLE_EARTH_EMBEDDING_MODEL", _DEFAULT_MODEL)
        self.dim = dim or int(os.getenv("MIDDLE_EARTH_EMBEDDING_DIM", str(_DEFAULT_DIM)))

        if client is not None:
            self._client = client
        else:
            resolved_key = api_key or os.getenv("GOOGLE_API_KEY")
            if resolved_key is None:
                raise ValueError(
                    "GOOGLE_API_KEY not found. "
                    "Provide api_key or set the environment variable."
                )
            self._client = GenAIClient(api_key=resolved_key)

    def embed(self, text: str, *, task_type: str = "SEMANTIC_SIMILARITY") -> list[float]:
        """Embed a single text and return its unit-length vector.

        Paragraphs and queries share one task type so both land in the same
        embedding space.
        """
        result = self._client.models.embed_content(
            model=self.model,
            contents=[text],
            config={
                "task_type": task_type,
                "output_dimensionality": self.dim,
            },
        )
        return l2_normalize(result.embeddings[0].values)
