"""Tests for the embedding provider."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any

import pytest

from middle_earth_search.embeddings import EmbeddingProvider, l2_normalize


# ---------------------------------------------------------------------------
# Mock helpers
# ---------------------------------------------------------------------------


@dataclass
class _FakeEmbedding:
    values: list[float]


@dataclass
class _FakeEmbedResult:
    embeddings: list[_FakeEmbedding]


class _FakeModels:
    """Records calls and returns deterministic, non-normalized embeddings."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def embed_content(
        self, *, model: str, contents: list[str], config: dict
    ) -> _FakeEmbedResult:
        self.calls.append({"model": model, "contents": contents, "config": config})
        dim = config.get("output_dimensionality", 384)
        return _FakeEmbedResult(
            embeddings=[_FakeEmbedding(values=[3.0] * dim) for _ in contents]
        )


class _FakeClient:
    def __init__(self) -> None:
        self.models = _FakeModels()


# ---------------------------------------------------------------------------
# Unit tests (mock-based, no API key needed)
# ---------------------------------------------------------------------------


def test_embed_returns_unit_vector_of_configured_dim() -> None:
    client = _FakeClient()
    provider = EmbeddingProvider(client=client, dim=4)

    vector = provider.embed("Three Rings for the Elven-kings under the sky")

    assert len(vector) == 4
    assert math.isclose(sum(v * v for v in vector), 1.0)
    assert vector == pytest.approx([0.5, 0.5, 0.5, 0.5])


def test_embed_sends_single_text_with_shared_task_type() -> None:
    client = _FakeClient()
    provider = EmbeddingProvider(client=client, dim=4)

    provider.embed("Mordor")

    call = client.models.calls[0]
    assert call["contents"] == ["Mordor"]
    assert call["config"]["task_type"] == "SEMANTIC_SIMILARITY"
    assert call["config"]["output_dimensionality"] == 4


def test_l2_normalize_leaves_zero_vector_alone() -> None:
    assert l2_normalize([0.0, 0.0]) == [0.0, 0.0]
    assert l2_normalize([3, 4]) == pytest.approx([0.6, 0.8])


def test_env_overrides(monkeypatch) -> None:
    client = _FakeClient()
    monkeypatch.setenv("MIDDLE_EARTH_EMBEDDING_MODEL", "custom-model-001")
    monkeypatch.setenv("MIDDLE_EARTH_EMBEDDING_DIM", "256")

    provider = EmbeddingProvider(client=client)

    assert provider.model == "custom-model-001"
    assert provider.dim == 256

    provider.embed("test")
    call = client.models.calls[0]
    assert call["model"] == "custom-model-001"
    assert call["config"]["output_dimensionality"] == 256


def test_missing_api_key_raises(monkeypatch) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(ValueError, match="GOOGLE_API_KEY"):
        EmbeddingProvider(api_key=None, client=None)


# ---------------------------------------------------------------------------
# Real API integration test (skipped unless GOOGLE_API_KEY is set)
# ---------------------------------------------------------------------------


@pytest.mark.skipif(
    not os.getenv("GOOGLE_API_KEY"),
    reason="GOOGLE_API_KEY not set, skipping real embedding test",
)
def test_real_embedding_api() -> None:
    provider = EmbeddingProvider(dim=128)

    first = provider.embed("The Shire is quiet in the autumn.")
    second = provider.embed("The Shire is quiet in the autumn.")

    assert len(first) == 128
    assert math.isclose(sum(v * v for v in first), 1.0, rel_tol=1e-6)
    assert first == pytest.approx(second, abs=1e-4)
