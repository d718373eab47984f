"""Tests for atenea/retrieval/vector_store.py with a mocked AsyncQdrantClient."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from atenea.errors import EmbeddingConfigError
from atenea.retrieval.vector_store import VectorStore


def qdrant_client(size=1536, indexed_model="text-embedding-3-small", points=()):
    client = MagicMock()
    vectors = SimpleNamespace(size=size)
    client.get_collection = AsyncMock(
        return_value=SimpleNamespace(config=SimpleNamespace(params=SimpleNamespace(vectors=vectors)))
    )
    sample = [SimpleNamespace(payload={"embedding_model": indexed_model})] if indexed_model else []
    client.scroll = AsyncMock(return_value=(sample, None))
    client.query_points = AsyncMock(return_value=SimpleNamespace(points=list(points)))
    return client


def store(client):
    return VectorStore(collection="tesis_chunks", client=client)


class TestEnsureCompatible:
    async def test_matching_collection(self):
        await store(qdrant_client()).ensure_compatible(1536, "text-embedding-3-small")

    async def test_dimension_mismatch(self):
        with pytest.raises(EmbeddingConfigError, match="1024-dimensional"):
            await store(qdrant_client(size=1024)).ensure_compatible(1536, "text-embedding-3-small")

    async def test_model_mismatch(self):
        client = qdrant_client(indexed_model="BAAI/bge-m3")
        with pytest.raises(EmbeddingConfigError, match="BAAI/bge-m3"):
            await store(client).ensure_compatible(1536, "text-embedding-3-small")

    async def test_unrecorded_model_is_accepted(self):
        await store(qdrant_client(indexed_model=None)).ensure_compatible(1536, "text-embedding-3-small")


async def test_search_maps_payloads():
    points = [
        SimpleNamespace(
            id=1,
            score=0.87,
            payload={"document_id": 2000001, "chunk_index": 2, "text": "fragmento", "embedding_model": "m"},
        ),
        SimpleNamespace(id=2, score=0.5, payload={"text": "sin documento"}),
    ]
    client = qdrant_client(points=points)
    chunks = await store(client).search([0.1, 0.2], top_k=10)

    assert len(chunks) == 1
    assert chunks[0].document_id == "2000001"
    assert chunks[0].chunk_index == 2
    assert chunks[0].similarity == pytest.approx(0.87)
    kwargs = client.query_points.await_args.kwargs
    assert kwargs["collection_name"] == "tesis_chunks"
    assert kwargs["limit"] == 10
