"""Qdrant-based dense vector store."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from qdrant_client import AsyncQdrantClient

from atenea.config import settings
from atenea.errors import EmbeddingConfigError
from atenea.models.chunk import RetrievedChunk

logger = logging.getLogger(__name__)


class VectorStore:
    """Wrapper around Qdrant search over tesis chunks."""

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        collection: str | None = None,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        self.client = client or AsyncQdrantClient(
            url=url or settings.qdrant_url, api_key=api_key or settings.qdrant_api_key
        )
        self.collection = collection or settings.qdrant_collection

    async def ensure_compatible(self, dimension: int, model_name: str) -> None:
        """Fail when the collection was built with another embedding model."""
        info = await self.client.get_collection(self.collection)
        vectors = info.config.params.vectors
        size = getattr(vectors, "size", None)
        if size is None and isinstance(vectors, dict) and vectors:
            size = next(iter(vectors.values())).size
        if size != dimension:
            raise EmbeddingConfigError(
                f"Collection {self.collection} stores {size}-dimensional vectors but the "
                f"query embedder produces {dimension}. Re-index or change EMBEDDING_MODEL."
            )

        points, _ = await self.client.scroll(
            collection_name=self.collection, limit=1, with_payload=True, with_vectors=False
        )
        indexed_model: Optional[str] = None
        if points:
            indexed_model = (points[0].payload or {}).get("embedding_model")
        if indexed_model and indexed_model != model_name:
            raise EmbeddingConfigError(
                f"Collection {self.collection} was embedded with {indexed_model} but "
                f"EMBEDDING_MODEL is {model_name}."
            )
        logger.info(
            "Qdrant collection %s is compatible (%d dims, model %s)",
            self.collection,
            dimension,
            indexed_model or "unrecorded",
        )

    async def search(self, query_vector: Sequence[float], top_k: int = 100) -> List[RetrievedChunk]:
        response = await self.client.query_points(
            collection_name=self.collection,
            query=list(query_vector),
            limit=top_k,
            with_payload=True,
        )
        retrieved: List[RetrievedChunk] = []
        for point in response.points:
            payload = point.payload or {}
            document_id = payload.get("document_id")
            if not document_id:
                logger.warning("Skipping point %s without document_id payload", point.id)
                continue
            retrieved.append(
                RetrievedChunk(
                    document_id=str(document_id),
                    chunk_index=int(payload.get("chunk_index", 0)),
                    text=payload.get("text", ""),
                    embedding_model=payload.get("embedding_model"),
                    similarity=float(point.score) if point.score is not None else 0.0,
                )
            )
        return retrieved
