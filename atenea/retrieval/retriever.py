"""Vector retriever: dense search, optional full-text boost, per-document dedup."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from atenea.config import settings
from atenea.models.chunk import RetrievedChunk
from atenea.models.retrieval import RetrievalResult, RetrievedDocument
from atenea.repository import Repository
from atenea.retrieval.bm25_store import BM25Store
from atenea.retrieval.embedder import QueryEmbedder
from atenea.retrieval.vector_store import VectorStore

logger = logging.getLogger(__name__)


class VectorRetriever:
    """Finds the documents whose chunks are closest to a query."""

    def __init__(
        self,
        repository: Repository,
        embedder: QueryEmbedder | None = None,
        vector_store: VectorStore | None = None,
        bm25_store: BM25Store | None = None,
        top_n: int | None = None,
        similarity_floor: float | None = None,
        full_text_weight: float | None = None,
    ) -> None:
        self.repository = repository
        self.embedder = embedder or QueryEmbedder()
        self.vector_store = vector_store or VectorStore()
        self.bm25_store = bm25_store
        self.top_n = top_n or settings.retrieval_top_n
        self.similarity_floor = (
            settings.similarity_floor if similarity_floor is None else similarity_floor
        )
        self.full_text_weight = (
            settings.full_text_weight if full_text_weight is None else full_text_weight
        )
        if self.bm25_store is None:
            logger.info("No full-text index configured; relevance is dense similarity only.")

    async def check_index(self) -> None:
        """Raise EmbeddingConfigError when the index and embedder disagree."""
        await self.vector_store.ensure_compatible(self.embedder.dimension, self.embedder.model_name)

    def _blend(self, chunks: List[RetrievedChunk], query: str) -> List[RetrievedChunk]:
        if self.bm25_store is None or not chunks:
            return [chunk.model_copy(update={"relevance": chunk.similarity}) for chunk in chunks]
        full_text: Dict[Tuple[str, int], float] = self.bm25_store.search(query, top_k=self.top_n)
        best = max(full_text.values(), default=0.0)
        weight = self.full_text_weight
        blended: List[RetrievedChunk] = []
        for chunk in chunks:
            raw = full_text.get((chunk.document_id, chunk.chunk_index), 0.0)
            normalized = raw / best if best > 0 else 0.0
            blended.append(
                chunk.model_copy(
                    update={
                        "full_text_score": normalized,
                        "relevance": (1 - weight) * chunk.similarity + weight * normalized,
                    }
                )
            )
        return blended

    @staticmethod
    def _best_per_document(chunks: List[RetrievedChunk]) -> List[RetrievedChunk]:
        best: Dict[str, RetrievedChunk] = {}
        for chunk in chunks:
            current = best.get(chunk.document_id)
            if current is None or (chunk.relevance or 0.0, -chunk.chunk_index) > (
                current.relevance or 0.0,
                -current.chunk_index,
            ):
                best[chunk.document_id] = chunk
        return list(best.values())

    async def retrieve(self, query: str, limit: Optional[int] = None) -> RetrievalResult:
        """Return documents ordered by relevance desc, then id; at most limit of them."""
        vector = await self.embedder.embed(query)
        hits = await self.vector_store.search(vector, top_k=self.top_n)
        above_floor = [chunk for chunk in hits if chunk.similarity >= self.similarity_floor]
        logger.info(
            "Dense search returned %d chunks, %d above similarity floor %.2f",
            len(hits),
            len(above_floor),
            self.similarity_floor,
        )

        documents: List[RetrievedDocument] = []
        for chunk in self._best_per_document(self._blend(above_floor, query)):
            document = self.repository.get_document(chunk.document_id)
            if document is None:
                logger.warning("Indexed chunk references unknown document %s", chunk.document_id)
                continue
            documents.append(
                RetrievedDocument(
                    document=document,
                    chunk_text=chunk.text,
                    chunk_index=chunk.chunk_index,
                    similarity=chunk.similarity,
                    relevance_score=chunk.relevance if chunk.relevance is not None else chunk.similarity,
                )
            )

        documents.sort(key=lambda item: (-item.relevance_score, item.document.id))
        if limit is not None:
            documents = documents[:limit]
        return RetrievalResult(
            documents=documents,
            has_evidence=bool(documents),
            best_similarity=max((item.similarity for item in documents), default=None),
        )
