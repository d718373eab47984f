"""Query embedders: the OpenAI embeddings API or a local BGE-M3 model."""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Iterable, List, Optional

from FlagEmbedding import BGEM3FlagModel
from openai import APIError, APITimeoutError, AsyncOpenAI

from atenea.config import settings
from atenea.errors import ConfigurationError, UpstreamModelError
from atenea.llm.openai_client import build_async_client

logger = logging.getLogger(__name__)

BGE_M3_MODEL_NAME = "BAAI/bge-m3"

KNOWN_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
    BGE_M3_MODEL_NAME: 1024,
}


@lru_cache(maxsize=1)
def get_bge_m3_embedder() -> BGEM3FlagModel:
    """Load the embedding model once per process."""
    return BGEM3FlagModel(BGE_M3_MODEL_NAME, use_fp16=False, devices="cpu")


def embed_queries(queries: Iterable[str]) -> List[List[float]]:
    model = get_bge_m3_embedder()
    result = model.encode_queries(list(queries))["dense_vecs"]
    return [vec.tolist() for vec in result]


class QueryEmbedder:
    """Turns query text into a vector in the same space as the indexed chunks."""

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.provider = provider or settings.embedding_provider
        if self.provider == "bge-m3":
            self.model_name = BGE_M3_MODEL_NAME
        elif self.provider == "openai":
            self.model_name = model or settings.embedding_model
        else:
            raise ConfigurationError(f"Unknown embedding provider: {self.provider!r}")
        self._client = client

    @property
    def dimension(self) -> int:
        if settings.embedding_dimension:
            return settings.embedding_dimension
        try:
            return KNOWN_DIMENSIONS[self.model_name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown dimension for embedding model {self.model_name!r}; set EMBEDDING_DIMENSION."
            ) from None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = build_async_client()
        return self._client

    async def embed(self, text: str) -> List[float]:
        if self.provider == "bge-m3":
            vectors = await asyncio.to_thread(embed_queries, [text])
            return vectors[0]
        try:
            response = await self.client.embeddings.create(model=self.model_name, input=[text])
        except (APITimeoutError, APIError) as exc:
            logger.error("Query embedding failed: %s", exc)
            raise UpstreamModelError("query embedding", exc) from exc
        return list(response.data[0].embedding)
