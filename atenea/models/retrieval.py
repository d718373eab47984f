"""Retrieval models: scored chunks, retrieved documents and prompt context blocks."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .chunk import RetrievedChunk
from .document import Document


class RetrievedDocument(BaseModel):
    """A document represented by its best-matching chunk."""

    document: Document
    chunk_text: str
    chunk_index: int
    similarity: float
    relevance_score: float


class RetrievalResult(BaseModel):
    """Deduplicated candidates for one query."""

    documents: List[RetrievedDocument] = Field(default_factory=list)
    has_evidence: bool = False
    best_similarity: Optional[float] = None


class ContextBlock(BaseModel):
    """One numbered source handed to the answer model."""

    index: int = Field(..., ge=1)
    document_id: str
    title: str
    citation: str
    formal_citation: str = ""
    url: Optional[str] = None
    metadata: str = ""
    excerpt: str
    relevance_score: float


__all__ = ["ContextBlock", "RetrievalResult", "RetrievedChunk", "RetrievedDocument"]
