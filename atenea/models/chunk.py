"""Chunk-level models returned by the vector and full-text indexes."""

from __future__ import annotations

from typing import Optional

from .document import Chunk


class RetrievedChunk(Chunk):
    """Chunk extended with retrieval scores."""

    similarity: float = 0.0
    full_text_score: Optional[float] = None
    relevance: Optional[float] = None
