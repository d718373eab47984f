"""Retrieval stack utilities."""

from .bm25_store import BM25Store, open_bm25_store
from .embedder import QueryEmbedder
from .evidence import build_context_blocks, format_citation, format_formal_citation
from .retriever import VectorRetriever
from .vector_store import VectorStore

__all__ = [
    "BM25Store",
    "QueryEmbedder",
    "VectorRetriever",
    "VectorStore",
    "build_context_blocks",
    "format_citation",
    "format_formal_citation",
    "open_bm25_store",
]
