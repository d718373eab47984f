"""Tantivy-based full-text index over tesis chunks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Tuple

import tantivy

from atenea.config import settings

logger = logging.getLogger(__name__)


def build_schema() -> tantivy.Schema:
    builder = tantivy.SchemaBuilder()
    builder.add_text_field("document_id", stored=True)
    builder.add_text_field("chunk_index", stored=True)
    builder.add_text_field("title", stored=True)
    builder.add_text_field("text", stored=True)
    return builder.build()


class BM25Store:
    """Wrapper around a Tantivy index."""

    def __init__(self, index_dir: Path | None = None):
        self.index_dir = Path(index_dir) if index_dir else settings.bm25_index_path_obj
        if not self.index_dir.exists():
            raise FileNotFoundError(f"BM25 index directory {self.index_dir} does not exist.")
        schema = build_schema()
        self.index = tantivy.Index(schema, path=str(self.index_dir), reuse=True)
        self.searcher = self.index.searcher()

    def _parse_query(self, query_text: str) -> tantivy.Query:
        query, errors = self.index.parse_query_lenient(
            query_text,
            default_field_names=["text", "title"],
            field_boosts={"title": 1.5, "text": 1.0},
        )
        if errors:
            logger.debug("Tantivy lenient parse warnings: %s", errors)
        return query

    def search(self, query_text: str, top_k: int = 100) -> Dict[Tuple[str, int], float]:
        """BM25 scores keyed by (document_id, chunk_index)."""
        query = self._parse_query(query_text)
        result = self.searcher.search(query, limit=top_k)
        scores: Dict[Tuple[str, int], float] = {}
        for score, doc_addr in result.hits:
            stored = self.searcher.doc(doc_addr)
            key = (stored["document_id"][0], int(stored["chunk_index"][0]))
            scores[key] = max(float(score), scores.get(key, 0.0))
        return scores


def open_bm25_store(index_dir: Path | None = None) -> BM25Store | None:
    """Open the full-text index if one has been built, otherwise run dense only."""
    try:
        return BM25Store(index_dir)
    except FileNotFoundError as exc:
        logger.info("%s Full-text boost disabled; using dense retrieval only.", exc)
        return None
