"""Utilities for assembling numbered context blocks from retrieved documents."""

from __future__ import annotations

import logging
from typing import List, Optional

from atenea.config import settings
from atenea.models.document import Document
from atenea.models.retrieval import ContextBlock, RetrievedDocument
from atenea.utils.text import count_tokens, get_cl100k_encoding, truncate_tokens

logger = logging.getLogger(__name__)


def format_citation(document: Document) -> str:
    """Short citation: "rubro". tipo. órgano. época. fuente. Tomo X, página Y"""
    parts: List[str] = []
    if document.title:
        parts.append(f'"{document.title}"')
    parts.append(document.type.value)
    parts.append(document.body_label)
    parts.append(document.epoch.label)
    if document.source:
        parts.append(document.source)
    if document.volume and document.page:
        parts.append(f"Tomo {document.volume}, página {document.page}")
    return ". ".join(parts)


def format_formal_citation(document: Document) -> str:
    """Citation ready to paste into a brief: upper-case rubro, then locator metadata."""
    lines: List[str] = []
    if document.title:
        lines.append(document.title.upper())

    meta: List[str] = [document.type.value, document.issuing_body.value]
    if document.court_name and document.court_name != document.issuing_body.value:
        meta.append(document.court_name)
    meta.append(document.epoch.label)
    if document.source:
        meta.append(document.source)

    location: List[str] = []
    if document.book:
        location.append(f"Libro {document.book}")
    if document.volume:
        location.append(f"Tomo {document.volume}")
    if document.month and document.publication_year:
        location.append(f"{document.month} de {document.publication_year}")
    elif document.publication_year:
        location.append(str(document.publication_year))
    if document.page:
        location.append(f"página {document.page}")
    if location:
        meta.append(", ".join(location))

    if document.thesis_number:
        meta.append(f"Tesis: {document.thesis_number}")
    if document.subject_matter:
        meta.append(f"Materia(s): {document.materias}")
    lines.append(". ".join(meta) + ".")
    return "\n".join(lines)


def _metadata_line(document: Document) -> str:
    return (
        f"Tipo: {document.type.value} | Órgano: {document.body_label} | "
        f"Época: {document.epoch.label} | Materia: {document.materias or 'N/A'} | "
        f"Registro digital: {document.id}"
    )


def build_context_blocks(
    retrieved: List[RetrievedDocument],
    max_blocks: Optional[int] = None,
    max_tokens: Optional[int] = None,
) -> List[ContextBlock]:
    """Number the retrieved documents 1..N and trim excerpts to the token budget.

    The first block is always kept, truncated if it alone exceeds the budget.
    """
    if max_blocks is None:
        max_blocks = settings.max_sources
    if max_tokens is None:
        max_tokens = settings.max_context_tokens
    encoding = get_cl100k_encoding()

    blocks: List[ContextBlock] = []
    tokens_left = max_tokens
    for item in retrieved[:max_blocks]:
        document = item.document
        excerpt = truncate_tokens(item.chunk_text.strip(), settings.max_excerpt_tokens, encoding)
        metadata = _metadata_line(document)
        block_tokens = count_tokens(f"{document.title}\n{metadata}\n{excerpt}", encoding)
        if block_tokens > tokens_left:
            if blocks:
                logger.info("Context budget exhausted after %d blocks", len(blocks))
                break
            excerpt = truncate_tokens(excerpt, max(tokens_left // 2, 1), encoding)
        tokens_left = max(tokens_left - block_tokens, 0)
        blocks.append(
            ContextBlock(
                index=len(blocks) + 1,
                document_id=document.id,
                title=document.title,
                citation=format_citation(document),
                formal_citation=format_formal_citation(document),
                url=document.origin_url,
                metadata=metadata,
                excerpt=excerpt,
                relevance_score=item.relevance_score,
            )
        )
    return blocks
