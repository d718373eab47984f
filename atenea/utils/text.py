"""Text normalization and token counting helpers."""

from __future__ import annotations

import logging
import re
import unicodedata
from functools import lru_cache
from typing import List, Optional

import tiktoken

from atenea.config import settings

logger = logging.getLogger(__name__)

NON_WORD_PATTERN = re.compile(r"[^\w\s]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Lower-case and strip accents so 'Época' and 'epoca' compare equal."""
    decomposed = unicodedata.normalize("NFD", (text or "").lower())
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def tokenize(text: Optional[str]) -> List[str]:
    """Split normalized text into words longer than two characters."""
    cleaned = NON_WORD_PATTERN.sub(" ", normalize_text(text))
    return [word for word in WHITESPACE_PATTERN.split(cleaned) if len(word) > 2]


@lru_cache(maxsize=1)
def get_cl100k_encoding() -> Optional[tiktoken.Encoding]:
    """Load the OpenAI tokenizer, or None when the operator allowed the fallback."""
    try:
        return tiktoken.get_encoding("cl100k_base")
    except Exception as exc:
        if not settings.allow_tiktoken_fallback:
            raise RuntimeError(
                f"Failed to load tiktoken 'cl100k_base': {exc}. "
                "Set ALLOW_TIKTOKEN_FALLBACK=1 to count whitespace tokens instead."
            ) from exc
        logger.warning(
            "Failed to load tiktoken 'cl100k_base' (%s). Using whitespace token approximation.",
            exc,
        )
        return None


def count_tokens(text: str, encoding: Optional[tiktoken.Encoding]) -> int:
    """Count tokens using tiktoken if available, otherwise whitespace approximation."""
    if encoding:
        return len(encoding.encode(text))
    return len(text.split())


def truncate_tokens(text: str, max_tokens: int, encoding: Optional[tiktoken.Encoding]) -> str:
    """Cut text down to at most max_tokens tokens."""
    if encoding:
        tokens = encoding.encode(text)
        if len(tokens) <= max_tokens:
            return text
        return encoding.decode(tokens[:max_tokens]).rstrip() + "..."
    words = text.split()
    if len(words) <= max_tokens:
        return text
    return " ".join(words[:max_tokens]) + "..."
