"""Domain exceptions shared by the services and the HTTP layer."""

from __future__ import annotations

from typing import Optional


class AteneaError(Exception):
    """Base class for every error raised on purpose by the application."""


class ConfigurationError(AteneaError):
    """Missing or inconsistent configuration detected at startup."""


class EmbeddingConfigError(ConfigurationError):
    """The query embedder does not match the model the corpus was indexed with."""


class ValidationError(AteneaError):
    """User input that the caller can correct (HTTP 400)."""


class NotFoundError(AteneaError):
    """Unknown document, analysis or argument id (HTTP 404)."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} {identifier} not found")
        self.kind = kind
        self.identifier = identifier


class EvidenceInsufficientError(AteneaError):
    """Retrieval produced nothing usable; surfaced as has_evidence=False, never as HTTP."""


class UpstreamModelError(AteneaError):
    """Embedding or generation API failure after the allowed retry."""

    user_message = "No fue posible procesar la consulta en este momento. Intente de nuevo más tarde."

    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{operation} failed: {cause}" if cause else f"{operation} failed")
        self.operation = operation
        self.cause = cause


class CitationIntegrityError(AteneaError):
    """A citation marker in generated text that points at no supplied source."""

    def __init__(self, marker: str, reason: str) -> None:
        super().__init__(f"{marker}: {reason}")
        self.marker = marker
        self.reason = reason
