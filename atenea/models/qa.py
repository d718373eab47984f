"""Request/response models for the /api/ask endpoint."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AskRequest(BaseModel):
    """Incoming question payload."""

    question: str = Field(..., min_length=10)


class TokenUsage(CamelModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class SourceEntry(CamelModel):
    """A numbered source; entry k answers every [k] marker in the text."""

    id: str
    title: str
    citation: str
    formal_citation: str = ""
    relevance_score: float
    url: Optional[str] = None


class AnswerRecord(CamelModel):
    """Output of answer synthesis after citation resolution."""

    answer_text: str = Field(..., serialization_alias="answer")
    sources: List[SourceEntry] = Field(default_factory=list, serialization_alias="tesisUsed")
    confidence: Confidence
    has_evidence: bool
    token_usage: Optional[TokenUsage] = None
