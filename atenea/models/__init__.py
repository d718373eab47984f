"""Typed models shared across the application."""

from .analysis import (
    AnalysisResult,
    AnalyzeRequest,
    ArgumentRequest,
    CitedTesis,
    GeneratedArgument,
    HistoryEntry,
    Tone,
    WritingType,
)
from .chunk import RetrievedChunk
from .document import Chunk, Document, DocumentType, Epoch, IssuingBody
from .qa import AnswerRecord, AskRequest, Confidence, SourceEntry, TokenUsage
from .retrieval import ContextBlock, RetrievalResult, RetrievedDocument
from .scoring import (
    CaseClassification,
    DimensionalScore,
    LegalInsight,
    ProceduralRole,
    QueryContext,
    RiskFlag,
    ScoredDocument,
    StrengthLabel,
    SubjectMatch,
)

__all__ = [
    "AnalysisResult",
    "AnalyzeRequest",
    "AnswerRecord",
    "ArgumentRequest",
    "AskRequest",
    "CaseClassification",
    "Chunk",
    "CitedTesis",
    "Confidence",
    "ContextBlock",
    "DimensionalScore",
    "Document",
    "DocumentType",
    "Epoch",
    "GeneratedArgument",
    "HistoryEntry",
    "IssuingBody",
    "LegalInsight",
    "ProceduralRole",
    "QueryContext",
    "RetrievalResult",
    "RetrievedChunk",
    "RetrievedDocument",
    "RiskFlag",
    "ScoredDocument",
    "SourceEntry",
    "StrengthLabel",
    "SubjectMatch",
    "TokenUsage",
    "Tone",
    "WritingType",
]
