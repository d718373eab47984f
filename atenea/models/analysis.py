"""Case-analysis, argument and history records."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .scoring import CaseClassification, ProceduralRole, ScoredDocument


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AnalyzeRequest(BaseModel):
    descripcion: str = Field(..., min_length=10)
    rol_procesal: Optional[ProceduralRole] = None


class AnalysisResult(BaseModel):
    id: str = Field(default_factory=_new_id)
    descripcion: str
    problema_juridico: str
    clasificacion: CaseClassification
    tesis_relevantes: List[ScoredDocument] = Field(default_factory=list)
    insight_juridico: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)


class WritingType(str, Enum):
    DEMANDA = "Demanda"
    CONTESTACION = "Contestación"
    AMPARO = "Amparo"


class Tone(str, Enum):
    CONSERVADOR = "Conservador"
    TECNICO = "Técnico"
    CONTUNDENTE = "Contundente"


class ArgumentRequest(BaseModel):
    tesis_id: str = Field(..., min_length=1)
    tipo_escrito: WritingType
    rol_procesal: ProceduralRole
    tono: Tone


class GeneratedArgument(BaseModel):
    id: str = Field(default_factory=_new_id)
    tesis_id: str
    tesis_title: str
    tipo_escrito: WritingType
    rol_procesal: ProceduralRole
    tono: Tone
    parrafos: List[str]
    cita_formal: str
    created_at: datetime = Field(default_factory=_now)


class CitedTesis(BaseModel):
    id: str
    title: str


class HistoryEntry(BaseModel):
    id: str
    titulo: str
    descripcion: str
    problema_juridico: str
    tesis_usadas: List[CitedTesis] = Field(default_factory=list)
    argumentos_generados: List[GeneratedArgument] = Field(default_factory=list)
    created_at: datetime
