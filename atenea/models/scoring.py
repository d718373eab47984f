"""Per-query scoring models: classification, dimensional scores and scored documents."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .document import Document


class ProceduralRole(str, Enum):
    ACTOR = "Actor"
    DEMANDADO = "Demandado"
    QUEJOSO = "Quejoso"
    TERCERO_INTERESADO = "Tercero Interesado"

    @property
    def is_claimant(self) -> bool:
        return self in (ProceduralRole.ACTOR, ProceduralRole.QUEJOSO)


class SubjectMatch(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"
    NONE = "none"


class RiskFlag(str, Enum):
    """Weaknesses a lawyer should weigh before citing a criterion."""

    ISOLATED_CRITERION = "isolated_criterion"
    OLD_EPOCH = "old_epoch"
    NOT_REAFFIRMED = "not_reaffirmed"
    LIMITED_AUTHORITY = "limited_authority"
    PARTIAL_SUBJECT_MATCH = "partial_subject_match"

    @property
    def display(self) -> "RiskFlagDisplay":
        return RISK_FLAG_DISPLAY[self]


class RiskFlagDisplay(NamedTuple):
    label: str
    description: str


RISK_FLAG_DISPLAY: Dict[RiskFlag, RiskFlagDisplay] = {
    RiskFlag.ISOLATED_CRITERION: RiskFlagDisplay(
        "Tesis Aislada",
        "No es de observancia obligatoria. El juzgador puede apartarse de este criterio.",
    ),
    RiskFlag.OLD_EPOCH: RiskFlagDisplay(
        "Época Anterior",
        "Criterio de época anterior que podría no reflejar la interpretación judicial vigente.",
    ),
    RiskFlag.NOT_REAFFIRMED: RiskFlagDisplay(
        "No Reiterado",
        "Este criterio no ha sido reiterado, lo que debilita su fuerza persuasiva.",
    ),
    RiskFlag.LIMITED_AUTHORITY: RiskFlagDisplay(
        "Autoridad Limitada",
        "Emitido por órgano de menor jerarquía. Busque criterios de la SCJN si existen.",
    ),
    RiskFlag.PARTIAL_SUBJECT_MATCH: RiskFlagDisplay(
        "Match Parcial",
        "Solo existe coincidencia parcial en la materia del caso.",
    ),
}


class StrengthLabel(str, Enum):
    ALTA = "Alta"
    MEDIA = "Media"
    BAJA = "Baja"


class CaseClassification(BaseModel):
    """Formal classification of a query or case description."""

    model_config = ConfigDict(frozen=True)

    materia: str
    via_procesal: Optional[str] = None
    acto_reclamado: Optional[str] = None
    problema_juridico: str
    detected_concepts: List[str] = Field(default_factory=list)


class QueryContext(BaseModel):
    """Everything the scoring engine may look at besides the document itself."""

    model_config = ConfigDict(frozen=True)

    text: str
    classification: CaseClassification
    role: Optional[ProceduralRole] = None
    reference_year: int = Field(default_factory=lambda: date.today().year)

    @property
    def materia(self) -> str:
        return self.classification.materia


class DimensionalScore(NamedTuple):
    pertinence: int
    authority: int
    risk_flags: List[RiskFlag]
    subject_match: SubjectMatch


class LegalInsight(BaseModel):
    what_it_says: str
    when_it_applies: str
    main_risk: str
    recommendation: str


class ScoredDocument(Document):
    """A document annotated for one query.

    Raw scores are excluded from serialization, so a copy rebuilt from JSON
    carries labels and flags only.
    """

    pertinence_score: int = Field(0, ge=0, le=100, exclude=True)
    authority_score: int = Field(0, ge=0, le=100, exclude=True)
    risk_flags: List[RiskFlag] = Field(default_factory=list)
    strength: StrengthLabel
    pertinence_level: StrengthLabel
    authority_level: StrengthLabel
    strength_reason: str = ""
    applicability: str = ""
    insight: Optional[LegalInsight] = None

    @property
    def recency_key(self) -> tuple:
        return (self.publication_year or 0, self.epoch.ordinal)

    @computed_field
    @property
    def risk_details(self) -> List[Dict[str, str]]:
        return [
            {"kind": flag.value, "label": flag.display.label, "description": flag.display.description}
            for flag in self.risk_flags
        ]
