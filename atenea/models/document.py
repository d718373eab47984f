"""Document-level data models: tesis/precedentes and their closed enumerations."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from atenea.utils.text import normalize_text

EPOCH_NUMBER_PATTERN = re.compile(r"\b(\d{1,2})\s*a\b")
COLLEGIATE_PATTERN = re.compile(r"tribunal(es)? colegiados?")


class DocumentType(str, Enum):
    """Jurisprudencia binds lower courts; a Tesis Aislada only persuades."""

    JURISPRUDENCIA = "Jurisprudencia"
    TESIS_AISLADA = "Tesis Aislada"

    @classmethod
    def parse(cls, raw: Any) -> "DocumentType":
        if isinstance(raw, cls):
            return raw
        label = normalize_text(str(raw))
        if "jurisprudencia" in label:
            return cls.JURISPRUDENCIA
        if "aislada" in label:
            return cls.TESIS_AISLADA
        raise ValueError(f"Unknown document type: {raw!r}")


class IssuingBody(str, Enum):
    """Issuing bodies of the federal judiciary, highest hierarchy first."""

    PLENO = "Pleno"
    SCJN = "SCJN"
    SALA = "Sala"
    OTHER_CHAMBER = "Otra Sala"
    TRIBUNAL_COLEGIADO = "Tribunal Colegiado"
    TRIBUNAL = "Tribunal"
    OTHER = "Otro"

    @property
    def rank(self) -> int:
        return len(ISSUING_BODY_ORDER) - ISSUING_BODY_ORDER.index(self)

    @classmethod
    def parse(cls, raw: Any) -> "IssuingBody":
        if isinstance(raw, cls):
            return raw
        text = str(raw or "")
        for member in cls:
            if text == member.value:
                return member
        label = normalize_text(text)
        if "pleno" in label:
            return cls.PLENO
        if "scjn" in label or "suprema corte" in label:
            return cls.SCJN
        if "sala" in label and ("primera" in label or "segunda" in label):
            return cls.SALA
        if "sala" in label:
            return cls.OTHER_CHAMBER
        if COLLEGIATE_PATTERN.search(label):
            return cls.TRIBUNAL_COLEGIADO
        if "tribunal" in label:
            return cls.TRIBUNAL
        return cls.OTHER


ISSUING_BODY_ORDER = list(IssuingBody)


class Epoch(str, Enum):
    """Ordinal eras of the Semanario Judicial de la Federación."""

    UNDECIMA = "11a"
    DECIMA = "10a"
    NOVENA = "9a"
    OCTAVA = "8a"
    SEPTIMA = "7a"
    SEXTA = "6a"
    QUINTA = "5a"

    @property
    def ordinal(self) -> int:
        return int(self.value[:-1])

    @property
    def label(self) -> str:
        return EPOCH_LABELS[self]

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Epoch":
        for member in cls:
            if member.ordinal == ordinal:
                return member
        raise ValueError(f"Untracked epoch ordinal: {ordinal}")

    @classmethod
    def parse(cls, raw: Any) -> "Epoch":
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, int):
            return cls.from_ordinal(raw)
        label = normalize_text(str(raw)).strip()
        for member in cls:
            if label == member.value:
                return member
        # "undecima" contains "decima": the table is checked most recent first.
        for word, member in EPOCH_WORDS:
            if word in label:
                return member
        match = EPOCH_NUMBER_PATTERN.search(label)
        if match:
            return cls.from_ordinal(int(match.group(1)))
        raise ValueError(f"Unknown epoch: {raw!r}")


EPOCH_WORDS = [
    ("undecima", Epoch.UNDECIMA),
    ("onceava", Epoch.UNDECIMA),
    ("decima", Epoch.DECIMA),
    ("novena", Epoch.NOVENA),
    ("octava", Epoch.OCTAVA),
    ("septima", Epoch.SEPTIMA),
    ("sexta", Epoch.SEXTA),
    ("quinta", Epoch.QUINTA),
]

EPOCH_LABELS = {
    Epoch.UNDECIMA: "Undécima Época",
    Epoch.DECIMA: "Décima Época",
    Epoch.NOVENA: "Novena Época",
    Epoch.OCTAVA: "Octava Época",
    Epoch.SEPTIMA: "Séptima Época",
    Epoch.SEXTA: "Sexta Época",
    Epoch.QUINTA: "Quinta Época",
}


class Document(BaseModel):
    """A published tesis or precedente. Immutable once ingested."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Registro digital.")
    title: str
    abstract: str = ""
    full_text: str = ""
    type: DocumentType
    issuing_body: IssuingBody
    epoch: Epoch
    subject_matter: List[str] = Field(default_factory=list)
    publication_year: Optional[int] = None
    thesis_number: str = ""
    court_name: str = ""
    source: str = ""
    book: str = ""
    volume: str = ""
    month: str = ""
    page: str = ""
    integration_forms: str = ""
    origin_url: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> DocumentType:
        return DocumentType.parse(value)

    @field_validator("issuing_body", mode="before")
    @classmethod
    def _parse_issuing_body(cls, value: Any) -> IssuingBody:
        return IssuingBody.parse(value)

    @field_validator("epoch", mode="before")
    @classmethod
    def _parse_epoch(cls, value: Any) -> Epoch:
        return Epoch.parse(value)

    @field_validator("subject_matter", mode="before")
    @classmethod
    def _split_subject_matter(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in re.split(r"[,;]", value) if part.strip()]
        return list(value)

    @field_validator("publication_year", mode="before")
    @classmethod
    def _parse_year(cls, value: Any) -> Optional[int]:
        if value in (None, ""):
            return None
        return int(value)

    @property
    def is_jurisprudencia(self) -> bool:
        return self.type is DocumentType.JURISPRUDENCIA

    @property
    def materias(self) -> str:
        return ", ".join(self.subject_matter)

    @property
    def body_label(self) -> str:
        return self.court_name or self.issuing_body.value


class Chunk(BaseModel):
    """A contiguous slice of a document's full text, as stored in the vector index."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    chunk_index: int
    text: str
    embedding_model: Optional[str] = None
