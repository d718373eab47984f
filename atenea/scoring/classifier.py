"""Formal classification of a case before any tesis is evaluated.

The heuristics are conservative: a case that matches no vocabulary is
classified as "general" rather than forced into a matter.
"""

from __future__ import annotations

import re
from typing import List, Optional

from atenea.models.scoring import CaseClassification, ProceduralRole, QueryContext
from atenea.scoring.vocabulary import (
    ACTO_RECLAMADO_PATTERNS,
    PROBLEMA_JURIDICO_TEMPLATES,
    STRUCTURAL_LEGAL_TERMS,
    VIA_PROCESAL_TERMS,
)
from atenea.utils.text import normalize_text

MAX_CONCEPTS_PER_MATTER = 3
MAX_DETECTED_CONCEPTS = 5


def matched_terms(normalized: str, terms: List[str]) -> List[str]:
    return [term for term in terms if normalize_text(term) in normalized]


def _render_problema(materia: str, concepts: List[str]) -> str:
    joined = " y ".join(concepts[:2])
    template = PROBLEMA_JURIDICO_TEMPLATES.get(materia, PROBLEMA_JURIDICO_TEMPLATES["general"])
    return template.format(
        en_relacion=f" en relación con {joined}" if joined else "",
        relacionados=f" relacionados con {joined}" if joined else "",
        derivados=f" derivados de {joined}" if joined else "",
        derivadas=f" derivadas de {joined}" if joined else "",
        en_materia=f" en materia de {joined}" if joined else "",
    )


def classify_case(description: str) -> CaseClassification:
    normalized = normalize_text(description)

    materia = "general"
    best_hits = 0
    concepts: List[str] = []
    for candidate, terms in STRUCTURAL_LEGAL_TERMS.items():
        hits = matched_terms(normalized, terms)
        if len(hits) > best_hits:
            best_hits = len(hits)
            materia = candidate
        concepts.extend(hits[:MAX_CONCEPTS_PER_MATTER])

    via_procesal: Optional[str] = None
    for via, terms in VIA_PROCESAL_TERMS.items():
        if matched_terms(normalized, terms):
            via_procesal = via
            break

    acto_reclamado: Optional[str] = None
    if materia == "amparo" or "amparo" in normalized:
        for pattern, acto in ACTO_RECLAMADO_PATTERNS:
            if re.search(pattern, normalized):
                acto_reclamado = acto
                break

    distinct = list(dict.fromkeys(concepts))
    return CaseClassification(
        materia=materia,
        via_procesal=via_procesal,
        acto_reclamado=acto_reclamado,
        problema_juridico=_render_problema(materia, concepts),
        detected_concepts=distinct[:MAX_DETECTED_CONCEPTS],
    )


def build_query_context(
    text: str,
    role: Optional[ProceduralRole] = None,
    reference_year: Optional[int] = None,
) -> QueryContext:
    """Classify the text and bundle it with the inputs the scoring engine needs."""
    extra = {"reference_year": reference_year} if reference_year is not None else {}
    return QueryContext(text=text, classification=classify_case(text), role=role, **extra)
