"""Deterministic three-dimensional scoring: pertinence, authority and risk."""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from atenea.config import settings
from atenea.models.document import Document, IssuingBody
from atenea.models.scoring import (
    DimensionalScore,
    ProceduralRole,
    QueryContext,
    RiskFlag,
    ScoredDocument,
    StrengthLabel,
    SubjectMatch,
)
from atenea.scoring import insight
from atenea.scoring.contributors import AUTHORITY_TABLES, fold
from atenea.scoring.vocabulary import STRUCTURAL_LEGAL_TERMS
from atenea.utils.text import normalize_text, tokenize

logger = logging.getLogger(__name__)

SUBJECT_EXACT_POINTS = 35
SUBJECT_PARTIAL_POINTS = 15
STRUCTURAL_TERM_POINTS = 7
STRUCTURAL_TERM_CAP = 35
CONCEPT_POINTS = 5
CONCEPT_CAP = 20
LEXICAL_CAP = 10


def subject_match(document: Document, materia: str) -> SubjectMatch:
    """Exact when the matter name appears in the tags, partial on its four-letter stem.

    Matter names are masculine ("administrativo") while SJF tags are often feminine
    ("Administrativa"), so those documents top out at PARTIAL and carry the
    partial-match flag.
    """
    tags = normalize_text(document.materias)
    if not tags:
        return SubjectMatch.NONE
    if materia in tags:
        return SubjectMatch.EXACT
    if materia[:4] in tags:
        return SubjectMatch.PARTIAL
    return SubjectMatch.NONE


def _lexical_overlap(query_tokens: Set[str], abstract_tokens: Set[str]) -> int:
    return sum(
        1
        for token in query_tokens
        if any(token in other or other in token for other in abstract_tokens)
    )


def pertinence_score(document: Document, context: QueryContext) -> int:
    materia = context.materia
    match = subject_match(document, materia)
    score = 0
    if match is SubjectMatch.EXACT:
        score += SUBJECT_EXACT_POINTS
    elif match is SubjectMatch.PARTIAL:
        score += SUBJECT_PARTIAL_POINTS

    query_text = normalize_text(context.text)
    document_text = normalize_text(f"{document.title} {document.abstract} {document.full_text}")
    shared_terms = [
        term
        for term in STRUCTURAL_LEGAL_TERMS.get(materia, [])
        if normalize_text(term) in query_text and normalize_text(term) in document_text
    ]
    score += min(len(shared_terms) * STRUCTURAL_TERM_POINTS, STRUCTURAL_TERM_CAP)

    summary_text = normalize_text(f"{document.title} {document.abstract} {document.materias}")
    concept_hits = [
        concept
        for concept in context.classification.detected_concepts
        if normalize_text(concept) in summary_text
    ]
    score += min(len(concept_hits) * CONCEPT_POINTS, CONCEPT_CAP)

    overlap = _lexical_overlap(set(tokenize(context.text)), set(tokenize(document.abstract)))
    score += min(overlap, LEXICAL_CAP)

    return min(score, 100)


def authority_score(document: Document, reference_year: int) -> int:
    return min(fold(AUTHORITY_TABLES, document, reference_year), 100)


def risk_flags(document: Document, match: SubjectMatch) -> List[RiskFlag]:
    """Flags in declaration order so the same document always lists them identically."""
    flags: List[RiskFlag] = []
    if not document.is_jurisprudencia:
        flags.append(RiskFlag.ISOLATED_CRITERION)
    if document.epoch.ordinal < settings.old_epoch_threshold:
        flags.append(RiskFlag.OLD_EPOCH)
    integration = normalize_text(document.integration_forms)
    if not document.is_jurisprudencia and not (
        "reiteracion" in integration or "contradiccion" in integration
    ):
        flags.append(RiskFlag.NOT_REAFFIRMED)
    if document.issuing_body.rank < IssuingBody.parse(settings.limited_authority_threshold).rank:
        flags.append(RiskFlag.LIMITED_AUTHORITY)
    if match is SubjectMatch.PARTIAL:
        flags.append(RiskFlag.PARTIAL_SUBJECT_MATCH)
    return flags


def role_adjustment(document: Document, role: Optional[ProceduralRole]) -> int:
    """Net nudge in [-bound, +bound] favouring criteria useful to the caller's side."""
    if role is None:
        return 0
    text = normalize_text(f"{document.title} {document.abstract}")
    defensive = "improcedencia" in text or "sobreseimiento" in text
    pro_action = "procedencia" in text and "improcedencia" not in text
    nudge = 0
    if role.is_claimant:
        if pro_action:
            nudge += 5
        if "derecho" in text or "obligacion del demandado" in text:
            nudge += 3
        if defensive:
            nudge -= 5
    else:
        if defensive:
            nudge += 5
        if "excepcion" in text or "carga de la prueba" in text:
            nudge += 3
        if pro_action:
            nudge -= 5
    bound = settings.role_adjustment_bound
    return max(-bound, min(bound, nudge))


def score(document: Document, context: QueryContext) -> DimensionalScore:
    """Score one document against one query. Pure: no clock, no I/O."""
    match = subject_match(document, context.materia)
    pertinence = pertinence_score(document, context)
    authority = authority_score(document, context.reference_year)
    assert 0 <= pertinence <= 100, f"pertinence out of range for {document.id}: {pertinence}"
    assert 0 <= authority <= 100, f"authority out of range for {document.id}: {authority}"

    if context.role is not None:
        pertinence = max(0, min(100, pertinence + role_adjustment(document, context.role)))

    return DimensionalScore(
        pertinence=pertinence,
        authority=authority,
        risk_flags=risk_flags(document, match),
        subject_match=match,
    )


def pertinence_level(pertinence: int) -> StrengthLabel:
    return StrengthLabel.ALTA if pertinence >= 50 else StrengthLabel.MEDIA


def authority_level(authority: int) -> StrengthLabel:
    if authority >= 70:
        return StrengthLabel.ALTA
    if authority >= 45:
        return StrengthLabel.MEDIA
    return StrengthLabel.BAJA


def strength_label(pertinence: int, authority: int) -> StrengthLabel:
    combined = 0.4 * pertinence + 0.6 * authority
    if combined >= 65:
        return StrengthLabel.ALTA
    if combined >= 40:
        return StrengthLabel.MEDIA
    return StrengthLabel.BAJA


def score_document(document: Document, context: QueryContext) -> ScoredDocument:
    """Annotate a document with labels, flags and explanations for this query."""
    dimensional = score(document, context)
    strength = strength_label(dimensional.pertinence, dimensional.authority)
    logger.debug(
        "Scored %s: pertinence=%d authority=%d flags=%s",
        document.id,
        dimensional.pertinence,
        dimensional.authority,
        [flag.value for flag in dimensional.risk_flags],
    )
    return ScoredDocument(
        **document.model_dump(include=set(Document.model_fields)),
        pertinence_score=dimensional.pertinence,
        authority_score=dimensional.authority,
        risk_flags=dimensional.risk_flags,
        strength=strength,
        pertinence_level=pertinence_level(dimensional.pertinence),
        authority_level=authority_level(dimensional.authority),
        strength_reason=insight.strength_reason(document, strength, dimensional.risk_flags),
        applicability=insight.applicability(document, context, dimensional.pertinence),
        insight=insight.structured_insight(document, context, dimensional.risk_flags),
    )
