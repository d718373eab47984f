"""Plain-language explanations attached to scored documents and to whole analyses."""

from __future__ import annotations

from typing import List, Sequence

from atenea.models.document import Document, IssuingBody
from atenea.models.scoring import (
    LegalInsight,
    QueryContext,
    RiskFlag,
    ScoredDocument,
    StrengthLabel,
)
from atenea.scoring.vocabulary import STRUCTURAL_LEGAL_TERMS
from atenea.utils.text import normalize_text

NO_PRECEDENT_MESSAGE = (
    "No se identificó jurisprudencia con pertinencia suficiente para el caso descrito. "
    "Se recomienda reformular la consulta con términos jurídicos más específicos, precisando "
    "la materia, vía procesal o problemática concreta."
)

# First matching title keyword decides when the criterion is useful.
WHEN_IT_APPLIES = [
    (
        ("improcedencia", "sobreseimiento"),
        "Cuando se requiera acreditar causales de improcedencia o sobreseimiento en un juicio.",
    ),
    (
        ("carga de la prueba", "prueba"),
        "Al momento de determinar a quién corresponde la carga probatoria o valorar medios de prueba.",
    ),
    (
        ("competencia",),
        "Para establecer qué autoridad es competente para conocer del asunto.",
    ),
    (
        ("prescripcion", "caducidad"),
        "Cuando se discuta el transcurso del tiempo para ejercer una acción o derecho.",
    ),
    (
        ("fundamentacion", "motivacion"),
        "Para impugnar actos de autoridad que carezcan de la debida fundamentación y motivación.",
    ),
]

MAIN_RISK_PRIORITY = [
    RiskFlag.ISOLATED_CRITERION,
    RiskFlag.OLD_EPOCH,
    RiskFlag.NOT_REAFFIRMED,
    RiskFlag.LIMITED_AUTHORITY,
    RiskFlag.PARTIAL_SUBJECT_MATCH,
]

BODY_DESCRIPTIONS = {
    IssuingBody.PLENO: "el Pleno de la SCJN",
    IssuingBody.SCJN: "la Suprema Corte de Justicia de la Nación",
    IssuingBody.TRIBUNAL_COLEGIADO: "Tribunal Colegiado de Circuito",
}


def body_description(document: Document) -> str:
    court = normalize_text(document.court_name)
    if document.issuing_body is IssuingBody.SALA:
        if "primera sala" in court:
            return "la Primera Sala de la SCJN"
        if "segunda sala" in court:
            return "la Segunda Sala de la SCJN"
    described = BODY_DESCRIPTIONS.get(document.issuing_body)
    if described:
        return described
    return document.court_name or "órgano jurisdiccional"


def _is_supreme_court(document: Document) -> bool:
    return document.issuing_body in (IssuingBody.PLENO, IssuingBody.SCJN, IssuingBody.SALA)


def structured_insight(
    document: Document, context: QueryContext, flags: Sequence[RiskFlag]
) -> LegalInsight:
    what_it_says = document.abstract or f"{document.full_text[:200]}..."

    title = normalize_text(document.title)
    when_it_applies = (
        "Este criterio resulta aplicable cuando se presenten hechos análogos en materia "
        f"{context.materia}."
    )
    for keywords, sentence in WHEN_IT_APPLIES:
        if any(keyword in title for keyword in keywords):
            when_it_applies = sentence
            break

    main_risk = "No se identificaron riesgos significativos en el uso de este criterio."
    for flag in MAIN_RISK_PRIORITY:
        if flag in flags:
            main_risk = flag.display.description
            break

    if document.is_jurisprudencia and _is_supreme_court(document):
        recommendation = "Cite este criterio con confianza. Es jurisprudencia obligatoria de la SCJN."
    elif document.is_jurisprudencia:
        recommendation = (
            "Criterio de observancia obligatoria. Verifique que no exista jurisprudencia más "
            "reciente de la SCJN."
        )
    elif not flags:
        recommendation = (
            "Criterio persuasivo sólido. Considere complementar con jurisprudencia obligatoria "
            "si existe."
        )
    else:
        recommendation = (
            "Use este criterio como apoyo complementario. Fortalezca su argumento con "
            "jurisprudencia obligatoria."
        )

    return LegalInsight(
        what_it_says=what_it_says,
        when_it_applies=when_it_applies,
        main_risk=main_risk,
        recommendation=recommendation,
    )


def strength_reason(
    document: Document, strength: StrengthLabel, flags: Sequence[RiskFlag]
) -> str:
    kind = "jurisprudencia obligatoria" if document.is_jurisprudencia else "tesis aislada"
    epoch = document.epoch.label
    reason = (
        f"Fuerza {strength.value.lower()} por tratarse de {kind} de {body_description(document)}"
    )
    if strength is StrengthLabel.ALTA:
        return f"{reason} en {epoch}, con criterio vigente y de alta pertinencia al caso."
    if strength is StrengthLabel.MEDIA:
        reason = f"{reason} emitida en {epoch}."
        if RiskFlag.ISOLATED_CRITERION in flags:
            reason += " Al no ser obligatoria, su aplicación queda a discreción del juzgador."
        return reason
    reason = f"{reason} emitida en {epoch}."
    if flags:
        reason += " Se recomienda buscar criterios más recientes o de mayor jerarquía."
    return reason


def applicability(document: Document, context: QueryContext, pertinence: int) -> str:
    """The "por qué aplica" sentence shown next to each ranked criterion."""
    title = normalize_text(document.title)
    materia = context.materia

    concepts = [
        concept
        for concept in context.classification.detected_concepts
        if normalize_text(concept) in title
    ]
    if concepts:
        return (
            f"El criterio aborda directamente {' y '.join(concepts[:2])}, conceptos centrales "
            "al problema jurídico planteado."
        )

    terms = [term for term in STRUCTURAL_LEGAL_TERMS.get(materia, []) if normalize_text(term) in title]
    if terms:
        return (
            f"La tesis establece principios sobre {' y '.join(terms[:2])} aplicables al caso "
            f"en materia {materia}."
        )

    if pertinence >= 60:
        return (
            f"El criterio contiene principios jurídicos de alta relevancia para la materia "
            f"{materia} que resultan aplicables al caso."
        )
    return (
        f"El criterio jurisprudencial contiene principios generales en materia {materia} "
        "potencialmente aplicables a la situación descrita."
    )


def case_insight(ranked: List[ScoredDocument]) -> str:
    """Summary paragraph over the final ranked list of an analysis."""
    if not ranked:
        return NO_PRECEDENT_MESSAGE

    has_jurisprudence = any(doc.is_jurisprudencia for doc in ranked)
    has_supreme_court = any(_is_supreme_court(doc) for doc in ranked)
    strong = sum(1 for doc in ranked if doc.strength is StrengthLabel.ALTA)
    highly_pertinent = sum(1 for doc in ranked if doc.pertinence_level is StrengthLabel.ALTA)
    with_risks = sum(1 for doc in ranked if doc.risk_flags)

    parts: List[str] = []
    if has_jurisprudence and has_supreme_court and strong >= 2:
        parts.append(
            "El caso cuenta con sólido respaldo jurisprudencial de la Suprema Corte, lo que "
            "fortalece significativamente la posición argumentativa."
        )
    elif has_jurisprudence:
        parts.append("Se identificó jurisprudencia obligatoria aplicable al caso.")
    else:
        parts.append(
            "Los criterios identificados son principalmente tesis aisladas, por lo que tienen "
            "valor orientador pero no vinculante."
        )

    if highly_pertinent >= 3:
        parts.append(
            "La mayoría de los criterios muestran alta pertinencia con el problema jurídico "
            "planteado."
        )
    elif highly_pertinent >= 1:
        parts.append(
            "Se encontraron criterios relevantes, aunque se recomienda revisar su aplicabilidad "
            "específica al caso."
        )

    if with_risks > len(ranked) / 2:
        parts.append(
            "Varios criterios presentan limitaciones que deben considerarse al momento de citarlos."
        )

    parts.append(
        "Verifique que no existan criterios contradictorios o jurisprudencia más reciente que "
        "pudiera modificar la interpretación."
    )
    return " ".join(parts)
