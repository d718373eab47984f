"""Templated argument paragraphs built around a single tesis."""

from __future__ import annotations

import logging
from typing import List, NamedTuple

from atenea.errors import NotFoundError
from atenea.models.analysis import ArgumentRequest, GeneratedArgument, Tone, WritingType
from atenea.models.document import Document
from atenea.models.scoring import ProceduralRole
from atenea.repository import Repository

logger = logging.getLogger(__name__)

TITLE_EXCERPT_LENGTH = 100


class ToneStyle(NamedTuple):
    intro: str
    verb: str


TONE_STYLES = {
    Tone.CONSERVADOR: ToneStyle(
        "Conforme al criterio jurisprudencial aplicable", "resulta procedente sostener"
    ),
    Tone.TECNICO: ToneStyle(
        "En términos de la interpretación jurisdiccional establecida", "debe considerarse"
    ),
    Tone.CONTUNDENTE: ToneStyle(
        "Como ha sostenido consistentemente la autoridad judicial", "queda plenamente acreditado"
    ),
}

ROLE_PHRASES = {
    ProceduralRole.ACTOR: "que asiste el derecho a mi representado",
    ProceduralRole.DEMANDADO: "que son infundadas las pretensiones de la parte actora",
    ProceduralRole.TERCERO_INTERESADO: "que deben preservarse los derechos adquiridos de mi representado",
    ProceduralRole.QUEJOSO: "que el acto reclamado vulnera los derechos fundamentales del quejoso",
}

CLOSING_PARAGRAPHS = {
    WritingType.AMPARO: (
        "Por lo anterior, y en atención a los principios rectores del juicio de amparo, se "
        "solicita respetuosamente a este H. Órgano Jurisdiccional considerar el criterio "
        "jurisprudencial invocado al momento de resolver sobre el acto reclamado, en tutela de "
        "los derechos fundamentales del quejoso."
    ),
    WritingType.DEMANDA: (
        "En consecuencia, aplicando el criterio judicial citado a los hechos del presente caso, "
        "resulta procedente la acción ejercitada y las prestaciones reclamadas en el capítulo "
        "correspondiente."
    ),
    WritingType.CONTESTACION: (
        "Por lo expuesto, y conforme al criterio jurisprudencial invocado, las pretensiones de la "
        "parte actora carecen de sustento jurídico, por lo que deberá absolverse a mi representado "
        "de todas y cada una de las prestaciones reclamadas."
    ),
}


def formal_citation(document: Document) -> str:
    parts = [document.title, document.type.value, document.body_label, document.epoch.label]
    if document.source:
        parts.append(document.source)
    return ". ".join(part for part in parts if part).strip()


def build_paragraphs(
    document: Document, writing_type: WritingType, role: ProceduralRole, tone: Tone
) -> List[str]:
    style = TONE_STYLES[tone]
    title = document.title
    if len(title) > TITLE_EXCERPT_LENGTH:
        title = f"{title[:TITLE_EXCERPT_LENGTH]}..."
    opening = (
        f"{style.intro}, {style.verb} {ROLE_PHRASES[role]}, en virtud del criterio contenido en "
        f'la tesis de rubro "{title}". Dicho criterio fue emitido por {document.body_label} '
        f"durante la {document.epoch.label}, estableciendo principios jurídicos que deben ser "
        "observados en la resolución de controversias análogas."
    )
    return [opening, CLOSING_PARAGRAPHS[writing_type]]


class ArgumentService:
    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    def generate(self, request: ArgumentRequest) -> GeneratedArgument:
        document = self.repository.get_document(request.tesis_id)
        if document is None:
            raise NotFoundError("Tesis", request.tesis_id)

        argument = GeneratedArgument(
            tesis_id=document.id,
            tesis_title=document.title,
            tipo_escrito=request.tipo_escrito,
            rol_procesal=request.rol_procesal,
            tono=request.tono,
            parrafos=build_paragraphs(
                document, request.tipo_escrito, request.rol_procesal, request.tono
            ),
            cita_formal=formal_citation(document),
        )
        self.repository.save_argument(argument)
        logger.info("Generated %s argument %s for tesis %s", request.tipo_escrito.value, argument.id, document.id)
        return argument
