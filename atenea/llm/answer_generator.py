"""Glue module that turns context blocks into a cited answer via OpenAI."""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from atenea.config import settings
from atenea.llm.citations import CitationResolver
from atenea.llm.openai_client import OpenAIChatClient
from atenea.llm.prompts import SYSTEM_PROMPT, build_user_prompt
from atenea.models.qa import AnswerRecord, Confidence, SourceEntry
from atenea.models.retrieval import ContextBlock

logger = logging.getLogger(__name__)

NO_EVIDENCE_ANSWER = (
    "No se encontró jurisprudencia ni precedentes directamente aplicables a esta pregunta. "
    "Se recomienda reformular la consulta con términos jurídicos más específicos o consultar "
    "otras fuentes."
)

CASUAL_OPENING = re.compile(
    r"^(?:Claro|Bien|Entonces|Pues|Así que|Por supuesto|Desde luego|Evidentemente|"
    r"Naturalmente|Ciertamente|Sin duda|Por cierto|Bueno|Mira|Oye),\s*",
    re.IGNORECASE,
)


def strip_casual_opening(text: str) -> str:
    previous = None
    text = text.strip()
    while previous != text:
        previous = text
        text = CASUAL_OPENING.sub("", text, count=1).strip()
    return text


def confidence_for(relevances: Sequence[float]) -> Confidence:
    if not relevances:
        return Confidence.LOW
    average = sum(relevances) / len(relevances)
    if average >= 0.6 and len(relevances) >= 3:
        return Confidence.HIGH
    if average >= 0.4 and len(relevances) >= 2:
        return Confidence.MEDIUM
    return Confidence.LOW


def sources_from_blocks(blocks: Sequence[ContextBlock]) -> List[SourceEntry]:
    return [
        SourceEntry(
            id=block.document_id,
            title=block.title,
            citation=block.citation,
            formal_citation=block.formal_citation,
            relevance_score=block.relevance_score,
            url=block.url,
        )
        for block in blocks
    ]


def no_evidence_record() -> AnswerRecord:
    return AnswerRecord(
        answer_text=NO_EVIDENCE_ANSWER,
        sources=[],
        confidence=Confidence.LOW,
        has_evidence=False,
    )


class AnswerSynthesizer:
    """Generates precedent-grounded answers whose markers all resolve to a source."""

    def __init__(
        self,
        client: OpenAIChatClient | None = None,
        resolver: CitationResolver | None = None,
    ) -> None:
        self.client = client or OpenAIChatClient()
        self.resolver = resolver or CitationResolver()

    async def synthesize(self, question: str, blocks: Sequence[ContextBlock]) -> AnswerRecord:
        """Answer from the numbered blocks; without blocks the model is never called."""
        if not blocks:
            logger.info("No evidence for question; returning the fixed answer")
            return no_evidence_record()

        prompt = build_user_prompt(question, blocks)
        completion = await self.client.complete(SYSTEM_PROMPT, prompt, temperature=0.1)
        answer = strip_casual_opening(completion.text)

        sources = sources_from_blocks(blocks)
        resolved = self.resolver.resolve(answer, sources)
        if resolved.anomalies:
            logger.warning(
                "Model emitted %d invalid citation markers; they were removed",
                len(resolved.anomalies),
            )

        text = resolved.text
        disclaimer = settings.legal_disclaimer.strip()
        if disclaimer and disclaimer.lower() not in text.lower():
            text = f"{text.rstrip()}\n\n{disclaimer}."

        return AnswerRecord(
            answer_text=text,
            sources=resolved.sources,
            confidence=confidence_for([source.relevance_score for source in resolved.sources]),
            has_evidence=True,
            token_usage=completion.usage,
        )
