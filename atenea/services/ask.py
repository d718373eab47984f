"""RAG orchestration for /api/ask: retrieve, build context, synthesize, resolve."""

from __future__ import annotations

import logging
from typing import List, Optional

from atenea.config import settings
from atenea.errors import EvidenceInsufficientError, ValidationError
from atenea.llm.answer_generator import AnswerSynthesizer, no_evidence_record
from atenea.models.qa import AnswerRecord
from atenea.models.retrieval import ContextBlock
from atenea.retrieval.evidence import build_context_blocks
from atenea.retrieval.retriever import VectorRetriever

logger = logging.getLogger(__name__)

MIN_QUESTION_LENGTH = 10


class AskService:
    def __init__(
        self,
        retriever: VectorRetriever,
        synthesizer: AnswerSynthesizer,
        max_sources: Optional[int] = None,
    ) -> None:
        self.retriever = retriever
        self.synthesizer = synthesizer
        self.max_sources = max_sources or settings.max_sources

    async def gather_context(self, question: str) -> List[ContextBlock]:
        result = await self.retriever.retrieve(question, limit=self.max_sources)
        if not result.has_evidence:
            raise EvidenceInsufficientError(question)
        return build_context_blocks(result.documents, max_blocks=self.max_sources)

    async def ask(self, question: str) -> AnswerRecord:
        question = (question or "").strip()
        if len(question) < MIN_QUESTION_LENGTH:
            raise ValidationError("La pregunta debe tener al menos 10 caracteres.")

        try:
            blocks = await self.gather_context(question)
        except EvidenceInsufficientError:
            logger.info("No document cleared the similarity floor for the question")
            return no_evidence_record()

        record = await self.synthesizer.synthesize(question, blocks)
        logger.info(
            "Answered with %d sources, confidence=%s",
            len(record.sources),
            record.confidence.value,
        )
        return record
