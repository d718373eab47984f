"""Case analysis: classify a description, score the corpus and rank the result."""

from __future__ import annotations

import logging
from typing import Optional

from atenea.errors import ValidationError
from atenea.models.analysis import AnalysisResult
from atenea.models.scoring import ProceduralRole
from atenea.repository import Repository
from atenea.scoring import build_query_context, case_insight, rank_two_stage, score_document

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 10


class AnalysisService:
    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    def analyze(
        self,
        descripcion: str,
        rol_procesal: Optional[ProceduralRole] = None,
        reference_year: Optional[int] = None,
    ) -> AnalysisResult:
        descripcion = (descripcion or "").strip()
        if len(descripcion) < MIN_DESCRIPTION_LENGTH:
            raise ValidationError("Descripción inválida. Proporcione al menos 10 caracteres.")

        context = build_query_context(descripcion, rol_procesal, reference_year)
        candidates = [score_document(doc, context) for doc in self.repository.all_documents()]
        ranked = rank_two_stage(candidates)

        analysis = AnalysisResult(
            descripcion=descripcion,
            problema_juridico=context.classification.problema_juridico,
            clasificacion=context.classification,
            tesis_relevantes=ranked,
            insight_juridico=case_insight(ranked),
        )
        self.repository.save_analysis(analysis)
        logger.info(
            "Analysis %s: materia=%s, %d of %d documents ranked",
            analysis.id,
            context.materia,
            len(ranked),
            len(candidates),
        )
        return analysis
