"""Two-stage ranking: a pertinence gate followed by an authority ordering."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from atenea.config import settings
from atenea.models.scoring import ScoredDocument

logger = logging.getLogger(__name__)


def _stage_one_key(doc: ScoredDocument):
    return (-doc.pertinence_score, doc.id)


def _stage_two_key(doc: ScoredDocument):
    year, epoch_ordinal = doc.recency_key
    return (-doc.authority_score, -doc.pertinence_score, -year, -epoch_ordinal, doc.id)


def rank_two_stage(
    candidates: Iterable[ScoredDocument],
    threshold: Optional[int] = None,
    stage_one_limit: Optional[int] = None,
    stage_two_limit: Optional[int] = None,
) -> List[ScoredDocument]:
    """Return at most stage_two_limit documents, most authoritative first.

    Every key ends with the document id, so the output is a total order and does
    not depend on the input order.
    """
    threshold = settings.pertinence_threshold if threshold is None else threshold
    stage_one_limit = settings.stage_one_limit if stage_one_limit is None else stage_one_limit
    stage_two_limit = settings.stage_two_limit if stage_two_limit is None else stage_two_limit

    pool = list(candidates)
    pertinent = sorted(
        (doc for doc in pool if doc.pertinence_score >= threshold), key=_stage_one_key
    )[:stage_one_limit]
    ranked = sorted(pertinent, key=_stage_two_key)[:stage_two_limit]

    logger.info(
        "Ranked %d candidates: %d passed the pertinence gate, %d kept",
        len(pool),
        len(pertinent),
        len(ranked),
    )
    return ranked
