"""Case classification, dimensional scoring and two-stage ranking."""

from .classifier import build_query_context, classify_case
from .engine import score, score_document, strength_label
from .insight import case_insight
from .ranker import rank_two_stage

__all__ = [
    "build_query_context",
    "case_insight",
    "classify_case",
    "rank_two_stage",
    "score",
    "score_document",
    "strength_label",
]
