"""Tests for atenea/scoring/ranker.py."""

import random

from atenea.models.scoring import ScoredDocument, StrengthLabel
from atenea.scoring.classifier import build_query_context
from atenea.scoring.engine import score_document
from atenea.scoring.ranker import rank_two_stage
from conftest import AMPARO_QUESTION, REFERENCE_YEAR, make_document


def scored(doc_id: str, pertinence: int, authority: int, year: int = 2020) -> ScoredDocument:
    document = make_document(id=doc_id, publication_year=year)
    return ScoredDocument(
        **document.model_dump(),
        pertinence_score=pertinence,
        authority_score=authority,
        strength=StrengthLabel.MEDIA,
        pertinence_level=StrengthLabel.MEDIA,
        authority_level=StrengthLabel.MEDIA,
    )


class TestTwoStageRanker:
    def test_bounds(self):
        candidates = [scored(f"d{i:02d}", pertinence=i * 4, authority=50) for i in range(26)]
        ranked = rank_two_stage(candidates)
        assert len(ranked) <= 5
        assert all(doc.pertinence_score >= 25 for doc in ranked)

    def test_threshold_is_inclusive(self):
        ranked = rank_two_stage([scored("a", 25, 10), scored("b", 24, 90)])
        assert [doc.id for doc in ranked] == ["a"]

    def test_authority_only_reorders_the_most_pertinent(self):
        # Low pertinence comes with high authority: only the top 15 by pertinence compete.
        candidates = [scored(f"d{i:02d}", pertinence=30 + i, authority=100 - (30 + i)) for i in range(20)]
        ranked = rank_two_stage(candidates)
        assert [doc.id for doc in ranked] == ["d05", "d06", "d07", "d08", "d09"]

    def test_ties_break_on_pertinence_then_recency_then_id(self):
        candidates = [
            scored("c", pertinence=40, authority=80, year=2010),
            scored("b", pertinence=40, authority=80, year=2020),
            scored("a", pertinence=40, authority=80, year=2010),
            scored("d", pertinence=60, authority=80, year=2000),
        ]
        assert [doc.id for doc in rank_two_stage(candidates)] == ["d", "b", "a", "c"]

    def test_order_does_not_depend_on_input_order(self):
        candidates = [scored(f"d{i:02d}", pertinence=30 + (i % 3), authority=70) for i in range(12)]
        expected = [doc.id for doc in rank_two_stage(candidates)]
        for seed in range(5):
            shuffled = candidates[:]
            random.Random(seed).shuffle(shuffled)
            assert [doc.id for doc in rank_two_stage(shuffled)] == expected

    def test_empty_when_nothing_is_pertinent(self):
        assert rank_two_stage([scored("a", 10, 100)]) == []
        assert rank_two_stage([]) == []

    def test_amparo_scenario_ranks_jurisprudence_first(self, corpus):
        context = build_query_context(AMPARO_QUESTION, reference_year=REFERENCE_YEAR)
        ranked = rank_two_stage([score_document(doc, context) for doc in reversed(corpus)])
        assert [doc.id for doc in ranked] == ["2000001", "2000002"]
        assert ranked[0].is_jurisprudencia
