"""Tests for atenea/repository.py."""

import json
from datetime import datetime, timedelta, timezone

from atenea.models.analysis import AnalysisResult
from atenea.models.scoring import CaseClassification
from atenea.repository import InMemoryRepository
from conftest import make_document


def write_corpus(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def record(**overrides):
    return make_document(**overrides).model_dump(mode="json")


def analysis(problem, created_at):
    return AnalysisResult(
        descripcion="Descripción del caso de prueba",
        problema_juridico=problem,
        clasificacion=CaseClassification(
            materia="general", detected_concepts=[], problema_juridico=problem
        ),
        created_at=created_at,
    )


def test_from_jsonl_skips_malformed_records(tmp_path):
    corpus = tmp_path / "tesis.jsonl"
    write_corpus(
        corpus,
        [
            json.dumps(record()),
            "{not json",
            json.dumps({**record(id="2000002"), "epoch": "Época imaginaria"}),
            "",
            json.dumps(record(id="2000003")),
            json.dumps(record(id="2000001", title="DUPLICADO")),
        ],
    )
    repository = InMemoryRepository.from_jsonl(corpus)
    assert len(repository) == 2
    assert repository.get_document("2000001").title != "DUPLICADO"
    assert repository.get_document("2000002") is None


def test_missing_corpus_gives_empty_store(tmp_path):
    assert len(InMemoryRepository.from_jsonl(tmp_path / "missing.jsonl")) == 0


def test_search_ignores_accents_and_case(repository):
    assert [doc.id for doc in repository.search_documents("SUSPENSION")] == ["2000002"]
    assert [doc.id for doc in repository.search_documents("laboral")] == ["2000003"]
    assert len(repository.search_documents(None)) == 3
    assert len(repository.search_documents("", limit=1)) == 1


def test_history_is_newest_first(repository):
    now = datetime.now(timezone.utc)
    older = analysis("Problema antiguo", now - timedelta(days=1))
    newer = analysis("P" * 120, now)
    repository.save_analysis(older)
    repository.save_analysis(newer)

    entries = repository.list_history()
    assert [entry.id for entry in entries] == [newer.id, older.id]
    assert len(entries[0].titulo) == 80


def test_scored_document_lookup_requires_an_analysis(repository):
    assert repository.get_scored_document("2000001") is None
    assert repository.get_scored_document("2000001", "unknown") is None
