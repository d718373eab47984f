"""
Shared fixtures for the Atenea test suite.

Every test runs without API keys, Qdrant or network access: the OpenAI and
Qdrant clients are replaced by fakes and token counting uses the whitespace
approximation.
"""

import os

os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("ALLOW_TIKTOKEN_FALLBACK", "1")

from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402

from atenea.models.document import Document  # noqa: E402
from atenea.models.retrieval import ContextBlock  # noqa: E402
from atenea.repository import InMemoryRepository  # noqa: E402

REFERENCE_YEAR = 2025

AMPARO_QUESTION = "¿Cuándo procede el amparo directo?"


def make_document(**overrides) -> Document:
    data = dict(
        id="2000001",
        title="AMPARO DIRECTO. PROCEDE CONTRA SENTENCIAS DEFINITIVAS",
        abstract="El amparo directo procede contra sentencias definitivas que ponen fin al juicio.",
        full_text="",
        type="Jurisprudencia",
        issuing_body="Pleno",
        epoch="Undécima Época",
        subject_matter=["Común", "Amparo"],
        publication_year=2022,
        thesis_number="P./J. 1/2022 (11a.)",
        court_name="Pleno",
        source="Gaceta del Semanario Judicial de la Federación",
        book="10",
        volume="I",
        month="Febrero",
        page="5",
        integration_forms="Reiteración",
        origin_url="https://sjf2.scjn.gob.mx/detalle/tesis/2000001",
    )
    data.update(overrides)
    return Document(**data)


def make_block(index: int, document_id: str, relevance: float = 0.7) -> ContextBlock:
    return ContextBlock(
        index=index,
        document_id=document_id,
        title=f"TESIS {document_id}",
        citation=f'"TESIS {document_id}". Jurisprudencia. Pleno. Undécima Época',
        formal_citation=f"TESIS {document_id}\nJurisprudencia. Pleno. Undécima Época.",
        url=None,
        metadata="Tipo: Jurisprudencia",
        excerpt="Contenido de la tesis.",
        relevance_score=relevance,
    )


@pytest.fixture(autouse=True)
def whitespace_tokens(monkeypatch):
    """Token budgets count whitespace words instead of downloading cl100k_base."""
    monkeypatch.setattr("atenea.retrieval.evidence.get_cl100k_encoding", lambda: None)


@pytest.fixture
def pleno_jurisprudence() -> Document:
    return make_document()


@pytest.fixture
def collegiate_isolated() -> Document:
    return make_document(
        id="2000002",
        title="SUSPENSIÓN EN AMPARO DIRECTO. SU OTORGAMIENTO DEPENDE DE LA NATURALEZA DEL ACTO",
        abstract="En el amparo directo la suspensión se solicita ante la autoridad responsable.",
        type="Tesis Aislada",
        issuing_body="Tribunales Colegiados de Circuito",
        epoch="Novena Época",
        subject_matter=["Amparar"],
        publication_year=2005,
        thesis_number="I.3o.C.45 K",
        court_name="Tercer Tribunal Colegiado en Materia Civil del Primer Circuito",
        integration_forms="",
    )


@pytest.fixture
def labor_document() -> Document:
    return make_document(
        id="2000003",
        title="DESPIDO INJUSTIFICADO. CARGA DE LA PRUEBA CORRESPONDE AL PATRÓN",
        abstract="Cuando el trabajador demanda despido injustificado, el patrón debe probar la causa.",
        type="Jurisprudencia",
        issuing_body="Segunda Sala",
        epoch="Décima Época",
        subject_matter=["Laboral"],
        publication_year=2016,
        court_name="Segunda Sala",
    )


@pytest.fixture
def corpus(pleno_jurisprudence, collegiate_isolated, labor_document) -> List[Document]:
    return [pleno_jurisprudence, collegiate_isolated, labor_document]


@pytest.fixture
def repository(corpus) -> InMemoryRepository:
    return InMemoryRepository(corpus)


class FakeChatClient:
    """Stands in for OpenAIChatClient and records every prompt it receives."""

    def __init__(self, text: str = "", usage=None, error: Optional[Exception] = None) -> None:
        self.text = text
        self.usage = usage
        self.error = error
        self.calls: List[tuple] = []

    async def complete(self, system_prompt, user_prompt, temperature=0.2, max_output_tokens=1200):
        from atenea.llm.openai_client import ChatCompletion

        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return ChatCompletion(self.text, self.usage)


@pytest.fixture
def fake_chat_client():
    return FakeChatClient
