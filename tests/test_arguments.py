"""Tests for atenea/services/arguments.py."""

import pytest

from atenea.errors import NotFoundError
from atenea.models.analysis import ArgumentRequest, Tone, WritingType
from atenea.models.scoring import ProceduralRole
from atenea.services.analysis import AnalysisService
from atenea.services.arguments import CLOSING_PARAGRAPHS, ArgumentService, formal_citation
from conftest import AMPARO_QUESTION, REFERENCE_YEAR


def request(tesis_id="2000001", tipo=WritingType.AMPARO, rol=ProceduralRole.QUEJOSO, tono=Tone.CONTUNDENTE):
    return ArgumentRequest(tesis_id=tesis_id, tipo_escrito=tipo, rol_procesal=rol, tono=tono)


def test_opening_paragraph_follows_tone_and_role(repository):
    argument = ArgumentService(repository).generate(request())
    opening, closing = argument.parrafos

    assert opening.startswith(
        "Como ha sostenido consistentemente la autoridad judicial, queda plenamente acreditado "
        "que el acto reclamado vulnera los derechos fundamentales del quejoso"
    )
    assert '"AMPARO DIRECTO. PROCEDE CONTRA SENTENCIAS DEFINITIVAS"' in opening
    assert "durante la Undécima Época" in opening
    assert closing == CLOSING_PARAGRAPHS[WritingType.AMPARO]


def test_answer_brief_closing(repository):
    argument = ArgumentService(repository).generate(
        request(tipo=WritingType.CONTESTACION, rol=ProceduralRole.DEMANDADO, tono=Tone.CONSERVADOR)
    )
    assert argument.parrafos[0].startswith("Conforme al criterio jurisprudencial aplicable")
    assert "deberá absolverse a mi representado" in argument.parrafos[1]


def test_formal_citation(pleno_jurisprudence):
    assert formal_citation(pleno_jurisprudence) == (
        "AMPARO DIRECTO. PROCEDE CONTRA SENTENCIAS DEFINITIVAS. Jurisprudencia. Pleno. "
        "Undécima Época. Gaceta del Semanario Judicial de la Federación"
    )


def test_unknown_tesis(repository):
    with pytest.raises(NotFoundError) as excinfo:
        ArgumentService(repository).generate(request(tesis_id="404"))
    assert excinfo.value.identifier == "404"


def test_argument_is_attached_to_history(repository):
    analysis = AnalysisService(repository).analyze(AMPARO_QUESTION, reference_year=REFERENCE_YEAR)
    argument = ArgumentService(repository).generate(request(tesis_id="2000002"))

    (entry,) = repository.list_history()
    assert entry.id == analysis.id
    assert [item.id for item in entry.argumentos_generados] == [argument.id]
    assert repository.get_argument(argument.id) == argument


def test_argument_without_matching_analysis_is_still_stored(repository):
    argument = ArgumentService(repository).generate(request(tesis_id="2000003"))
    assert repository.get_argument(argument.id) == argument
    assert repository.list_history() == []
