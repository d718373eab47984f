"""Tests for atenea/models/document.py: label normalization and the closed enums."""

import pytest
from pydantic import ValidationError

from atenea.models.document import DocumentType, Epoch, IssuingBody
from conftest import make_document


class TestEpoch:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Undécima Época", Epoch.UNDECIMA),
            ("Décima Época", Epoch.DECIMA),
            ("Novena Época", Epoch.NOVENA),
            ("Quinta Época", Epoch.QUINTA),
            ("9a. Época", Epoch.NOVENA),
            ("11a", Epoch.UNDECIMA),
            (8, Epoch.OCTAVA),
        ],
    )
    def test_parse_labels(self, raw, expected):
        assert Epoch.parse(raw) is expected

    def test_undecima_is_not_read_as_decima(self):
        assert Epoch.parse("UNDÉCIMA ÉPOCA") is Epoch.UNDECIMA

    def test_unknown_label_is_rejected(self):
        with pytest.raises(ValueError):
            Epoch.parse("Época desconocida")

    def test_ordinals_follow_declaration_order(self):
        ordinals = [epoch.ordinal for epoch in Epoch]
        assert ordinals == sorted(ordinals, reverse=True)
        assert Epoch.DECIMA.label == "Décima Época"


class TestIssuingBody:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Pleno", IssuingBody.PLENO),
            ("Suprema Corte de Justicia de la Nación", IssuingBody.SCJN),
            ("Primera Sala", IssuingBody.SALA),
            ("Segunda Sala", IssuingBody.SALA),
            ("Sala Auxiliar", IssuingBody.OTHER_CHAMBER),
            ("Tribunales Colegiados de Circuito", IssuingBody.TRIBUNAL_COLEGIADO),
            ("Tribunal Unitario", IssuingBody.TRIBUNAL),
            ("Juzgado de Distrito", IssuingBody.OTHER),
        ],
    )
    def test_parse_labels(self, raw, expected):
        assert IssuingBody.parse(raw) is expected

    def test_rank_is_strictly_decreasing(self):
        ranks = [body.rank for body in IssuingBody]
        assert ranks == sorted(ranks, reverse=True)
        assert len(set(ranks)) == len(ranks)


class TestDocument:
    def test_raw_labels_are_normalized_on_load(self):
        doc = make_document(type="TESIS AISLADA", issuing_body="Primera Sala", epoch="Décima Época")
        assert doc.type is DocumentType.TESIS_AISLADA
        assert doc.issuing_body is IssuingBody.SALA
        assert doc.epoch is Epoch.DECIMA
        assert not doc.is_jurisprudencia

    def test_subject_matter_string_is_split(self):
        doc = make_document(subject_matter="Civil, Común; Laboral")
        assert doc.subject_matter == ["Civil", "Común", "Laboral"]
        assert doc.materias == "Civil, Común, Laboral"

    def test_publication_year_string_is_converted(self):
        assert make_document(publication_year="2019").publication_year == 2019
        assert make_document(publication_year="").publication_year is None

    def test_label_outside_enumeration_is_a_data_error(self):
        with pytest.raises(ValidationError):
            make_document(epoch="Época imaginaria")
        with pytest.raises(ValidationError):
            make_document(type="Ejecutoria")

    def test_documents_are_immutable(self):
        doc = make_document()
        with pytest.raises(ValidationError):
            doc.title = "otro"

    def test_body_label_prefers_printed_court_name(self):
        doc = make_document(issuing_body="Tribunales Colegiados de Circuito", court_name="Primer Tribunal Colegiado")
        assert doc.body_label == "Primer Tribunal Colegiado"
        assert make_document(court_name="").body_label == "Pleno"
