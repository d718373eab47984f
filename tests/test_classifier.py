"""Tests for atenea/scoring/classifier.py."""

from atenea.models.scoring import ProceduralRole
from atenea.scoring.classifier import build_query_context, classify_case
from conftest import AMPARO_QUESTION


class TestClassifyCase:
    def test_amparo_directo_question(self):
        result = classify_case(AMPARO_QUESTION)
        assert result.materia == "amparo"
        assert result.via_procesal == "amparo directo"
        assert result.detected_concepts == ["amparo directo"]
        assert "juicio de amparo en relación con amparo directo" in result.problema_juridico

    def test_labor_case_picks_matter_with_most_hits(self):
        result = classify_case(
            "El patrón realizó un despido injustificado y no pagó los salarios caídos."
        )
        assert result.materia == "laboral"
        assert result.detected_concepts == ["despido injustificado", "patrón", "salarios caídos"]
        assert result.problema_juridico.startswith(
            "Determinación de los derechos laborales relacionados con despido injustificado y patrón"
        )
        assert result.acto_reclamado is None

    def test_accents_do_not_matter(self):
        accented = classify_case("Despido injustificado y reinstalación del trabajador")
        plain = classify_case("despido injustificado y reinstalacion del trabajador")
        assert accented == plain

    def test_unmatched_text_is_general(self):
        result = classify_case("Texto sin términos conocidos aquí")
        assert result.materia == "general"
        assert result.detected_concepts == []
        assert result.via_procesal is None
        assert "en materia de" not in result.problema_juridico

    def test_challenged_act_detected_for_amparo(self):
        result = classify_case("Promuevo amparo indirecto contra la multa impuesta por la autoridad")
        assert result.materia == "amparo"
        assert result.via_procesal == "amparo indirecto"
        assert result.acto_reclamado == "acto administrativo"

    def test_detected_concepts_are_capped(self):
        text = (
            "improcedencia sobreseimiento acto reclamado quejoso despido injustificado "
            "patrón trabajador nulidad contrato incumplimiento"
        )
        assert len(classify_case(text).detected_concepts) == 5


class TestBuildQueryContext:
    def test_carries_role_and_reference_year(self):
        context = build_query_context(AMPARO_QUESTION, ProceduralRole.QUEJOSO, reference_year=2024)
        assert context.role is ProceduralRole.QUEJOSO
        assert context.reference_year == 2024
        assert context.materia == "amparo"

    def test_reference_year_defaults_to_current_year(self):
        from datetime import date

        assert build_query_context(AMPARO_QUESTION).reference_year == date.today().year
