# ============================================================================
# tests/unit/test_query_classifier.py
# ============================================================================
"""
Tests for the query classification cascade
"""

import time

import pytest

from medical_router.classifiers import (
    ApprovedResult,
    ClassificationThresholds,
    QueryClassifier,
    RejectedResult,
    ReformulateResult,
)
from medical_router.classifiers.suggestions import (
    GENERAL_SUGGESTIONS,
    SHORT_QUESTION_SUGGESTION,
)
from medical_router.vocabulary import MedicalVocabulary


class TestLengthGuard:
    """Stage 1: empty / too short input"""

    @pytest.mark.parametrize("text", ["", "  ", "a", "ab", "  ab  ", "\n\t"])
    def test_short_input_rejected(self, sample_classifier, text):
        result = sample_classifier.classify(text)

        assert isinstance(result, RejectedResult)
        assert result.reason == "Pregunta vacía o demasiado corta"
        assert result.suggestion == ""

    def test_none_treated_as_empty(self, sample_classifier):
        result = sample_classifier.classify(None)
        assert isinstance(result, RejectedResult)

    def test_three_characters_pass_guard(self, sample_classifier):
        result = sample_classifier.classify("abc")
        assert not isinstance(result, RejectedResult)

    def test_custom_minimum_length(self, sample_vocabulary):
        classifier = QueryClassifier(
            sample_vocabulary, ClassificationThresholds(min_question_length=10)
        )
        assert isinstance(classifier.classify("corazón"), RejectedResult)


class TestSpecialCommands:
    """Stage 2: special commands have absolute priority"""

    @pytest.mark.parametrize("command,text", [
        ("revision_nota", "por favor revisar nota del paciente"),
        ("correccion_nota", "corregir nota de ingreso"),
        ("elaboracion_nota", "elaborar nota de evolución"),
        ("valoracion", "valorar paciente con dolor torácico"),
    ])
    def test_analysis_commands_approved(self, sample_classifier, command, text):
        result = sample_classifier.classify(text)

        assert isinstance(result, ApprovedResult)
        assert result.domain == "análisis clínico"
        assert result.confidence == 0.95
        assert result.special_command == command
        assert result.note_analysis is False

    def test_command_ignores_keyword_content(self, sample_classifier):
        """No medical keywords at all, still approved"""
        result = sample_classifier.classify("hacer nota")

        assert isinstance(result, ApprovedResult)
        assert result.special_command == "elaboracion_nota"

    def test_command_beats_prohibited_terms(self, sample_classifier):
        result = sample_classifier.classify("revisar nota del partido de fútbol")

        assert isinstance(result, ApprovedResult)
        assert result.special_command == "revision_nota"

    def test_command_beats_note_heuristic(self, sample_classifier, sample_note_text):
        result = sample_classifier.classify("revisar nota:\n" + sample_note_text)

        assert isinstance(result, ApprovedResult)
        assert result.special_command == "revision_nota"
        assert result.note_analysis is False

    def test_first_command_in_order_wins(self, sample_classifier):
        result = sample_classifier.classify("revisar nota y luego corregir nota")
        assert result.special_command == "revision_nota"

    def test_study_mode_with_topic(self, sample_classifier):
        result = sample_classifier.classify("apoyo en estudio losartán y dosis")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "farmacología"
        assert result.confidence == 0.85
        assert result.special_command == "study_mode"

    def test_study_mode_without_topic_rejected(self, sample_classifier):
        result = sample_classifier.classify("apoyo en estudio")

        assert isinstance(result, RejectedResult)
        assert result.reason == "El modo 'apoyo en estudio' requiere un tema médico específico"
        assert result.suggestion == (
            "Ejemplo: 'apoyo en estudio ciclo de Krebs' o "
            "'apoyo en estudio anatomía del tórax'"
        )

    def test_trigger_inside_longer_word_still_fires(self, sample_classifier):
        """Known limitation: triggers are plain substrings"""
        result = sample_classifier.classify("cómo deshacer notas duplicadas")

        assert isinstance(result, ApprovedResult)
        assert result.special_command == "elaboracion_nota"


class TestProhibitedTerms:
    """Stage 3: prohibited term scan"""

    def test_single_term(self, sample_classifier):
        result = sample_classifier.classify("cuéntame un chiste")

        assert isinstance(result, RejectedResult)
        assert result.reason == "Contiene términos no médicos: chiste"
        assert result.suggestion == "Lisabella solo responde preguntas de ciencias médicas"

    def test_all_matched_terms_listed(self, sample_classifier):
        result = sample_classifier.classify("apuesta de fútbol en el casino")

        assert isinstance(result, RejectedResult)
        assert result.reason == "Contiene términos no médicos: fútbol, casino"

    def test_case_insensitive(self, sample_classifier):
        result = sample_classifier.classify("Resultados del FÚTBOL")
        assert isinstance(result, RejectedResult)

    def test_prohibited_beats_medical_keywords(self, sample_classifier):
        result = sample_classifier.classify("qué dosis de losartán toma el jugador de fútbol")
        assert isinstance(result, RejectedResult)

    def test_prohibited_term_checked_before_note_heuristic(self, sample_classifier, sample_note_text):
        """A note that also contains a prohibited term is rejected"""
        result = sample_classifier.classify(sample_note_text + "\nRefiere lesión jugando fútbol")

        assert isinstance(result, RejectedResult)
        assert "fútbol" in result.reason


class TestMedicalNote:
    """Stage 4: structured clinical notes"""

    def test_note_approved(self, sample_classifier, sample_note_text):
        result = sample_classifier.classify(sample_note_text)

        assert isinstance(result, ApprovedResult)
        assert result.domain == "análisis clínico"
        assert result.confidence == 0.95
        assert result.note_analysis is True
        assert result.special_command is None

    def test_three_indicators_enough(self, sample_classifier):
        result = sample_classifier.classify("Fecha: hoy. Plan: reposo. TA: 120/80")

        assert isinstance(result, ApprovedResult)
        assert result.note_analysis is True

    def test_two_indicators_not_a_note(self, sample_classifier):
        result = sample_classifier.classify("Plan: reposo relativo y TA: 120/80 mañana")
        assert not (isinstance(result, ApprovedResult) and result.note_analysis)


class TestContentAnalysis:
    """Stage 5: approval rules"""

    def test_strong_term_rule(self, sample_classifier):
        result = sample_classifier.classify("fármaco y dosis habitual")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "farmacología"
        assert result.confidence == 0.90

    def test_three_keywords_rule(self, sample_classifier):
        result = sample_classifier.classify("qué estructura anatómica tiene el riñón")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "anatomía"
        assert result.confidence == 0.85

    def test_two_keywords_with_context_rule(self, sample_classifier):
        result = sample_classifier.classify("cómo funciona la homeostasis del hueso")

        assert isinstance(result, ApprovedResult)
        assert result.confidence == 0.80

    def test_confidence_monotonic_with_third_keyword(self, sample_classifier):
        two = sample_classifier.classify("cómo funciona la homeostasis del hueso")
        three = sample_classifier.classify("cómo funciona la homeostasis y la función del hueso")

        assert two.confidence == 0.80
        assert three.confidence == 0.85
        assert three.confidence >= two.confidence

    def test_two_keywords_without_context_not_approved(self, sample_classifier):
        result = sample_classifier.classify("homeostasis del hueso largo")
        assert isinstance(result, ReformulateResult)

    def test_anatomical_regions_rule(self, sample_classifier):
        result = sample_classifier.classify("hígado y pulmón")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "anatomía"
        assert result.confidence == 0.85

    def test_two_word_question_can_be_approved(self, sample_classifier):
        result = sample_classifier.classify("losartán dosis")
        # 2 keywords but no strong term and no context: falls through to short handling
        assert isinstance(result, ReformulateResult)

        result = sample_classifier.classify("fármaco dosis")
        assert isinstance(result, ApprovedResult)
        assert result.confidence == 0.90

    def test_tie_goes_to_first_declared_domain(self, sample_classifier):
        # anatomía (hueso) and fisiología (función) both score 1
        result = sample_classifier.classify("cuál es la función del hueso")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "anatomía"

    def test_tie_break_follows_declaration_order(self, sample_commands):
        vocabulary = MedicalVocabulary.from_mappings(
            domains={
                "fisiología": ["función"],
                "anatomía": ["hueso"],
            },
            special_commands=sample_commands,
        )
        classifier = QueryClassifier(vocabulary, ClassificationThresholds())

        result = classifier.classify("cuál es la función del hueso")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "fisiología"


class TestReformulation:
    """Stages 6-8"""

    def test_short_question_with_anatomical_term(self, sample_classifier):
        result = sample_classifier.classify("corazón")

        assert isinstance(result, ReformulateResult)
        assert result.reason == "Término médico detectado: 'corazón', pero la pregunta es muy breve"
        assert "**Preguntas sugeridas sobre 'corazón':**" in result.suggestion

    def test_short_question_generic(self, sample_classifier):
        result = sample_classifier.classify("hola")

        assert isinstance(result, ReformulateResult)
        assert result.reason == "Pregunta demasiado corta"
        assert result.suggestion == SHORT_QUESTION_SUGGESTION

    def test_soft_reformulation_echoes_keywords(self, sample_classifier):
        result = sample_classifier.classify("háblame un poco sobre el infarto")

        assert isinstance(result, ReformulateResult)
        assert result.reason == "Pregunta médica detectada pero muy general"
        assert result.suggestion.startswith("**Detecté términos médicos: infarto**")

    def test_default_reformulation(self, sample_classifier):
        result = sample_classifier.classify("quiero saber algo interesante hoy")

        assert isinstance(result, ReformulateResult)
        assert result.reason == "No se detectaron términos médicos específicos"
        assert result.suggestion == GENERAL_SUGGESTIONS


class TestClassifierBehavior:
    """Cross-cutting guarantees"""

    def test_deterministic(self, sample_classifier):
        text = "qué estructura anatómica tiene el riñón"
        assert sample_classifier.classify(text).to_dict() == sample_classifier.classify(text).to_dict()

    def test_internal_error_degrades_to_reformulate(self, sample_classifier, monkeypatch):
        def boom(q):
            raise RuntimeError("scorer exploded")

        monkeypatch.setattr(sample_classifier.scorer, "analyze", boom)

        result = sample_classifier.classify("una pregunta cualquiera sobre medicina")

        assert isinstance(result, ReformulateResult)
        assert result.suggestion == GENERAL_SUGGESTIONS

    def test_rejected_and_reformulate_carry_no_domain(self, sample_classifier):
        for text in ["ab", "hola", "cuéntame un chiste"]:
            data = sample_classifier.classify(text).to_dict()
            assert "domain" not in data
            assert "confidence" not in data

    def test_get_stats(self, sample_classifier):
        assert sample_classifier.get_stats() == {
            "domains_count": 5,
            "anatomical_regions": 4,
            "prohibited_terms": 3,
            "special_commands": 5,
        }

    def test_thresholds_from_settings(self):
        thresholds = ClassificationThresholds.from_settings()

        assert thresholds.min_question_length == 3
        assert thresholds.note_confidence == 0.95
        assert thresholds.context_confidence == 0.80


class TestPackagedVocabulary:
    """End-to-end examples against the shipped vocabulary"""

    def test_greeting(self, classifier):
        assert isinstance(classifier.classify("hola"), ReformulateResult)

    def test_anatomy_question(self, classifier):
        result = classifier.classify("qué estructura anatómica tiene el riñón")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "anatomía"
        assert result.confidence >= 0.80

    def test_note_review_command(self, classifier):
        result = classifier.classify(
            "revisar nota: fecha 01/01/2024, motivo de consulta dolor, "
            "exploración física normal, plan analgésico"
        )

        assert isinstance(result, ApprovedResult)
        assert result.domain == "análisis clínico"
        assert result.confidence == 0.95
        assert result.special_command == "revision_nota"

    def test_study_mode_without_topic(self, classifier):
        result = classifier.classify("apoyo en estudio")

        assert isinstance(result, RejectedResult)
        assert "Ejemplo:" in result.suggestion

    def test_prohibited_only(self, classifier):
        result = classifier.classify("horóscopo de hoy")

        assert isinstance(result, RejectedResult)
        assert "horóscopo" in result.reason

    def test_pharmacology_question(self, classifier):
        result = classifier.classify("cuál es el mecanismo de acción del losartán")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "farmacología"
        assert result.confidence == 0.85

    def test_study_mode_with_topic(self, classifier):
        result = classifier.classify("apoyo en estudio ciclo de krebs y glucólisis")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "bioquímica"
        assert result.special_command == "study_mode"

    def test_stats_shape(self, classifier, default_vocabulary):
        stats = classifier.get_stats()

        assert stats["domains_count"] == len(default_vocabulary.domains)
        assert stats["domains_count"] >= 40
        assert stats["special_commands"] == 5

    def test_region_inside_longer_word_counts(self, classifier):
        """Known limitation: anatomical regions are plain substrings ("recto" in "correcto")"""
        result = classifier.classify("correcto")

        assert isinstance(result, ReformulateResult)
        assert result.reason == "Término médico detectado: 'recto', pero la pregunta es muy breve"

    def test_prohibited_term_inside_medical_phrase(self, classifier):
        """Known limitation: "película" also fires on "película lagrimal" """
        result = classifier.classify("película lagrimal del ojo")

        assert isinstance(result, RejectedResult)
        assert result.reason == "Contiene términos no médicos: película"


class TestDomainNames:
    """Declared domain names reach the result unchanged"""

    def test_mixed_case_domain_round_trips(self, sample_commands):
        vocabulary = MedicalVocabulary.from_mappings(
            domains={" Cardiología ": ["Corazón", "infarto", "arritmia"]},
            special_commands=sample_commands,
        )
        result = QueryClassifier(vocabulary).classify("corazón infarto arritmia en adultos")

        assert isinstance(result, ApprovedResult)
        assert result.domain == "Cardiología"
        assert result.domain in vocabulary.domain_order

    def test_anatomy_bonus_needs_exact_name(self, sample_commands):
        vocabulary = MedicalVocabulary.from_mappings(
            domains={"Anatomía": ["hueso"]},
            anatomical_regions=["hígado", "pulmón"],
            special_commands=sample_commands,
        )
        scores = QueryClassifier(vocabulary).scorer.score("hueso del hígado y pulmón")

        assert scores == {"Anatomía": 1, "anatomía": 2}


class TestLargeInput:
    """Classification stays fast on long text"""

    @pytest.mark.parametrize("filler", ["que ", "vo ", "qué es "])
    def test_repeated_words(self, classifier, filler):
        text = filler * (80000 // len(filler))

        start = time.perf_counter()
        result = classifier.classify(text)
        elapsed = time.perf_counter() - start

        assert result is not None
        assert elapsed < 1.0
