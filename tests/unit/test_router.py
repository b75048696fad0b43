# ============================================================================
# tests/unit/test_router.py
# ============================================================================
"""
Tests for the request-handling router
"""

import re
from typing import Any, Dict, Optional

import pytest

from medical_router.classifiers import ClassificationThresholds, QueryClassifier
from medical_router.core import MedicalQueryRouter, utc_timestamp
from medical_router.generation import BaseGenerationClient, BackendType


class FakeGenerator(BaseGenerationClient):
    """Records calls instead of contacting a backend"""

    def __init__(self, answer="respuesta generada"):
        super().__init__()
        self.answer = answer
        self.calls = []

    @property
    def backend_type(self) -> BackendType:
        return BackendType.MISTRAL

    @property
    def model_name(self) -> str:
        return "mistral-fake"

    async def generate(self, question: str, domain: str, special_command: Optional[str] = None) -> str:
        self.calls.append((question, domain, special_command))
        return self.answer

    async def health_check(self) -> Dict[str, Any]:
        return {"healthy": True, "backend": "mistral", "model": self.model_name, "details": "fake"}


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def router(sample_classifier, generator):
    return MedicalQueryRouter(sample_classifier, generator)


class TestValidateQuestion:

    @pytest.mark.parametrize("question", ["qué es", "abc", "  abc  "])
    def test_valid(self, router, question):
        assert router.validate_question(question)

    @pytest.mark.parametrize("question", [None, "", "ab", "   ", 123, ["pregunta"]])
    def test_invalid(self, router, question):
        assert not router.validate_question(question)

    def test_uses_classifier_minimum(self, sample_vocabulary, generator):
        classifier = QueryClassifier(sample_vocabulary, ClassificationThresholds(min_question_length=6))
        router = MedicalQueryRouter(classifier, generator)

        assert not router.validate_question("corto")
        assert router.validate_question("riñón?")


class TestAsk:

    @pytest.mark.asyncio
    async def test_approved_question_generates(self, router, generator):
        result = await router.ask("qué estructura anatómica tiene el riñón")

        assert result["success"] is True
        assert result["classification"]["result"] == "APROBADA"
        assert result["classification"]["domain"] == "anatomía"
        assert result["response"] == "respuesta generada"
        assert "timestamp" in result
        assert generator.calls == [("qué estructura anatómica tiene el riñón", "anatomía", None)]

    @pytest.mark.asyncio
    async def test_special_command_forwarded(self, router, generator):
        await router.ask("revisar nota del paciente")
        assert generator.calls[0][1:] == ("análisis clínico", "revision_nota")

    @pytest.mark.asyncio
    async def test_study_mode_forwarded(self, router, generator):
        await router.ask("apoyo en estudio losartán y dosis")
        assert generator.calls[0][1:] == ("farmacología", "study_mode")

    @pytest.mark.asyncio
    async def test_rejected_skips_generation(self, router, generator):
        result = await router.ask("cuéntame un chiste")

        assert result == {
            "success": False,
            "classification": {
                "result": "RECHAZADA",
                "reason": "Contiene términos no médicos: chiste",
                "suggestion": "Lisabella solo responde preguntas de ciencias médicas",
            },
            "response": None,
        }
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_reformulate_skips_generation(self, router, generator):
        result = await router.ask("hola")

        assert result["success"] is False
        assert result["classification"]["result"] == "REFORMULAR"
        assert result["response"] is None
        assert "timestamp" not in result
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_generator_error_text_passed_through(self, sample_classifier):
        router = MedicalQueryRouter(sample_classifier, FakeGenerator(answer="⚠️ servicio caído"))

        result = await router.ask("fármaco y dosis habitual")

        assert result["success"] is True
        assert result["response"] == "⚠️ servicio caído"


class TestStats:

    def test_stats(self, router):
        assert router.stats() == {
            "domains_count": 5,
            "anatomical_regions": 4,
            "prohibited_terms": 3,
            "special_commands": 5,
            "mistral_model": "mistral-fake",
            "server_status": "running",
        }


def test_utc_timestamp_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())
