# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from medical_router.classifiers import QueryClassifier, ClassificationThresholds
from medical_router.generation import clear_client_cache
from medical_router.vocabulary import MedicalVocabulary, get_default_vocabulary


SAMPLE_COMMANDS = {
    "revision_nota": ["revisar nota", "revisión de nota"],
    "correccion_nota": ["corregir nota"],
    "elaboracion_nota": ["elaborar nota", "hacer nota"],
    "valoracion": ["valorar paciente"],
    "apoyo_estudio": ["apoyo en estudio", "modo estudio"],
}


@pytest.fixture
def sample_commands():
    """Trigger phrases for all five special commands"""
    return dict(SAMPLE_COMMANDS)


@pytest.fixture
def sample_vocabulary():
    """Small hand-made vocabulary with predictable scores"""
    return MedicalVocabulary.from_mappings(
        domains={
            "anatomía": ["estructura", "anatómica", "hueso"],
            "fisiología": ["función", "homeostasis"],
            "farmacología": ["fármaco", "dosis", "losartán"],
            "cardiología": ["corazón", "infarto", "ecg"],
            "nefrología": ["riñón", "nefrona"],
        },
        anatomical_regions=["riñón", "corazón", "hígado", "pulmón"],
        special_commands=SAMPLE_COMMANDS,
        prohibited_terms=["fútbol", "casino", "chiste"],
        high_confidence_terms=["fármaco", "patología", "diagnóstico"],
    )


@pytest.fixture
def sample_classifier(sample_vocabulary):
    """Classifier over the hand-made vocabulary with default thresholds"""
    return QueryClassifier(sample_vocabulary, ClassificationThresholds())


@pytest.fixture
def default_vocabulary():
    """Packaged vocabulary"""
    return get_default_vocabulary()


@pytest.fixture
def classifier(default_vocabulary):
    """Classifier over the packaged vocabulary"""
    return QueryClassifier(default_vocabulary, ClassificationThresholds())


@pytest.fixture
def sample_note_text():
    """Clinical note with several structural markers"""
    return """
    Fecha: 12/03/2024
    Motivo de consulta: cefalea de 3 días de evolución
    Exploración física: TA: 130/85, FC: 78 lpm, afebril
    Impresión diagnóstica: cefalea tensional
    Plan: paracetamol 500 mg VO cada 8 horas
    """


@pytest.fixture(autouse=True)
def reset_client_cache():
    """Each test gets fresh generation clients"""
    clear_client_cache()
    yield
    clear_client_cache()
