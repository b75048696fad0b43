# ============================================================================
# src/medical_router/vocabulary/__init__.py
# ============================================================================
"""
Vocabulary tables for the query classifier
"""

from .models import MedicalVocabulary, DEFAULT_HIGH_CONFIDENCE_TERMS
from .loader import load_vocabulary, get_default_vocabulary

__all__ = [
    "MedicalVocabulary",
    "DEFAULT_HIGH_CONFIDENCE_TERMS",
    "load_vocabulary",
    "get_default_vocabulary",
]
