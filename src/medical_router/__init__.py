# ============================================================================
# src/medical_router/__init__.py
# ============================================================================
"""
Medical Query Router

Rule-based classifier that screens Spanish medical questions before they
reach the answer-generation model, plus the HTTP-facing router around it.
"""

__version__ = "1.0.0"

from .classifiers import (
    QueryClassifier,
    ClassificationThresholds,
    ApprovedResult,
    RejectedResult,
    ReformulateResult,
)
from .vocabulary import MedicalVocabulary, load_vocabulary, get_default_vocabulary

__all__ = [
    "QueryClassifier",
    "ClassificationThresholds",
    "ApprovedResult",
    "RejectedResult",
    "ReformulateResult",
    "MedicalVocabulary",
    "load_vocabulary",
    "get_default_vocabulary",
]
