# ============================================================================
# src/medical_router/classifiers/__init__.py
# ============================================================================
"""
Query classification: rule cascade, detectors and result types
"""

from .results import (
    ApprovedResult,
    RejectedResult,
    ReformulateResult,
    ClassificationResult,
)
from .command_detector import SpecialCommandDetector
from .note_detector import MedicalNoteDetector, NoteIndicator, NOTE_INDICATORS
from .domain_scorer import DomainScorer, ContentAnalysis
from .query_classifier import QueryClassifier, ClassificationThresholds

__all__ = [
    "ApprovedResult",
    "RejectedResult",
    "ReformulateResult",
    "ClassificationResult",
    "SpecialCommandDetector",
    "MedicalNoteDetector",
    "NoteIndicator",
    "NOTE_INDICATORS",
    "DomainScorer",
    "ContentAnalysis",
    "QueryClassifier",
    "ClassificationThresholds",
]
