# ============================================================================
# src/medical_router/classifiers/note_detector.py
# ============================================================================
"""
Medical Note Detection

Recognizes text that structurally resembles a clinical (SOAP) note by
counting how many indicators of a fixed battery match. Each indicator is a
named, independently testable regular expression.

Recall-oriented: any text with enough markers counts as a note, even if it
is not really one.
"""

from dataclasses import dataclass
from typing import List, Sequence, Union
import logging
import re

from .patterns import FollowedBy


# Bump when the indicator battery changes
NOTE_INDICATORS_VERSION = "1.0"


@dataclass(frozen=True)
class NoteIndicator:
    """A single structural marker of a clinical note."""
    name: str
    pattern: Union["re.Pattern[str]", FollowedBy]
    description: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _indicator(name: str, regex: str, description: str) -> NoteIndicator:
    return NoteIndicator(name, re.compile(regex, re.IGNORECASE), description)


NOTE_INDICATORS = (
    _indicator("fecha", r"\bfecha[:\s]", "Date field"),
    _indicator("motivo_consulta", r"\bmotivo de consulta[:\s]", "Chief complaint"),
    _indicator("exploracion_fisica", r"\bexploración física[:\s]", "Physical exam"),
    _indicator("impresion_diagnostica", r"\bimpresión diagnóstica[:\s]", "Diagnostic impression"),
    _indicator("plan", r"\bplan[:\s]", "Management plan"),
    _indicator("dosis", r"\b\d+\s*mg\b", "Numeric dose in mg"),
    _indicator("tension_arterial", r"\bta[:\s]\s*\d+/\d+", "Blood pressure (TA: 120/80)"),
    _indicator("frecuencia_cardiaca", r"\bfc[:\s]\s*\d+", "Heart rate (FC: 80)"),
    NoteIndicator(
        "via_frecuencia",
        FollowedBy(r"\bvo\b", r"\bcada\b", re.IGNORECASE),
        "Oral route plus frequency (VO cada 8 h)",
    ),
)


class MedicalNoteDetector:
    """
    Counts note indicators in raw (not lower-cased) text.

    A text is a note when at least ``threshold`` indicators match.
    """

    def __init__(
        self,
        indicators: Sequence[NoteIndicator] = NOTE_INDICATORS,
        threshold: int = 3
    ):
        self.indicators = tuple(indicators)
        self.threshold = threshold
        self.logger = logging.getLogger(__name__)

    def matched_indicators(self, text: str) -> List[str]:
        """Names of the indicators present in the text."""
        return [ind.name for ind in self.indicators if ind.matches(text)]

    def is_medical_note(self, text: str) -> bool:
        matched = self.matched_indicators(text)
        if matched:
            self.logger.debug(f"Note indicators matched: {matched}")
        return len(matched) >= self.threshold
