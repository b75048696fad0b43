# ============================================================================
# src/medical_router/classifiers/results.py
# ============================================================================
"""
Classification results

Exactly one variant is produced per classified question:
- ApprovedResult: answer it (domain + confidence, optional command/note flag)
- RejectedResult: refuse it
- ReformulateResult: ask the user to rephrase

Serialized with a ``result`` discriminator (APROBADA / RECHAZADA / REFORMULAR).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..constants import ResultType


@dataclass(frozen=True)
class ApprovedResult:
    domain: str
    confidence: float
    special_command: Optional[str] = None
    note_analysis: bool = False

    def __post_init__(self):
        # Two decimals, clamped to [0, 1]
        confidence = round(min(max(float(self.confidence), 0.0), 1.0), 2)
        object.__setattr__(self, "confidence", confidence)

    @property
    def result_type(self) -> ResultType:
        return ResultType.APPROVED

    @property
    def is_approved(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "result": self.result_type.value,
            "domain": self.domain,
            "confidence": self.confidence,
        }
        if self.special_command:
            data["special_command"] = self.special_command
        if self.note_analysis:
            data["note_analysis"] = True
        return data


@dataclass(frozen=True)
class RejectedResult:
    reason: str
    suggestion: str = ""

    @property
    def result_type(self) -> ResultType:
        return ResultType.REJECTED

    @property
    def is_approved(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result_type.value,
            "reason": self.reason,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class ReformulateResult:
    reason: str
    suggestion: str

    @property
    def result_type(self) -> ResultType:
        return ResultType.REFORMULATE

    @property
    def is_approved(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result_type.value,
            "reason": self.reason,
            "suggestion": self.suggestion,
        }


ClassificationResult = Union[ApprovedResult, RejectedResult, ReformulateResult]
