# ============================================================================
# src/medical_router/generation/base.py
# ============================================================================
"""
Base Generation Client Interface

Defines the abstract interface every answer-generation backend implements.
Supported backends:
- mistral: Mistral chat completions API
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from enum import Enum
import logging


class BackendType(Enum):
    """Supported generation backends."""
    MISTRAL = "mistral"


class BaseGenerationClient(ABC):
    """
    Abstract base class for answer generation clients.

    All backends must implement:
    - generate(): Async answer generation, never raises
    - health_check(): Verify backend is configured / reachable
    - get_statistics(): Return request stats
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        # Common statistics
        self._request_count = 0
        self._failure_count = 0
        self._retry_count = 0
        self._total_generation_time = 0.0

    @property
    @abstractmethod
    def backend_type(self) -> BackendType:
        """Return the backend type."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model identifier."""
        pass

    @abstractmethod
    async def generate(
        self,
        question: str,
        domain: str,
        special_command: Optional[str] = None
    ) -> str:
        """
        Generate the answer to an approved question.

        Args:
            question: Original user text
            domain: Classified domain
            special_command: Special command id, "study_mode" or None

        Returns:
            Answer text, or a user-facing Spanish error message when the
            backend fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """
        Check if the backend is available.

        Returns:
            {
                "healthy": bool,
                "backend": str,
                "model": str,
                "details": str
            }
        """
        pass

    async def close(self):
        """Release network resources (no-op by default)."""
        pass

    def get_statistics(self) -> Dict[str, Any]:
        """Get request statistics."""
        avg_time = (
            self._total_generation_time / self._request_count
            if self._request_count > 0
            else 0.0
        )

        return {
            "backend": self.backend_type.value,
            "model": self.model_name,
            "request_count": self._request_count,
            "failure_count": self._failure_count,
            "retry_count": self._retry_count,
            "total_generation_time": self._total_generation_time,
            "average_generation_time": avg_time,
        }
