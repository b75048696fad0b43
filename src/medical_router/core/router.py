# ============================================================================
# src/medical_router/core/router.py
# ============================================================================
"""
Medical Query Router

Request-handling flow for a single question:

    validate → classify → (approved) generate answer

Rejected and reformulate results are returned to the caller without
contacting the generation backend.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

from ..classifiers import ApprovedResult, QueryClassifier
from ..constants import GENERAL_MEDICINE_DOMAIN
from ..generation import BaseGenerationClient, create_client
from ..vocabulary import get_default_vocabulary


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class MedicalQueryRouter:
    """
    Connects the classifier to the generation client.

    Args:
        classifier: QueryClassifier instance
        generator: Answer generation client
    """

    def __init__(
        self,
        classifier: QueryClassifier,
        generator: BaseGenerationClient
    ):
        self.classifier = classifier
        self.generator = generator
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, generator_config: Optional[Dict[str, Any]] = None) -> "MedicalQueryRouter":
        """Router over the packaged vocabulary and the configured Mistral client."""
        return cls(
            classifier=QueryClassifier(get_default_vocabulary()),
            generator=create_client(generator_config),
        )

    def validate_question(self, question: Any) -> bool:
        """A question must be a string at least as long as the classifier minimum, once trimmed."""
        return (
            isinstance(question, str)
            and len(question.strip()) >= self.classifier.thresholds.min_question_length
        )

    async def ask(self, question: str) -> Dict[str, Any]:
        """
        Classify a question and, if approved, generate the answer.

        Args:
            question: Raw user text (already validated)

        Returns:
            {"success": bool, "classification": dict, "response": str | None,
             "timestamp": str (approved only)}
        """
        self.logger.info(f"Processing question: {question[:100]!r}")

        classification = self.classifier.classify(question)

        if not isinstance(classification, ApprovedResult):
            return {
                "success": False,
                "classification": classification.to_dict(),
                "response": None,
            }

        domain = classification.domain or GENERAL_MEDICINE_DOMAIN
        special_command = classification.special_command

        self.logger.info(
            f"Generating answer with {self.generator.model_name}: "
            f"domain={domain}, special_command={special_command}"
        )
        response = await self.generator.generate(question, domain, special_command)

        return {
            "success": True,
            "classification": classification.to_dict(),
            "response": response,
            "timestamp": utc_timestamp(),
        }

    def stats(self) -> Dict[str, Any]:
        """Classifier vocabulary sizes plus model and server status."""
        return {
            **self.classifier.get_stats(),
            "mistral_model": self.generator.model_name,
            "server_status": "running",
        }

    async def close(self):
        await self.generator.close()
