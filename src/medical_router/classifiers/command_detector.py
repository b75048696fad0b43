# ============================================================================
# src/medical_router/classifiers/command_detector.py
# ============================================================================
"""
Special-command detection

Commands are checked in vocabulary order; the first command with a trigger
phrase contained in the (lower-cased) question wins.

Triggers are plain substrings, not tokens: "hacer nota" also fires inside
"deshacer notas". Trigger phrases have to be chosen with that in mind.
"""

from typing import Optional, Sequence, Tuple

from ..constants import SpecialCommand


class SpecialCommandDetector:
    """Finds the first special command whose trigger appears in the text."""

    def __init__(self, commands: Sequence[Tuple[SpecialCommand, Sequence[str]]]):
        self.commands = tuple(commands)

    def detect(self, q: str) -> Optional[SpecialCommand]:
        """
        Args:
            q: Lower-cased question text

        Returns:
            The first matching SpecialCommand, or None
        """
        for command, triggers in self.commands:
            if any(trigger in q for trigger in triggers):
                return command
        return None

    def matching_trigger(self, q: str) -> Optional[str]:
        """First trigger phrase found in the text (for logging)."""
        for _, triggers in self.commands:
            for trigger in triggers:
                if trigger in q:
                    return trigger
        return None
