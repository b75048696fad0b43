# ============================================================================
# src/medical_router/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the medical query router.

The classifier itself never raises; these cover configuration loading and
the generation client internals.
"""


class MedicalRouterError(Exception):
    """Base exception for all medical router errors."""
    pass


class ConfigurationError(MedicalRouterError):
    """Invalid configuration."""
    pass


class VocabularyError(ConfigurationError):
    """Vocabulary file missing, unreadable or malformed."""
    def __init__(self, message: str, source: str = None):
        super().__init__(message)
        self.source = source


class GenerationError(MedicalRouterError):
    """Error while generating a response."""
    def __init__(self, message: str, status: int = None, retryable: bool = False):
        super().__init__(message)
        self.status = status
        self.retryable = retryable


class GenerationTimeoutError(GenerationError):
    """Generation request timed out."""
    def __init__(self, message: str):
        super().__init__(message, retryable=True)


class GenerationAuthError(GenerationError):
    """Generation backend rejected the API key."""
    def __init__(self, message: str, status: int = 401):
        super().__init__(message, status=status, retryable=False)
