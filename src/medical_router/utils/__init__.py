# ============================================================================
# src/medical_router/utils/__init__.py
# ============================================================================
"""
Utility modules for the medical query router.
"""

from .exceptions import (
    MedicalRouterError,
    ConfigurationError,
    VocabularyError,
    GenerationError,
    GenerationTimeoutError,
    GenerationAuthError,
)

from .logging import (
    setup_logging,
    JsonFormatter,
    LogAdapter,
)

__all__ = [
    # Exceptions
    'MedicalRouterError',
    'ConfigurationError',
    'VocabularyError',
    'GenerationError',
    'GenerationTimeoutError',
    'GenerationAuthError',
    # Logging
    'setup_logging',
    'JsonFormatter',
    'LogAdapter',
]
