# ============================================================================
# src/medical_router/core/__init__.py
# ============================================================================
"""
Request-handling layer
"""

from .router import MedicalQueryRouter, utc_timestamp

__all__ = ["MedicalQueryRouter", "utc_timestamp"]
