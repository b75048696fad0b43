# ============================================================================
# src/medical_router/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .special_commands import SpecialCommand, ANALYSIS_COMMANDS, STUDY_MODE
from .result_types import (
    ResultType,
    CLINICAL_ANALYSIS_DOMAIN,
    GENERAL_MEDICINE_DOMAIN,
    ANATOMY_DOMAIN,
)
