# ============================================================================
# src/medical_router/constants/result_types.py
# ============================================================================
"""
Classification outcomes and fixed domain names
"""

from enum import Enum


class ResultType(str, Enum):
    """Wire value of the ``result`` discriminator."""
    APPROVED = "APROBADA"
    REJECTED = "RECHAZADA"
    REFORMULATE = "REFORMULAR"


# Domain used for notes and note/case commands
CLINICAL_ANALYSIS_DOMAIN = "análisis clínico"

# Domain used when no keyword scored
GENERAL_MEDICINE_DOMAIN = "medicina general"

# Domain boosted by anatomical region matches
ANATOMY_DOMAIN = "anatomía"
