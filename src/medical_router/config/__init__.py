# ============================================================================
# src/medical_router/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .base_config import base_settings
from .thresholds_config import threshold_settings
from .mistral_config import mistral_settings
from .server_config import server_settings
from .logging_config import logging_settings
