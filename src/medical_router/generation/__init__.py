# ============================================================================
# src/medical_router/generation/__init__.py
# ============================================================================
"""
Answer generation for approved questions
"""

from .base import BaseGenerationClient, BackendType
from .mistral_client import MistralClient
from .client import create_client, get_default_config, clear_client_cache
from .prompts import build_system_prompt, build_user_prompt

__all__ = [
    "BaseGenerationClient",
    "BackendType",
    "MistralClient",
    "create_client",
    "get_default_config",
    "clear_client_cache",
    "build_system_prompt",
    "build_user_prompt",
]
