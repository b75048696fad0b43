# ============================================================================
# src/medical_router/generation/client.py
# ============================================================================
"""
Generation Client Factory

Provides a unified interface for creating answer-generation clients.
Supported backends:
- mistral: Mistral chat completions API (default)

Usage:
    from medical_router.generation import create_client

    client = create_client()
    answer = await client.generate("¿Qué es la homeostasis?", "fisiología")
"""

from typing import Dict, Any, Optional
import logging

from ..config import mistral_settings
from .base import BaseGenerationClient, BackendType
from .mistral_client import MistralClient


# Default backend
DEFAULT_BACKEND = BackendType.MISTRAL.value

# Singleton cache keyed by (backend, model, url) so one HTTP session is
# shared by every request
_client_cache: Dict[tuple, BaseGenerationClient] = {}

_logger = logging.getLogger(__name__)


def get_default_config(backend: str = DEFAULT_BACKEND) -> Dict[str, Any]:
    """
    Default configuration for a backend, read from the environment / .env.

    Args:
        backend: Backend type ("mistral")

    Returns:
        Default configuration dict
    """
    return {
        "backend": backend,
        "api_key": mistral_settings.MISTRAL_API_KEY,
        "api_url": mistral_settings.MISTRAL_API_URL,
        "model": mistral_settings.MISTRAL_MODEL,
        "temperature": mistral_settings.MISTRAL_TEMPERATURE,
        "max_tokens": mistral_settings.MISTRAL_MAX_TOKENS,
        "timeout": mistral_settings.MISTRAL_TIMEOUT,
        "max_retries": mistral_settings.MISTRAL_MAX_RETRIES,
        "retry_delay": mistral_settings.MISTRAL_RETRY_DELAY,
    }


def create_client(config: Optional[Dict[str, Any]] = None) -> BaseGenerationClient:
    """
    Factory function to create a generation client.

    Returns a cached singleton when backend + model + endpoint match.
    Passed config values take precedence over environment settings.

    Args:
        config: Configuration dict (see MistralClient for the keys)

    Returns:
        Configured generation client

    Raises:
        ValueError: If backend type is not supported
    """
    config = {**get_default_config(), **(config or {})}
    backend = config.get('backend', DEFAULT_BACKEND).lower()

    if backend != BackendType.MISTRAL.value:
        raise ValueError(
            f"Unknown backend: {backend}. "
            f"Supported backends: {', '.join(b.value for b in BackendType)}"
        )

    cache_key = (backend, config.get('model'), config.get('api_url'))
    if cache_key in _client_cache:
        _logger.debug(f"Reusing cached {backend} client: {cache_key}")
        return _client_cache[cache_key]

    client = MistralClient(config)
    _client_cache[cache_key] = client
    _logger.info(f"Created and cached {backend} client: {cache_key}")

    return client


def clear_client_cache() -> None:
    """Forget cached clients (tests, configuration reloads)."""
    _client_cache.clear()
