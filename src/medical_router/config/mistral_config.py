# ============================================================================
# src/medical_router/config/mistral_config.py
# ============================================================================
"""
Mistral Configuration (response generation)
- Credentials and model
- Sampling
- Timeout and retries
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MistralSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MISTRAL_API_KEY: str = Field(
        default="",
        description="Bearer token for the Mistral API"
    )
    MISTRAL_API_URL: str = Field(
        default="https://api.mistral.ai/v1/chat/completions",
        description="Chat completions endpoint"
    )
    MISTRAL_MODEL: str = Field(
        default="mistral-small-latest",
        description="Model used for answers"
    )
    MISTRAL_TEMPERATURE: float = Field(
        default=0.3,
        ge=0.0, le=2.0,
        description="Sampling temperature"
    )
    MISTRAL_MAX_TOKENS: int = Field(
        default=4000,
        ge=1,
        description="Maximum tokens per answer"
    )
    MISTRAL_TIMEOUT: int = Field(
        default=30,
        ge=1,
        description="Total request timeout (seconds)"
    )
    MISTRAL_MAX_RETRIES: int = Field(
        default=3,
        ge=1,
        description="Attempts before giving up"
    )
    MISTRAL_RETRY_DELAY: float = Field(
        default=5.0,
        ge=0.0,
        description="Base delay between attempts (seconds), doubled on each retry"
    )

mistral_settings = MistralSettings()
