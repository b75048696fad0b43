# ============================================================================
# src/medical_router/config/server_config.py
# ============================================================================
"""
HTTP Server Settings
- Bind address
- CORS
- Service identity reported by /api/health
- Request size limit for /api/ask
"""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    HOST: str = Field(
        default="0.0.0.0",
        description="Interface the API binds to"
    )
    PORT: int = Field(
        default=3000,
        description="Port the API listens on"
    )
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    CORS_METHODS: List[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        description="Allowed CORS methods"
    )
    CORS_HEADERS: List[str] = Field(
        default=["Content-Type", "Authorization"],
        description="Allowed CORS headers"
    )
    SERVICE_NAME: str = Field(
        default="Lisabella Medical AI",
        description="Service name reported by the health check"
    )
    SERVICE_VERSION: str = Field(
        default="1.0.0",
        description="Service version reported by the health check"
    )
    MAX_QUESTION_LENGTH: int = Field(
        default=20000,
        ge=1,
        description="Longest question /api/ask accepts, in characters"
    )

server_settings = ServerSettings()
