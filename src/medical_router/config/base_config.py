# ============================================================================
# src/medical_router/config/base_config.py
# ============================================================================
"""
Base Configuration
- Project root
- Vocabulary directory and file names
"""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).parent.parent


class BaseSettingsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Root project directory
    PROJECT_ROOT: Path = Field(
        default_factory=lambda: PACKAGE_ROOT.parent.parent,
        description="Root directory of the project"
    )

    # Vocabulary tables (domains, anatomical regions, commands, prohibited terms)
    VOCABULARY_DIR: Path = Field(
        default=PACKAGE_ROOT / "vocabulary" / "data",
        description="Directory containing the vocabulary JSON files"
    )
    DOMAINS_FILE: str = Field(
        default="dominios.json",
        description="Domain keywords, anatomical regions, special commands, high-confidence terms"
    )
    PROHIBITED_FILE: str = Field(
        default="prohibidos.json",
        description="Non-medical terms that reject a question outright"
    )

    def get_domains_path(self) -> Path:
        """Full path of the domain vocabulary file"""
        return self.VOCABULARY_DIR / self.DOMAINS_FILE

    def get_prohibited_path(self) -> Path:
        """Full path of the prohibited terms file"""
        return self.VOCABULARY_DIR / self.PROHIBITED_FILE

# Global instance
base_settings = BaseSettingsConfig()
