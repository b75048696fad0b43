# ============================================================================
# src/medical_router/config/thresholds_config.py
# ============================================================================
"""
Classification Thresholds
- Input guards
- Keyword / indicator counts
- Confidence assigned by each approval rule
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ThresholdSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MIN_QUESTION_LENGTH: int = Field(
        default=3,
        ge=1,
        description="Trimmed questions shorter than this are rejected"
    )
    NOTE_INDICATOR_THRESHOLD: int = Field(
        default=3,
        ge=1,
        description="Matched note indicators needed to treat text as a clinical note"
    )
    SHORT_QUESTION_MAX_WORDS: int = Field(
        default=2,
        ge=0,
        description="Questions with this many words or fewer get the short-question treatment"
    )
    MAX_ECHOED_KEYWORDS: int = Field(
        default=8,
        ge=1,
        description="Detected keywords echoed back in reformulation suggestions"
    )
    SHORT_KEYWORD_MAX_LENGTH: int = Field(
        default=3,
        ge=0,
        description="Keywords this short only count as whole words or at the start of the text"
    )

    NOTE_CONFIDENCE: float = Field(
        default=0.95,
        ge=0.0, le=1.0,
        description="Confidence for note analysis and note/case commands"
    )
    STRONG_TERM_CONFIDENCE: float = Field(
        default=0.90,
        ge=0.0, le=1.0,
        description="Strong medical term plus at least two keywords"
    )
    KEYWORD_CONFIDENCE: float = Field(
        default=0.85,
        ge=0.0, le=1.0,
        description="Three or more keywords"
    )
    CONTEXT_CONFIDENCE: float = Field(
        default=0.80,
        ge=0.0, le=1.0,
        description="Two keywords plus a medical question pattern"
    )
    ANATOMY_CONFIDENCE: float = Field(
        default=0.85,
        ge=0.0, le=1.0,
        description="Two or more anatomical regions"
    )
    STUDY_MODE_CONFIDENCE: float = Field(
        default=0.85,
        ge=0.0, le=1.0,
        description="Study mode with an identifiable domain"
    )

threshold_settings = ThresholdSettings()
