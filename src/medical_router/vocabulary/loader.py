# ============================================================================
# src/medical_router/vocabulary/loader.py
# ============================================================================
"""
Vocabulary loading utilities.

Reads the domain and prohibited-term JSON files and freezes them into a
MedicalVocabulary. All validation happens here, at startup, so the
classifier never has to deal with malformed tables.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import base_settings
from ..utils.exceptions import VocabularyError
from .models import MedicalVocabulary, DEFAULT_HIGH_CONFIDENCE_TERMS

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Dict[str, Any]:
    """Read a JSON object from disk, mapping failures to VocabularyError."""
    if not path.exists():
        raise VocabularyError(f"Vocabulary file not found: {path}", source=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise VocabularyError(f"Invalid JSON in {path.name}: {e}", source=str(path)) from e

    if not isinstance(data, dict):
        raise VocabularyError(f"{path.name} must contain a JSON object", source=str(path))

    return data


def load_vocabulary(directory: Optional[Path] = None) -> MedicalVocabulary:
    """
    Load and validate the vocabulary tables.

    Args:
        directory: Directory holding the domain and prohibited-term files.
            Defaults to the configured VOCABULARY_DIR.

    Returns:
        Frozen MedicalVocabulary

    Raises:
        VocabularyError: if a file is missing, unreadable or malformed
    """
    if directory is None:
        domains_path = base_settings.get_domains_path()
        prohibited_path = base_settings.get_prohibited_path()
    else:
        directory = Path(directory)
        domains_path = directory / base_settings.DOMAINS_FILE
        prohibited_path = directory / base_settings.PROHIBITED_FILE

    domains_data = _read_json(domains_path)
    prohibited_data = _read_json(prohibited_path)

    vocabulary = MedicalVocabulary.from_mappings(
        domains=domains_data.get("keywords", {}),
        anatomical_regions=domains_data.get("anatomical_regions", []),
        special_commands=domains_data.get("special_commands", {}),
        prohibited_terms=prohibited_data.get("terms", []),
        high_confidence_terms=domains_data.get(
            "high_confidence_terms", DEFAULT_HIGH_CONFIDENCE_TERMS
        ),
    )

    logger.info(
        f"Loaded vocabulary from {domains_path.parent}: "
        f"{len(vocabulary.domains)} domains, "
        f"{len(vocabulary.anatomical_regions)} anatomical regions, "
        f"{len(vocabulary.special_commands)} special commands, "
        f"{len(vocabulary.prohibited_terms)} prohibited terms"
    )
    return vocabulary


@lru_cache(maxsize=1)
def get_default_vocabulary() -> MedicalVocabulary:
    """
    Vocabulary from the configured directory.

    Cached - the tables are immutable for the life of the process.
    """
    return load_vocabulary()
