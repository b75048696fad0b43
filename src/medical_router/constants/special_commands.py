# ============================================================================
# src/medical_router/constants/special_commands.py
# ============================================================================
"""
Special Commands
- High-priority intents detected by trigger phrase
- Which commands bypass domain analysis
"""

from enum import Enum


class SpecialCommand(str, Enum):
    """
    Recognized special commands, keyed by the identifier used in the
    vocabulary file.
    """
    REVISION_NOTA = "revision_nota"         # note review
    CORRECCION_NOTA = "correccion_nota"     # note correction
    ELABORACION_NOTA = "elaboracion_nota"   # note drafting
    VALORACION = "valoracion"               # case assessment
    APOYO_ESTUDIO = "apoyo_estudio"         # study support


# Always approved as clinical analysis, without keyword analysis
ANALYSIS_COMMANDS = frozenset({
    SpecialCommand.REVISION_NOTA,
    SpecialCommand.CORRECCION_NOTA,
    SpecialCommand.ELABORACION_NOTA,
    SpecialCommand.VALORACION,
})

# Value forwarded to the generation client for an approved study request
STUDY_MODE = "study_mode"
