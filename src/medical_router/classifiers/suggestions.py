# ============================================================================
# src/medical_router/classifiers/suggestions.py
# ============================================================================
"""
Reformulation suggestions

Spanish guidance returned verbatim in the ``suggestion`` field of rejected
and reformulate results. The ``**bold**`` markers and bullet characters are
rendered by the frontend and must not change.
"""

from typing import Sequence


SHORT_QUESTION_SUGGESTION = (
    "Especifica qué deseas saber:\n"
    "• ¿Estructura anatómica?\n"
    "• ¿Función fisiológica?\n"
    "• ¿Tratamiento farmacológico?\n"
    "• ¿Diagnóstico diferencial?"
)

# Trailing spaces on the physiological line are part of the client contract
GENERAL_SUGGESTIONS = "\n".join([
    "**Para obtener una respuesta precisa, reformula usando términos médicos específicos:**",
    "",
    '• **Anatómicos**: "articulación", "sistema nervioso", "región abdominal"',
    '• **Fisiológicos**: "homeostasis", "metabolismo", "regulación hormonal"  ',
    '• **Farmacológicos**: "mecanismo de acción", "farmacocinética", "dosis terapéutica"',
    '• **Patológicos**: "etiología", "fisiopatología", "diagnóstico diferencial"',
    "",
    "**Ejemplo de pregunta bien formulada:**",
    '"¿Cuál es el mecanismo de acción del losartán en la hipertensión arterial?"',
])


def general_suggestions() -> str:
    """Generic guidance covering the four canonical question categories."""
    return GENERAL_SUGGESTIONS


def keyword_suggestions(keywords: Sequence[str]) -> str:
    """Guidance built around the keywords already detected in the question."""
    if not keywords:
        return general_suggestions()

    first = keywords[0]
    return f"""**Detecté términos médicos: {', '.join(keywords)}**

**Para una respuesta más precisa, reformula como:**

• "¿Cuál es la **estructura anatómica** de {first}?"
• "¿Qué **función fisiológica** tiene {first}?"
• "¿Cómo funciona el **mecanismo de acción** de {first}?"
• "¿Qué **patologías** afectan a {first}?\""""


def term_suggestions(term: str) -> str:
    """Example questions about a single anatomical term."""
    return f"""**Preguntas sugeridas sobre '{term}':**

• ¿Cuál es la **estructura anatómica** del {term}?
• ¿Cuál es la **función fisiológica** del {term}?
• ¿Dónde se **ubica** exactamente el {term}?
• ¿Qué **irrigación** e **inervación** tiene?
• ¿Qué **patologías** pueden afectarlo?
• ¿Qué **estudios diagnósticos** lo evalúan?"""
