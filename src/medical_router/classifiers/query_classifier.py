# ============================================================================
# src/medical_router/classifiers/query_classifier.py
# ============================================================================
"""
Medical Query Classifier

Decides whether a free-text medical question is answered, rejected or sent
back for reformulation, and which domain / special command it belongs to.

Deterministic rule cascade. Stages run in a fixed order and the first stage
that reaches a decision wins; later stages assume earlier ones did not fire.

1. LENGTH GUARD
   - Trimmed text shorter than MIN_QUESTION_LENGTH → rejected

2. SPECIAL COMMANDS (absolute priority)
   - Note review / correction / drafting, case assessment → approved as
     clinical analysis without looking at keywords
   - Study support → approved in the best-scoring domain, or rejected
     when no domain can be inferred

3. PROHIBITED TERMS
   - Any prohibited substring → rejected, listing every term found

4. MEDICAL NOTE HEURISTIC
   - Enough note indicators → approved as clinical analysis (note_analysis)

5. CONTENT ANALYSIS (first rule wins)
   - strong term + ≥2 keywords → 0.90
   - ≥3 keywords             → 0.85
   - ≥2 keywords + context   → 0.80
   - ≥2 anatomical regions   → anatomy, 0.85

6. SHORT QUESTIONS → reformulate (term-specific or generic)

7. SOME KEYWORDS   → reformulate with keyword suggestions

8. DEFAULT         → reformulate with general suggestions

The classifier holds only immutable tables and is safe to share between
concurrent requests.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from ..config import threshold_settings
from ..constants import (
    SpecialCommand,
    ANALYSIS_COMMANDS,
    STUDY_MODE,
    ANATOMY_DOMAIN,
    CLINICAL_ANALYSIS_DOMAIN,
)
from ..vocabulary import MedicalVocabulary
from .command_detector import SpecialCommandDetector
from .domain_scorer import DomainScorer, ContentAnalysis
from .note_detector import MedicalNoteDetector
from .results import (
    ApprovedResult,
    ClassificationResult,
    RejectedResult,
    ReformulateResult,
)
from . import suggestions


@dataclass(frozen=True)
class ClassificationThresholds:
    """Snapshot of the cascade's numeric constants."""
    min_question_length: int = 3
    note_indicator_threshold: int = 3
    short_question_max_words: int = 2
    max_echoed_keywords: int = 8
    short_keyword_max_length: int = 3
    note_confidence: float = 0.95
    strong_term_confidence: float = 0.90
    keyword_confidence: float = 0.85
    context_confidence: float = 0.80
    anatomy_confidence: float = 0.85
    study_mode_confidence: float = 0.85

    @classmethod
    def from_settings(cls, settings=threshold_settings) -> "ClassificationThresholds":
        return cls(
            min_question_length=settings.MIN_QUESTION_LENGTH,
            note_indicator_threshold=settings.NOTE_INDICATOR_THRESHOLD,
            short_question_max_words=settings.SHORT_QUESTION_MAX_WORDS,
            max_echoed_keywords=settings.MAX_ECHOED_KEYWORDS,
            short_keyword_max_length=settings.SHORT_KEYWORD_MAX_LENGTH,
            note_confidence=settings.NOTE_CONFIDENCE,
            strong_term_confidence=settings.STRONG_TERM_CONFIDENCE,
            keyword_confidence=settings.KEYWORD_CONFIDENCE,
            context_confidence=settings.CONTEXT_CONFIDENCE,
            anatomy_confidence=settings.ANATOMY_CONFIDENCE,
            study_mode_confidence=settings.STUDY_MODE_CONFIDENCE,
        )


class QueryClassifier:
    """
    Rule-cascade classifier for medical questions.

    Args:
        vocabulary: Frozen vocabulary tables (see vocabulary.load_vocabulary)
        thresholds: Numeric constants; defaults to the configured settings
    """

    def __init__(
        self,
        vocabulary: MedicalVocabulary,
        thresholds: Optional[ClassificationThresholds] = None
    ):
        self.vocabulary = vocabulary
        self.thresholds = thresholds or ClassificationThresholds.from_settings()
        self.logger = logging.getLogger(__name__)

        self.command_detector = SpecialCommandDetector(vocabulary.special_commands)
        self.note_detector = MedicalNoteDetector(
            threshold=self.thresholds.note_indicator_threshold
        )
        self.scorer = DomainScorer(
            vocabulary,
            short_keyword_max_length=self.thresholds.short_keyword_max_length,
            max_detected_keywords=self.thresholds.max_echoed_keywords,
        )

    def classify(self, question: Optional[str]) -> ClassificationResult:
        """
        Classify a question. Never raises.

        Args:
            question: Raw user text

        Returns:
            ApprovedResult, RejectedResult or ReformulateResult
        """
        if not isinstance(question, str):
            question = ""

        self.logger.debug(f"Classifying question: {question[:50]!r}")

        try:
            result = self._run_cascade(question)
        except Exception as e:
            self.logger.exception(f"Classification failed, asking for reformulation: {e}")
            result = ReformulateResult(
                "No fue posible analizar la pregunta",
                suggestions.general_suggestions()
            )

        self._log_result(result)
        return result

    def _run_cascade(self, question: str) -> ClassificationResult:
        # ===== STAGE 1: LENGTH GUARD =====
        if len(question.strip()) < self.thresholds.min_question_length:
            return RejectedResult("Pregunta vacía o demasiado corta")

        q = question.lower().strip()
        q_words = q.split()

        # ===== STAGE 2: SPECIAL COMMANDS (MAXIMUM PRIORITY) =====
        command = self.command_detector.detect(q)
        if command is not None:
            self.logger.info(
                f"Special command detected: {command.value} "
                f"(trigger: {self.command_detector.matching_trigger(q)!r})"
            )
            return self._handle_special_command(command, q)

        # ===== STAGE 3: PROHIBITED TERMS =====
        prohibited = self.find_prohibited_terms(q)
        if prohibited:
            return RejectedResult(
                f"Contiene términos no médicos: {', '.join(prohibited)}",
                "Lisabella solo responde preguntas de ciencias médicas"
            )

        # ===== STAGE 4: MEDICAL NOTE (raw text, case-insensitive) =====
        if self.note_detector.is_medical_note(question):
            return ApprovedResult(
                CLINICAL_ANALYSIS_DOMAIN,
                self.thresholds.note_confidence,
                note_analysis=True
            )

        # ===== STAGE 5: CONTENT ANALYSIS =====
        analysis = self.scorer.analyze(q)
        approved = self._apply_approval_rules(analysis)
        if approved is not None:
            return approved

        # ===== STAGE 6: VERY SHORT QUESTIONS =====
        if len(q_words) <= self.thresholds.short_question_max_words:
            return self._handle_short_question(q)

        # ===== STAGE 7: SOFT REFORMULATION =====
        if analysis.total_keywords >= 1:
            return ReformulateResult(
                "Pregunta médica detectada pero muy general",
                suggestions.keyword_suggestions(analysis.detected_keywords)
            )

        # ===== STAGE 8: DEFAULT =====
        return ReformulateResult(
            "No se detectaron términos médicos específicos",
            suggestions.general_suggestions()
        )

    def _apply_approval_rules(self, analysis: ContentAnalysis) -> Optional[ApprovedResult]:
        t = self.thresholds

        # Strong medical term plus at least two keywords
        if analysis.strong_medical_terms >= 1 and analysis.total_keywords >= 2:
            return ApprovedResult(analysis.best_domain, t.strong_term_confidence)

        if analysis.total_keywords >= 3:
            return ApprovedResult(analysis.best_domain, t.keyword_confidence)

        if analysis.total_keywords >= 2 and analysis.has_medical_context:
            return ApprovedResult(analysis.best_domain, t.context_confidence)

        if analysis.anatomical_terms >= 2:
            return ApprovedResult(ANATOMY_DOMAIN, t.anatomy_confidence)

        return None

    def _handle_special_command(self, command: SpecialCommand, q: str) -> ClassificationResult:
        if command in ANALYSIS_COMMANDS:
            return ApprovedResult(
                CLINICAL_ANALYSIS_DOMAIN,
                self.thresholds.note_confidence,
                special_command=command.value
            )

        if command == SpecialCommand.APOYO_ESTUDIO:
            scores = self.scorer.score(q)
            if scores:
                return ApprovedResult(
                    self.scorer.best_domain(scores),
                    self.thresholds.study_mode_confidence,
                    special_command=STUDY_MODE
                )
            return RejectedResult(
                "El modo 'apoyo en estudio' requiere un tema médico específico",
                "Ejemplo: 'apoyo en estudio ciclo de Krebs' o 'apoyo en estudio anatomía del tórax'"
            )

        raise ValueError(f"Unhandled special command: {command}")

    def _handle_short_question(self, q: str) -> ReformulateResult:
        term = self.scorer.find_anatomical_term(q)
        if term:
            return ReformulateResult(
                f"Término médico detectado: '{term}', pero la pregunta es muy breve",
                suggestions.term_suggestions(term)
            )
        return ReformulateResult(
            "Pregunta demasiado corta",
            suggestions.SHORT_QUESTION_SUGGESTION
        )

    def find_prohibited_terms(self, q: str) -> List[str]:
        """Every prohibited term contained in the lower-cased text."""
        return [term for term in self.vocabulary.prohibited_terms if term in q]

    def _log_result(self, result: ClassificationResult) -> None:
        if isinstance(result, ApprovedResult):
            extras = ""
            if result.special_command:
                extras += f", special_command={result.special_command}"
            if result.note_analysis:
                extras += ", note_analysis=True"
            self.logger.info(
                f"Question APPROVED: domain={result.domain}, "
                f"confidence={result.confidence:.2f}{extras}"
            )
        elif isinstance(result, RejectedResult):
            self.logger.info(f"Question REJECTED: {result.reason}")
        else:
            self.logger.info(f"Question needs REFORMULATION: {result.reason}")

    def get_stats(self) -> Dict[str, Any]:
        """Vocabulary sizes, for the health / stats surface."""
        return {
            "domains_count": len(self.vocabulary.domains),
            "anatomical_regions": len(self.vocabulary.anatomical_regions),
            "prohibited_terms": len(self.vocabulary.prohibited_terms),
            "special_commands": len(self.vocabulary.special_commands),
        }
