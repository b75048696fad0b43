# ============================================================================
# src/medical_router/classifiers/domain_scorer.py
# ============================================================================
"""
Domain scoring and content analysis

Scores every domain by how many of its keywords appear in the lower-cased
question, adds anatomical-region matches as a bonus to the anatomy domain,
and gathers the auxiliary signals the approval rules use:

- anatomical_terms:      anatomical regions contained in the text
- strong_medical_terms:  high-confidence terms contained in the text
- has_medical_context:   interrogative / explanatory medical phrasing
- detected_keywords:     matched keywords (echoed back in suggestions only)

Best domain: highest score; ties go to the domain declared first.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import re

from ..constants import ANATOMY_DOMAIN, GENERAL_MEDICINE_DOMAIN
from ..vocabulary import MedicalVocabulary
from .patterns import FollowedBy


MEDICAL_CONTEXT_PATTERNS = (
    # Interrogatives: "qué es", "cómo funciona", "dónde se ubica"...
    FollowedBy(
        r"\b(?:qué|que|cual|cuales|cuál|cuáles|como|cómo|donde|dónde|por qué|porque)\b",
        r"\b(?:es|son|funciona|se|tiene)\b",
    ),
    re.compile(r"\b(?:explique|explica|describe|detalla|diferencias?|comparación)\b"),
    re.compile(r"\b(?:mecanismo|proceso|función|estructura|ubicación)\b"),
    re.compile(r"\b(?:causas|síntomas|signos|diagnóstico|tratamiento)\b"),
)


@dataclass(frozen=True)
class ContentAnalysis:
    domain_scores: Dict[str, int] = field(default_factory=dict)
    detected_keywords: Tuple[str, ...] = ()
    anatomical_terms: int = 0
    strong_medical_terms: int = 0
    total_keywords: int = 0
    best_domain: str = GENERAL_MEDICINE_DOMAIN
    has_medical_context: bool = False


class DomainScorer:
    """
    Keyword-based domain scorer over a MedicalVocabulary.

    Args:
        vocabulary: Frozen vocabulary tables
        short_keyword_max_length: Keywords this short only count when they
            appear between spaces or at the start of the text
        max_detected_keywords: Cap on keywords echoed back in suggestions
    """

    def __init__(
        self,
        vocabulary: MedicalVocabulary,
        short_keyword_max_length: int = 3,
        max_detected_keywords: int = 8
    ):
        self.vocabulary = vocabulary
        self.short_keyword_max_length = short_keyword_max_length
        self.max_detected_keywords = max_detected_keywords

        # Explicit tie-break order. The anatomy bonus can create an entry for
        # a domain the dictionary does not declare; it then ranks last.
        priority = list(vocabulary.domain_order)
        if ANATOMY_DOMAIN not in priority:
            priority.append(ANATOMY_DOMAIN)
        self.domain_priority: Tuple[str, ...] = tuple(priority)

    def keyword_matches(self, q: str, keyword: str) -> bool:
        """Substring match with a guard against short keywords inside other words."""
        if keyword not in q:
            return False
        return (
            len(keyword) > self.short_keyword_max_length
            or f" {keyword} " in q
            or q.startswith(keyword)
        )

    def score(self, q: str) -> Dict[str, int]:
        """
        Keyword score per domain. Domains without matches are omitted.

        Args:
            q: Lower-cased question text

        Returns:
            {domain: matched keyword count}, in tie-break order
        """
        scores: Dict[str, int] = {}
        for domain, keywords in self.vocabulary.domains:
            matches = sum(1 for kw in keywords if self.keyword_matches(q, kw))
            if matches > 0:
                scores[domain] = matches

        anatomical_matches = self.count_anatomical_terms(q)
        if anatomical_matches > 0:
            scores[ANATOMY_DOMAIN] = scores.get(ANATOMY_DOMAIN, 0) + anatomical_matches

        return {d: scores[d] for d in self.domain_priority if d in scores}

    def best_domain(
        self,
        scores: Dict[str, int],
        default: str = GENERAL_MEDICINE_DOMAIN
    ) -> str:
        """Highest-scoring domain; the earlier-declared domain wins ties."""
        best: Optional[str] = None
        for domain in self.domain_priority:
            if domain not in scores:
                continue
            if best is None or scores[domain] > scores[best]:
                best = domain
        return best if best is not None else default

    def count_anatomical_terms(self, q: str) -> int:
        return sum(1 for term in self.vocabulary.anatomical_regions if term in q)

    def find_anatomical_term(self, q: str) -> Optional[str]:
        """First anatomical region (vocabulary order) contained in the text."""
        for term in self.vocabulary.anatomical_regions:
            if term in q:
                return term
        return None

    def count_strong_terms(self, q: str) -> int:
        return sum(1 for term in self.vocabulary.high_confidence_terms if term in q)

    @staticmethod
    def has_medical_context(q: str) -> bool:
        return any(pattern.search(q) for pattern in MEDICAL_CONTEXT_PATTERNS)

    def detected_keywords(self, q: str) -> Tuple[str, ...]:
        """Distinct keywords contained in the text, across all domains, capped."""
        detected: List[str] = []
        for _, keywords in self.vocabulary.domains:
            for kw in keywords:
                if kw in q and kw not in detected:
                    detected.append(kw)
        return tuple(detected[:self.max_detected_keywords])

    def analyze(self, q: str) -> ContentAnalysis:
        """Run the scorer and collect every auxiliary signal."""
        scores = self.score(q)
        return ContentAnalysis(
            domain_scores=scores,
            detected_keywords=self.detected_keywords(q),
            anatomical_terms=self.count_anatomical_terms(q),
            strong_medical_terms=self.count_strong_terms(q),
            total_keywords=sum(scores.values()),
            best_domain=self.best_domain(scores),
            has_medical_context=self.has_medical_context(q),
        )
