# ============================================================================
# src/medical_router/vocabulary/models.py
# ============================================================================
"""
Medical Vocabulary

Immutable lookup tables consumed by the query classifier:
- Domain dictionary (ordered: declaration order is the tie-break order)
- Anatomical regions (bonus signal for the anatomy domain)
- Special-command trigger phrases (ordered: first matching command wins)
- Prohibited terms
- High-confidence medical terms

Built once at startup and shared read-only by every request.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..constants import SpecialCommand
from ..utils.exceptions import VocabularyError


DEFAULT_HIGH_CONFIDENCE_TERMS = (
    "anatomía", "fisiología", "farmacología", "patología", "diagnóstico",
    "tratamiento", "fármaco", "órgano", "enfermedad", "síntoma", "signo",
)


def _normalize_terms(terms: Iterable, where: str) -> Tuple[str, ...]:
    """Strip, lower-case and de-duplicate terms, keeping first-seen order."""
    if isinstance(terms, str) or not isinstance(terms, Iterable):
        raise VocabularyError(f"{where}: expected a list of strings", source=where)

    seen: List[str] = []
    for term in terms:
        if not isinstance(term, str):
            raise VocabularyError(f"{where}: non-string entry {term!r}", source=where)
        term = term.strip().lower()
        if not term:
            raise VocabularyError(f"{where}: empty entry", source=where)
        if term not in seen:
            seen.append(term)
    return tuple(seen)


@dataclass(frozen=True)
class MedicalVocabulary:
    domains: Tuple[Tuple[str, Tuple[str, ...]], ...]
    anatomical_regions: Tuple[str, ...]
    special_commands: Tuple[Tuple[SpecialCommand, Tuple[str, ...]], ...]
    prohibited_terms: Tuple[str, ...]
    high_confidence_terms: Tuple[str, ...] = DEFAULT_HIGH_CONFIDENCE_TERMS

    @classmethod
    def from_mappings(
        cls,
        domains: Mapping[str, Iterable[str]],
        anatomical_regions: Iterable[str] = (),
        special_commands: Optional[Mapping[Union[str, SpecialCommand], Iterable[str]]] = None,
        prohibited_terms: Iterable[str] = (),
        high_confidence_terms: Iterable[str] = DEFAULT_HIGH_CONFIDENCE_TERMS,
    ) -> "MedicalVocabulary":
        """
        Validate and freeze plain mappings/lists into a vocabulary.

        Mapping order is preserved for domains and commands. Domain names
        are kept as declared (stripped only); every term is lower-cased.

        Raises:
            VocabularyError: if any table is empty where it must not be,
                contains non-string or empty entries, or names an unknown
                special command.
        """
        if not isinstance(domains, Mapping) or not domains:
            raise VocabularyError("Domain dictionary is empty", source="keywords")

        frozen_domains = []
        for name, keywords in domains.items():
            if not isinstance(name, str) or not name.strip():
                raise VocabularyError(f"Invalid domain name {name!r}", source="keywords")
            normalized = _normalize_terms(keywords, f"keywords[{name}]")
            if not normalized:
                raise VocabularyError(f"Domain '{name}' has no keywords", source="keywords")
            frozen_domains.append((name.strip(), normalized))

        frozen_commands = []
        for raw_id, triggers in (special_commands or {}).items():
            try:
                command = SpecialCommand(raw_id)
            except ValueError:
                raise VocabularyError(
                    f"Unknown special command '{raw_id}'", source="special_commands"
                ) from None
            normalized = _normalize_terms(triggers, f"special_commands[{command.value}]")
            if not normalized:
                raise VocabularyError(
                    f"Special command '{command.value}' has no trigger phrases",
                    source="special_commands"
                )
            frozen_commands.append((command, normalized))

        missing = [c.value for c in SpecialCommand if c not in dict(frozen_commands)]
        if missing:
            raise VocabularyError(
                f"Missing special commands: {', '.join(missing)}", source="special_commands"
            )

        return cls(
            domains=tuple(frozen_domains),
            anatomical_regions=_normalize_terms(anatomical_regions, "anatomical_regions"),
            special_commands=tuple(frozen_commands),
            prohibited_terms=_normalize_terms(prohibited_terms, "prohibited_terms"),
            high_confidence_terms=_normalize_terms(high_confidence_terms, "high_confidence_terms"),
        )

    @property
    def domain_order(self) -> Tuple[str, ...]:
        """Domain names in declaration order (tie-break priority)."""
        return tuple(name for name, _ in self.domains)

    def to_dict(self) -> Dict[str, object]:
        """Plain-data form, same shape as the vocabulary file."""
        return {
            "keywords": {name: list(keywords) for name, keywords in self.domains},
            "anatomical_regions": list(self.anatomical_regions),
            "special_commands": {
                command.value: list(triggers) for command, triggers in self.special_commands
            },
            "prohibited_terms": list(self.prohibited_terms),
            "high_confidence_terms": list(self.high_confidence_terms),
        }
