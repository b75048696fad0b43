#!/usr/bin/env python3
"""
Vocabulary Validation and Audit Script

Validates the classifier vocabulary files (dominios.json, prohibidos.json) for:
1. Loadability (structure, empty domains, unknown or missing commands)
2. Keywords shared across domains
3. Short keywords that only match as whole words
4. Trigger phrases shared by, or nested inside, other commands
5. Prohibited terms that would also fire on medical vocabulary

Usage:
    python scripts/validate_vocabulary.py
    python scripts/validate_vocabulary.py --path ./my_vocabulary
    python scripts/validate_vocabulary.py --classify "qué es la insulina"
"""

import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from collections import defaultdict
import argparse

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from medical_router.classifiers import QueryClassifier
from medical_router.config import threshold_settings
from medical_router.utils.exceptions import VocabularyError
from medical_router.vocabulary import MedicalVocabulary, load_vocabulary


class VocabularyValidator:
    """Audits a classifier vocabulary."""

    def __init__(self, vocabulary_dir: Optional[Path] = None, verbose: bool = False):
        self.vocabulary_dir = vocabulary_dir
        self.verbose = verbose
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.info: List[str] = []

    def validate_all(self) -> Tuple[int, int, int]:
        """
        Validate the vocabulary.

        Returns:
            Tuple of (error_count, warning_count, info_count)
        """
        print(f"\n{'='*60}")
        print(f"Vocabulary Validation Report")
        print(f"{'='*60}")
        print(f"Vocabulary directory: {self.vocabulary_dir or 'packaged default'}")
        print(f"{'='*60}\n")

        try:
            vocabulary = load_vocabulary(self.vocabulary_dir)
        except VocabularyError as e:
            self.errors.append(f"{e.source or 'vocabulary'}: {e}")
            self._print_summary()
            return len(self.errors), len(self.warnings), len(self.info)

        print(f"  Domains:            {len(vocabulary.domains)}")
        print(f"  Keywords:           {sum(len(kws) for _, kws in vocabulary.domains)}")
        print(f"  Anatomical regions: {len(vocabulary.anatomical_regions)}")
        print(f"  Special commands:   {len(vocabulary.special_commands)}")
        print(f"  Prohibited terms:   {len(vocabulary.prohibited_terms)}")

        self._check_shared_keywords(vocabulary)
        self._check_short_keywords(vocabulary)
        self._check_triggers(vocabulary)
        self._check_prohibited_overlap(vocabulary)

        self._print_summary()

        return len(self.errors), len(self.warnings), len(self.info)

    def _check_shared_keywords(self, vocabulary: MedicalVocabulary):
        """Keywords listed under more than one domain."""
        print(f"\n--- Cross-Domain Keyword Check ---")
        owners: Dict[str, List[str]] = defaultdict(list)
        for domain, keywords in vocabulary.domains:
            for kw in keywords:
                owners[kw].append(domain)

        shared = {kw: domains for kw, domains in owners.items() if len(domains) > 1}
        if shared:
            self.info.append(f"{len(shared)} keywords shared across domains")
            print(f"  INFO: {len(shared)} keywords shared across domains")
            if self.verbose:
                for kw, domains in sorted(shared.items()):
                    print(f"    '{kw}' used in: {', '.join(domains)}")
        else:
            print(f"  OK: No shared keywords found")

    def _check_short_keywords(self, vocabulary: MedicalVocabulary):
        """Keywords short enough to need the whole-word guard."""
        print(f"\n--- Short Keyword Check ---")
        limit = threshold_settings.SHORT_KEYWORD_MAX_LENGTH
        short = [
            f"{domain}:{kw}"
            for domain, keywords in vocabulary.domains
            for kw in keywords
            if len(kw) <= limit
        ]
        if short:
            self.info.append(f"{len(short)} keywords of {limit} characters or fewer")
            print(f"  INFO: {len(short)} keywords only match as whole words: {short[:5]}")
        else:
            print(f"  OK: No short keywords")

    def _check_triggers(self, vocabulary: MedicalVocabulary):
        """Trigger phrases that collide across commands."""
        print(f"\n--- Special Command Trigger Check ---")
        found = False
        for i, (command, triggers) in enumerate(vocabulary.special_commands):
            for other_command, other_triggers in vocabulary.special_commands[i + 1:]:
                for trigger in triggers:
                    for other in other_triggers:
                        if trigger == other:
                            self.errors.append(
                                f"Trigger '{trigger}' is declared by both "
                                f"{command.value} and {other_command.value}"
                            )
                            found = True
                        elif trigger in other or other in trigger:
                            self.warnings.append(
                                f"Trigger '{trigger}' ({command.value}) overlaps "
                                f"'{other}' ({other_command.value})"
                            )
                            found = True
        if not found:
            print(f"  OK: No overlapping triggers")

    def _check_prohibited_overlap(self, vocabulary: MedicalVocabulary):
        """Prohibited terms contained in medical keywords or anatomical regions."""
        print(f"\n--- Prohibited Term Check ---")
        medical_terms = {kw for _, keywords in vocabulary.domains for kw in keywords}
        medical_terms.update(vocabulary.anatomical_regions)

        collisions = [
            f"'{term}' inside '{medical}'"
            for term in vocabulary.prohibited_terms
            for medical in sorted(medical_terms)
            if term in medical
        ]
        if collisions:
            for collision in collisions:
                self.warnings.append(f"Prohibited term {collision}")
            print(f"  WARNING: {len(collisions)} prohibited terms collide with medical vocabulary")
        else:
            print(f"  OK: No prohibited term collides with medical vocabulary")

    def _print_summary(self):
        """Print validation summary."""
        print(f"\n{'='*60}")
        print(f"SUMMARY")
        print(f"{'='*60}")
        print(f"Errors:   {len(self.errors)}")
        print(f"Warnings: {len(self.warnings)}")
        print(f"Info:     {len(self.info)}")

        if self.errors:
            print(f"\nERRORS (must fix):")
            for error in self.errors:
                print(f"  - {error}")

        if self.warnings:
            print(f"\nWARNINGS (should fix):")
            for warning in self.warnings[:10]:
                print(f"  - {warning}")
            if len(self.warnings) > 10:
                print(f"  ... and {len(self.warnings) - 10} more")

        print(f"{'='*60}\n")


def main():
    parser = argparse.ArgumentParser(description="Validate classifier vocabulary files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed info")
    parser.add_argument("--path", type=str, help="Custom vocabulary directory")
    parser.add_argument("--classify", type=str, help="Classify a question with this vocabulary")
    args = parser.parse_args()

    vocabulary_dir = Path(args.path) if args.path else None
    if vocabulary_dir is not None and not vocabulary_dir.exists():
        print(f"ERROR: Vocabulary directory not found: {vocabulary_dir}")
        sys.exit(1)

    if args.classify:
        classifier = QueryClassifier(load_vocabulary(vocabulary_dir))
        result = classifier.classify(args.classify)
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        sys.exit(0)

    validator = VocabularyValidator(vocabulary_dir, verbose=args.verbose)
    errors, warnings, info = validator.validate_all()

    if errors > 0:
        sys.exit(1)
    elif warnings > 0:
        sys.exit(0)  # Warnings don't fail the validation
    else:
        print("Vocabulary is valid!")
        sys.exit(0)


if __name__ == "__main__":
    main()
