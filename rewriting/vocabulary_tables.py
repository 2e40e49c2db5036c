"""
Vocabulary Tables
Ordered, validated, read-only tables consumed by the rewriting engine.

Both tables are built once from YAML vocabularies and passed explicitly into
the engine. Ordering is part of their contract and is checked at construction:

- PronounTable: multi-word phrases before single words, so "he or she" is
  matched before "he" can shadow it.
- IrregularVerbTable: longer forms before their prefixes, so "is not" is
  matched before "is".
"""

import re
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .services.vocabulary_service import get_vocabulary_service

logger = logging.getLogger(__name__)

_PHRASE_PATTERN = re.compile(r'^[a-z]+(?: [a-z]+)*$')


class PatternError(ValueError):
    """A candidate phrase or table ordering cannot be turned into a matcher."""


def _check_phrase(phrase: str, table_name: str) -> str:
    if not isinstance(phrase, str) or not _PHRASE_PATTERN.match(phrase):
        raise PatternError(f"{table_name}: invalid phrase {phrase!r}")
    return phrase


class PronounTable(Mapping):
    """
    Ordered mapping from gendered phrase to its gender-neutral replacement.

    Invariants:
    - every compound (multi-word) phrase precedes every single word
    - no phrase appears among the replacements, so rewriting is idempotent
    """

    def __init__(self, entries: Sequence[Tuple[str, str]],
                 determiner_forms: Optional[Dict[str, str]] = None):
        ordered: Dict[str, str] = {}
        seen_single_word = False
        for phrase, replacement in entries:
            phrase = _check_phrase(phrase, 'PronounTable')
            if phrase in ordered:
                raise PatternError(f"PronounTable: duplicate phrase {phrase!r}")
            is_compound = ' ' in phrase
            if is_compound and seen_single_word:
                raise PatternError(
                    f"PronounTable: compound phrase {phrase!r} must come before single words"
                )
            seen_single_word = seen_single_word or not is_compound
            ordered[phrase] = replacement

        determiners = dict(determiner_forms or {})
        for word in determiners:
            if word not in ordered:
                raise PatternError(f"PronounTable: determiner form for unknown word {word!r}")

        replacements = {value.lower() for value in list(ordered.values()) + list(determiners.values())}
        for phrase in ordered:
            if phrase in replacements:
                raise PatternError(f"PronounTable: {phrase!r} is also a replacement")

        self._entries = MappingProxyType(ordered)
        self._determiners = MappingProxyType(determiners)

    @classmethod
    def from_vocabulary(cls, data: Dict) -> 'PronounTable':
        """Build from the pronouns.yaml structure (compound section first)."""
        entries = list((data.get('compound_pronouns') or {}).items())
        entries += list((data.get('gender_pronouns') or {}).items())
        if not entries:
            raise PatternError("PronounTable: vocabulary has no pronouns")
        return cls(entries, data.get('determiner_forms') or {})

    def __getitem__(self, phrase: str) -> str:
        return self._entries[phrase]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def words(self) -> Tuple[str, ...]:
        """Candidate phrases in matching order."""
        return tuple(self._entries)

    @property
    def determiner_forms(self) -> Mapping:
        return self._determiners

    def replacement_for(self, phrase: str, determiner: bool = False) -> str:
        phrase = phrase.lower()
        if determiner and phrase in self._determiners:
            return self._determiners[phrase]
        return self._entries[phrase]


class IrregularVerbTable:
    """
    Ordered (singular, plural) pairs for verbs that do not follow spelling rules.

    A form that is a word-prefix of another form ("is" of "is not") must come after it.
    """

    def __init__(self, pairs: Sequence[Tuple[str, str]]):
        checked: List[Tuple[str, str]] = []
        for pair in pairs:
            if len(pair) != 2:
                raise PatternError(f"IrregularVerbTable: expected a pair, got {pair!r}")
            singular = _check_phrase(pair[0], 'IrregularVerbTable')
            plural = _check_phrase(pair[1], 'IrregularVerbTable')
            words = singular.split()
            for earlier, _ in checked:
                earlier_words = earlier.split()
                if words[:len(earlier_words)] == earlier_words:
                    raise PatternError(
                        f"IrregularVerbTable: {singular!r} must come before {earlier!r}"
                    )
            checked.append((singular, plural))
        self._pairs = tuple(checked)

    @classmethod
    def from_vocabulary(cls, data: Dict) -> 'IrregularVerbTable':
        pairs = [tuple(pair) for pair in data.get('irregular_verbs') or []]
        if not pairs:
            raise PatternError("IrregularVerbTable: vocabulary has no irregular verbs")
        return cls(pairs)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    @property
    def pairs(self) -> Tuple[Tuple[str, str], ...]:
        return self._pairs


# === PROCESS-WIDE TABLES ===

_pronoun_table: Optional[PronounTable] = None
_irregular_verb_table: Optional[IrregularVerbTable] = None


def initialize_tables(vocabulary=None) -> Tuple[PronounTable, IrregularVerbTable]:
    """
    Build and validate both tables and make them the process-wide tables.

    Called at application startup so a missing, empty or malformed
    vocabulary stops the service before it accepts pages.

    Raises:
        PatternError: if either vocabulary is empty or violates table invariants
    """
    global _pronoun_table, _irregular_verb_table
    vocabulary = vocabulary or get_vocabulary_service()
    pronoun_table = PronounTable.from_vocabulary(vocabulary.get_pronouns())
    irregular_verbs = IrregularVerbTable.from_vocabulary(vocabulary.get_irregular_verbs())
    _pronoun_table, _irregular_verb_table = pronoun_table, irregular_verbs
    logger.info(f"Vocabulary tables ready: {len(pronoun_table)} pronoun phrases, "
                f"{len(irregular_verbs)} irregular verbs")
    return pronoun_table, irregular_verbs


def get_pronoun_table() -> PronounTable:
    """Get the pronoun table built from pronouns.yaml."""
    if _pronoun_table is None:
        initialize_tables()
    return _pronoun_table


def get_irregular_verb_table() -> IrregularVerbTable:
    """Get the irregular verb table built from irregular_verbs.yaml."""
    if _irregular_verb_table is None:
        initialize_tables()
    return _irregular_verb_table
