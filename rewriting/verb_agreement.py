"""
Verb Agreement
Keeps verbs in number agreement when a singular subject pronoun is replaced
by plural "they".

Spelling rules for third-person singular verbs follow
https://www.really-learn-english.com/spelling-rules-add-s-verb.html
"""

import logging
from typing import Dict, Optional, Set, Tuple

from text_analysis.base_analyzer import AnalyzedDocument, Match
from .vocabulary_tables import IrregularVerbTable

logger = logging.getLogger(__name__)

VerbPair = Tuple[str, str]

# Parts of speech that can never be the verb governed by the subject.
_NON_VERB_POS = frozenset({
    'ADJ', 'ADP', 'ADV', 'CCONJ', 'DET', 'INTJ', 'NUM', 'PART',
    'PRON', 'PROPN', 'PUNCT', 'SCONJ', 'SPACE', 'SYM', 'X',
})

# Stems that take "-es" in the third person singular ("goes", "squashes").
_ES_STEM_ENDINGS = ('o', 's', 'ch', 'sh', 'x', 'z')


def capitalize(word: str) -> str:
    """Capitalize the first letter of the given string."""
    return word[:1].upper() + word[1:]


def _match_first_letter(replacement: str, original: str) -> str:
    return capitalize(replacement) if original[:1].isupper() else replacement


def plural_verb_form(verb: str) -> Optional[VerbPair]:
    """
    Regular singular -> plural rewrite of a present-tense verb.

    Rules are tried in order: "-ies" -> "-y", "-es" after o/s/ch/sh/x/z,
    then a plain trailing "s". Returns None for verbs that end in none of them.
    """
    lower = verb.lower()
    if lower.endswith('ies'):
        return verb, verb[:-3] + ('Y' if verb[-3:].isupper() else 'y')
    if lower.endswith('es') and lower[:-2].endswith(_ES_STEM_ENDINGS):
        return verb, verb[:-2]
    if lower.endswith('s'):
        return verb, verb[:-1]
    return None


def fix_verb_number(doc: AnalyzedDocument, subject: str,
                    irregular_verbs: IrregularVerbTable) -> int:
    """
    Rewrite verbs governed by ``subject`` so they agree with a plural pronoun.

    Must run before the subject itself is replaced: matching is keyed on the
    original subject text. Mutates ``doc`` and returns the number of verbs changed.
    """
    replacements: Dict[int, Tuple[int, int, str]] = {}
    claimed: Set[int] = set()

    for match in doc.match(subject):
        if doc.is_acronym(match):
            continue
        # Question form, e.g. "Does she smoke?" must start with an irregular verb
        _fix_question_form(doc, match, irregular_verbs, replacements, claimed)
        # Statement form, e.g. "Yes, she smokes." or "No, she does not smoke."
        _fix_statement_form(doc, match, irregular_verbs, replacements, claimed)

    if replacements:
        logger.debug(f"Fixing {len(replacements)} verb(s) after subject '{subject}'")
    return doc.replace_spans(replacements.values())


def _claim(match: Match, new_text: str,
           replacements: Dict[int, Tuple[int, int, str]], claimed: Set[int]) -> bool:
    span = set(range(match.start, match.end))
    if span & claimed:
        return False
    claimed.update(span)
    replacements[match.start] = (match.start_char, match.end_char, new_text)
    return True


def _fix_question_form(doc, subject_match, irregular_verbs, replacements, claimed) -> None:
    for singular, plural in irregular_verbs:
        words = singular.split()
        start = subject_match.start
        for _ in words:
            start = doc.previous_content_index(start) if start is not None else None
        if start is None:
            continue
        verb = doc.words_at(start, words)
        if verb and verb.end <= subject_match.start:
            _claim(verb, _match_first_letter(plural, verb.text), replacements, claimed)
            return


def _fix_statement_form(doc, subject_match, irregular_verbs, replacements, claimed) -> None:
    index = doc.next_content_index(subject_match.end - 1)
    if index is None:
        return
    # What comes before a verb in a statement: the subject and an optional adverb
    if doc.tokens[index].pos == 'ADV':
        index = doc.next_content_index(index)
        if index is None:
            return

    for singular, plural in irregular_verbs:
        verb = doc.words_at(index, singular.split())
        if verb:
            _claim(verb, _match_first_letter(plural, verb.text), replacements, claimed)
            return

    token = doc.tokens[index]
    if token.pos in _NON_VERB_POS or not token.text.isalpha():
        return
    pair = plural_verb_form(token.text)
    if pair:
        verb = doc.words_at(index, [token.lower])
        _claim(verb, pair[1], replacements, claimed)
