"""
Word Replacement
Case-preserving, acronym-safe substitution of words and phrases in text.

The cheap ``needs_replacement`` check runs on raw text with a compiled
regular expression; ``replace_words`` runs the analyzer and is only invoked
once the check has passed.
"""

import re
import logging
from functools import lru_cache
from typing import Callable, Collection, Iterable, Optional, Pattern, Sequence

from text_analysis.base_analyzer import Analyzer, AnalyzerError
from text_analysis.spacy_analyzer import get_default_analyzer
from .verb_agreement import capitalize, fix_verb_number
from .vocabulary_tables import IrregularVerbTable, PatternError, get_irregular_verb_table

logger = logging.getLogger(__name__)

# Subjects whose replacement ("they") changes verb number.
SUBJECT_PRONOUNS = frozenset({'he', 'she', 'he or she'})

# Tag the analyzer gives possessive determiners ("her" in "her book").
POSSESSIVE_DETERMINER_TAG = 'PRP$'


@lru_cache(maxsize=64)
def _compile_candidates(candidates: tuple) -> Pattern:
    if not candidates or any(not isinstance(c, str) or not c.strip() for c in candidates):
        raise PatternError(f"Cannot build a matcher from candidates {candidates!r}")
    # Longest first so alternation prefers "he or she" over "he".
    alternatives = '|'.join(re.escape(c) for c in sorted(candidates, key=len, reverse=True))
    try:
        return re.compile(r'(?<!\w)(?:' + alternatives + r')(?!\w)', re.IGNORECASE)
    except re.error as e:
        raise PatternError(f"Cannot build a matcher from candidates: {e}") from e


def candidate_pattern(candidates: Iterable[str]) -> Pattern:
    """Compiled word-boundary, case-insensitive matcher for any of ``candidates``."""
    return _compile_candidates(tuple(candidates))


def needs_replacement(text: str, candidates: Iterable[str]) -> bool:
    """True iff ``text`` contains at least one candidate phrase on word boundaries."""
    if not text:
        return False
    return candidate_pattern(candidates).search(text) is not None


def replace_words(text: str,
                  words: Sequence[str],
                  substitute: Callable[..., str],
                  expand_contractions: bool = False,
                  analyzer: Optional[Analyzer] = None,
                  irregular_verbs: Optional[IrregularVerbTable] = None,
                  possessive_determiners: Collection[str] = ()) -> str:
    """
    Replace the words in given text using the given substitute function.
    Preserve title and lower case, ignoring ACRONYMS.
    An option is given to expand contractions.

    Args:
        text: Text to rewrite
        words: Candidate phrases, in matching order (compound phrases first)
        substitute: Called as ``substitute(word)`` with the capitalized and the
            lowercase candidate; for words in ``possessive_determiners`` it is
            also called as ``substitute(word, determiner=True)``
        expand_contractions: Write out "he's" as "he is" before matching
        analyzer: Analyzer backend (defaults to the spaCy analyzer)
        irregular_verbs: Irregular verb pairs for the agreement fixer
        possessive_determiners: Words whose determiner occurrences use the
            determiner form of the substitute

    Returns:
        The rewritten text, or ``text`` unchanged if it could not be analyzed.
    """
    analyzer = analyzer or get_default_analyzer()
    irregular_verbs = irregular_verbs if irregular_verbs is not None else get_irregular_verb_table()

    try:
        doc = analyzer.analyze(text)
        if expand_contractions:
            doc.expand_contractions()

        for word in words:
            if not doc.has(word):
                continue

            # Deal with verb number following (he|she) -> they.
            if word.lower() in SUBJECT_PRONOUNS:
                fix_verb_number(doc, word, irregular_verbs)

            # Replace matching words while preserving case.
            # Do not change acronyms.
            tc = substitute(capitalize(word))
            lc = substitute(word.lower())
            if word in possessive_determiners:
                determiner_tc = substitute(capitalize(word), determiner=True)
                determiner_lc = substitute(word.lower(), determiner=True)
            else:
                determiner_tc, determiner_lc = tc, lc

            replacements = []
            for match in doc.match(word):
                if doc.is_acronym(match):
                    continue
                is_determiner = doc.token_tag(match) == POSSESSIVE_DETERMINER_TAG
                if match.text[:1].isupper():
                    replacements.append((match, determiner_tc if is_determiner else tc))
                else:
                    replacements.append((match, determiner_lc if is_determiner else lc))
            doc.replace_matches(replacements)

        return doc.render()

    except AnalyzerError as e:
        logger.warning(f"Leaving text unchanged, analysis failed: {e}")
        return text
