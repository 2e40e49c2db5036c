"""
Pronoun Replacement
Gender-neutral pronoun substitution built on the word replacement engine.
"""

import html
import logging
from typing import Optional

from config import Config
from text_analysis.base_analyzer import Analyzer
from .vocabulary_tables import (
    IrregularVerbTable, PronounTable, get_irregular_verb_table, get_pronoun_table
)
from .word_replacement import needs_replacement, replace_words

logger = logging.getLogger(__name__)

# Class shared by every change/highlight marker; toggled between "show" and "hide".
MARKER_CLASS = 'dgtw'


class PronounReplacer:
    """
    Replaces gendered pronouns with "they" forms.

    Tables and analyzer are passed in once and reused for every segment.
    """

    def __init__(self,
                 pronoun_table: Optional[PronounTable] = None,
                 irregular_verbs: Optional[IrregularVerbTable] = None,
                 analyzer: Optional[Analyzer] = None,
                 expand_contractions: Optional[bool] = None):
        self.pronoun_table = pronoun_table if pronoun_table is not None else get_pronoun_table()
        self.irregular_verbs = irregular_verbs if irregular_verbs is not None else get_irregular_verb_table()
        self.analyzer = analyzer
        self.expand_contractions = (
            Config.EXPAND_CONTRACTIONS if expand_contractions is None else expand_contractions
        )

    def has_replaceable_pronouns(self, text: str) -> bool:
        words = self.pronoun_table.words()
        return bool(words) and needs_replacement(text, words)

    def substitute(self, word: str, determiner: bool = False) -> str:
        """Gender-neutral replacement for ``word``, capitalized like ``word``."""
        replacement = self.pronoun_table.replacement_for(word, determiner=determiner)
        return replacement[:1].upper() + replacement[1:] if word[:1].isupper() else replacement

    def replace_pronouns(self, text: str, markup: bool = False) -> str:
        """
        Rewrite gendered pronouns in ``text``.

        With ``markup`` the text is treated as HTML-escaped segment content and
        each replacement is wrapped in a hidden change marker.
        """
        substitute = self._marked_substitute if markup else self.substitute
        return replace_words(
            text,
            self.pronoun_table.words(),
            substitute,
            expand_contractions=self.expand_contractions,
            analyzer=self.analyzer,
            irregular_verbs=self.irregular_verbs,
            possessive_determiners=tuple(self.pronoun_table.determiner_forms)
        )

    def _marked_substitute(self, word: str, determiner: bool = False) -> str:
        # The marker must not repeat the original word: later candidates are
        # matched against the partially rewritten text, markup included.
        replacement = self.substitute(word, determiner=determiner)
        return f'<span class="{MARKER_CLASS} hide">{html.escape(replacement)}</span>'


_pronoun_replacer: Optional[PronounReplacer] = None


def get_pronoun_replacer() -> PronounReplacer:
    """Get the process-wide pronoun replacer."""
    global _pronoun_replacer
    if _pronoun_replacer is None:
        _pronoun_replacer = PronounReplacer()
    return _pronoun_replacer


def has_replaceable_pronouns(text: str) -> bool:
    return get_pronoun_replacer().has_replaceable_pronouns(text)


def replace_pronouns(text: str, markup: bool = False) -> str:
    return get_pronoun_replacer().replace_pronouns(text, markup=markup)
