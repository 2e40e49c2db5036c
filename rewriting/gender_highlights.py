"""
Gender Highlights
Detects explicit personal pronoun specifications ("pronouns: she/her") and
gendered mentions ("mother", "boys"), and highlights them instead of rewriting.

Shares the candidate matcher with the pronoun pre-check; there is no
grammatical analysis here.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from .pronoun_replacement import MARKER_CLASS
from .services.vocabulary_service import get_vocabulary_service
from .word_replacement import candidate_pattern, needs_replacement

logger = logging.getLogger(__name__)


def highlight_words(text: str, words: Iterable[str]) -> str:
    """Wrap every occurrence of ``words`` in a hidden highlight marker."""
    words = tuple(words)
    if not words or not text:
        return text
    return candidate_pattern(words).sub(
        lambda m: f'<span class="{MARKER_CLASS} hide">{m.group(0)}</span>',
        text
    )


class GenderHighlighter:
    """Pronoun specification and gendered mention checks over text."""

    def __init__(self, pronoun_specs: Optional[Sequence[str]] = None,
                 gendered_terms: Optional[Sequence[str]] = None):
        if pronoun_specs is None or gendered_terms is None:
            vocabulary = get_vocabulary_service().get_gender_terms()
            if pronoun_specs is None:
                pronoun_specs = vocabulary.get('pronoun_specs') or []
            if gendered_terms is None:
                gendered_terms = vocabulary.get('gendered_terms') or []
        self.pronoun_specs: List[str] = [str(spec).lower() for spec in pronoun_specs]
        self.gendered_terms: List[str] = [str(term).lower() for term in gendered_terms]

    # === PRONOUN SPECIFICATIONS ===

    def has_personal_pronoun_spec(self, text: str) -> bool:
        return bool(self.pronoun_specs) and needs_replacement(text, self.pronoun_specs)

    def highlight_personal_pronoun_specs(self, text: str) -> str:
        return highlight_words(text, self.pronoun_specs)

    # === GENDERED MENTIONS ===

    def mentions_gender(self, text: str) -> bool:
        return bool(self.gendered_terms) and needs_replacement(text, self.gendered_terms)

    def visibly_mentions_gender(self, visible_texts: Iterable[str]) -> bool:
        """Like ``mentions_gender`` but over rendered text segments, not markup."""
        return any(self.mentions_gender(text) for text in visible_texts)

    def highlight_gender(self, text: str) -> str:
        return highlight_words(text, self.gendered_terms)


_gender_highlighter: Optional[GenderHighlighter] = None


def get_gender_highlighter() -> GenderHighlighter:
    """Get the process-wide gender highlighter."""
    global _gender_highlighter
    if _gender_highlighter is None:
        _gender_highlighter = GenderHighlighter()
    return _gender_highlighter
