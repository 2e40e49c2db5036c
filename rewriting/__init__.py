"""
Rewriting Package

Gender-neutral rewriting engine: vocabulary tables, word replacement,
verb agreement, pronoun replacement and gender highlighting.
"""

from .status import Status
from .vocabulary_tables import (
    PatternError, PronounTable, IrregularVerbTable, get_pronoun_table, get_irregular_verb_table
)
from .verb_agreement import capitalize, fix_verb_number, plural_verb_form
from .word_replacement import needs_replacement, replace_words
from .pronoun_replacement import PronounReplacer, get_pronoun_replacer, has_replaceable_pronouns, replace_pronouns
from .gender_highlights import GenderHighlighter, get_gender_highlighter
from .excluded_domains import DomainExclusions, get_domain_exclusions
