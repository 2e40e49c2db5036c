"""
Status values reported for a page after a rewriting pass.
"""

from enum import Enum


class Status(str, Enum):
    """Outcome of the classification state machine, in priority order."""
    EXCLUDED_DOMAIN = 'excludedDomain'
    PRONOUN_SPECS = 'pronounSpecs'
    MENTIONS_GENDER = 'mentionsGender'
    REPLACED_PRONOUNS = 'replacedPronouns'
    NO_GENDERED_PRONOUNS = 'noGenderedPronouns'
    RESTORED_ORIGINAL = 'restoredOriginal'
