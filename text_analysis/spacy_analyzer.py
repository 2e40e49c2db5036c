"""
SpaCy Analyzer Module
spaCy backend for the analyzer capability: tokenization, part-of-speech tags,
acronym tagging and contraction expansion.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from config import Config
from .base_analyzer import Analyzer, AnalyzedDocument, AnalyzerError, TokenInfo, looks_like_acronym

try:
    import spacy
    SPACY_AVAILABLE = True
except ImportError:
    spacy = None
    SPACY_AVAILABLE = False

logger = logging.getLogger(__name__)

# Suffix token -> written-out form. "'s" and "'d" are resolved from context.
_CONTRACTION_SUFFIXES = {
    "n't": 'not',
    "'re": 'are',
    "'ve": 'have',
    "'m": 'am',
    "'ll": 'will',
}

# Stems spaCy splits off negative contractions ("can't" -> "ca" + "n't").
_NEGATION_STEMS = {
    'ca': 'can',
    'wo': 'will',
    'sha': 'shall',
}

# Pipes that set part-of-speech tags; agreement and determiner rules need them.
_TAGGING_PIPES = ('tagger', 'morphologizer')


@lru_cache(maxsize=4)
def _load_spacy_model(model_name: str):
    """Load a spaCy pipeline once. Returns None when spaCy or the model is missing."""
    if not SPACY_AVAILABLE:
        logger.warning("SpaCy not installed, text will be left unchanged")
        return None
    try:
        nlp = spacy.load(model_name)
        logger.info(f"SpaCy model '{model_name}' loaded successfully")
    except OSError:
        logger.warning(f"SpaCy model '{model_name}' not found, text will be left unchanged")
        nlp = None
    return nlp


def _has_tagger(nlp) -> bool:
    return any(name in nlp.pipe_names for name in _TAGGING_PIPES)


class SpacyAnalyzer(Analyzer):
    """Analyzer backed by a spaCy pipeline."""

    def __init__(self, nlp=None, model_name: Optional[str] = None):
        self._nlp = nlp
        self.model_name = model_name or Config.SPACY_MODEL

    @property
    def nlp(self):
        if self._nlp is None:
            self._nlp = _load_spacy_model(self.model_name)
        return self._nlp

    def tokenize(self, text: str) -> List[TokenInfo]:
        nlp = self.nlp
        if nlp is None:
            raise AnalyzerError(f"SpaCy model '{self.model_name}' is not available")
        if not _has_tagger(nlp):
            raise AnalyzerError("SpaCy pipeline has no part-of-speech tagger")
        return [
            TokenInfo(
                text=token.text,
                idx=token.idx,
                pos=token.pos_,
                tag=token.tag_,
                whitespace=token.whitespace_,
                is_acronym=looks_like_acronym(token.text)
            )
            for token in nlp(text)
        ]

    def expand_contractions(self, doc: AnalyzedDocument) -> str:
        spacy_doc = self.nlp(doc.text)
        pieces = [[token.text, token.whitespace_] for token in spacy_doc]

        for token in spacy_doc:
            if token.i == 0:
                continue
            prev = spacy_doc[token.i - 1]
            if prev.whitespace_ or prev.idx + len(prev.text) != token.idx:
                continue

            expansion = self._expansion_for(token, prev)
            if expansion is None:
                continue

            surface = prev.text + token.text
            if surface.isupper():
                expansion = expansion.upper()

            stem = _NEGATION_STEMS.get(prev.lower_) if token.lower_ in ("n't", "n’t") else None
            if stem:
                pieces[prev.i][0] = _match_case(stem, prev.text)
            pieces[prev.i][1] = ' '
            pieces[token.i][0] = expansion

        return ''.join(text + whitespace for text, whitespace in pieces)

    def _expansion_for(self, token, prev) -> Optional[str]:
        suffix = token.lower_.replace('’', "'")
        if suffix in _CONTRACTION_SUFFIXES:
            return _CONTRACTION_SUFFIXES[suffix]
        if suffix == "'s":
            return self._resolve_apostrophe_s(token, prev)
        if suffix == "'d":
            return self._resolve_apostrophe_d(token)
        return None

    @staticmethod
    def _resolve_apostrophe_s(token, prev) -> Optional[str]:
        # Possessive marker, e.g. "dog's"
        if token.tag_ == 'POS':
            return None
        if prev.lower_ == 'let':
            return 'us'
        if token.lemma_.lower() == 'have':
            return 'has'
        following = token.nbor(1) if token.i + 1 < len(token.doc) else None
        if following is not None and following.lower_ in ('been', 'got'):
            return 'has'
        return 'is'

    @staticmethod
    def _resolve_apostrophe_d(token) -> str:
        following = token.nbor(1) if token.i + 1 < len(token.doc) else None
        if following is not None and (following.tag_ in ('VBN', 'VBD') or following.lower_ in ('been', 'better')):
            return 'had'
        return 'would'


def _match_case(word: str, model: str) -> str:
    if model.isupper():
        return word.upper()
    if model[:1].isupper():
        return word[0].upper() + word[1:]
    return word


@lru_cache(maxsize=1)
def get_default_analyzer() -> SpacyAnalyzer:
    """Process-wide analyzer using the configured spaCy model."""
    return SpacyAnalyzer()
