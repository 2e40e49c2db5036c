"""
Text Analysis Package

Tokenizer/analyzer capability consumed by the rewriting engine, with a spaCy backend.
"""

from .base_analyzer import Analyzer, AnalyzedDocument, AnalyzerError, Match, TokenInfo, looks_like_acronym
from .spacy_analyzer import SpacyAnalyzer, get_default_analyzer

__all__ = [
    'Analyzer',
    'AnalyzedDocument',
    'AnalyzerError',
    'Match',
    'TokenInfo',
    'looks_like_acronym',
    'SpacyAnalyzer',
    'get_default_analyzer',
]
