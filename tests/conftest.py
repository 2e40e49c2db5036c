"""
Shared test fixtures.

LexiconAnalyzer is a small deterministic analyzer backend: part-of-speech
tags come from a fixed word list, so engine and agreement tests do not
depend on a statistical tagger's choices.
"""

import re
import pytest

from text_analysis.base_analyzer import Analyzer, AnalyzerError, TokenInfo, looks_like_acronym
from rewriting.excluded_domains import DomainExclusions
from rewriting.gender_highlights import GenderHighlighter
from rewriting.pronoun_replacement import PronounReplacer

_TOKEN_PATTERN = re.compile(r"n't|'\w+|\w+?(?=n't)|\w+|[^\w\s]")

_LEXICON = {
    'AUX': {'is', 'are', 'was', 'were', 'has', 'have', 'does', 'do', 'did'},
    'PART': {'not', "n't"},
    'ADV': {'always', 'never', 'daily', 'often', 'really', 'also'},
    'PRON': {'he', 'she', 'they', 'them', 'him', 'her', 'his', 'hers', 'it',
             'i', 'you', 'we', 'himself', 'herself', 'themself', 'their', 'theirs'},
    'DET': {'the', 'a', 'an'},
    'CCONJ': {'or', 'and'},
    'ADP': {'in', 'on', 'at', 'to', 'with', 'as'},
    'ADJ': {'happy', 'nervous', 'late'},
    'NOUN': {'book', 'car', 'dog', 'home', 'store', 'bugs', 'cat', 'database', 'tools'},
}

_EXPANSIONS = {"n't": 'not', "'re": 'are', "'ll": 'will', "'ve": 'have', "'m": 'am'}


def _pos_for(word: str) -> str:
    lower = word.lower()
    if not word[0].isalnum() and not word.startswith("'"):
        return 'PUNCT'
    for pos, words in _LEXICON.items():
        if lower in words:
            return pos
    return 'VERB'


class LexiconAnalyzer(Analyzer):
    """Rule-based analyzer with a fixed lexicon."""

    def tokenize(self, text):
        found = list(_TOKEN_PATTERN.finditer(text))
        tokens = []
        for i, m in enumerate(found):
            end = found[i + 1].start() if i + 1 < len(found) else len(text)
            pos = _pos_for(m.group())
            tag = pos
            if m.group().lower() in ('her', 'his') and i + 1 < len(found):
                if _pos_for(found[i + 1].group()) == 'NOUN':
                    tag = 'PRP$'
            tokens.append(TokenInfo(
                text=m.group(),
                idx=m.start(),
                pos=pos,
                tag=tag,
                whitespace=text[m.end():end],
                is_acronym=looks_like_acronym(m.group())
            ))
        return tokens

    def expand_contractions(self, doc):
        pieces = [[t.text, t.whitespace] for t in doc.tokens]
        for i, token in enumerate(doc.tokens):
            if i == 0 or doc.tokens[i - 1].whitespace:
                continue
            lower = token.lower
            if lower == "'s" and doc.tokens[i - 1].pos == 'PRON':
                expansion = 'is'
            else:
                expansion = _EXPANSIONS.get(lower)
            if expansion:
                pieces[i - 1][1] = ' '
                pieces[i][0] = expansion
        prefix = doc.text[:doc.tokens[0].idx] if doc.tokens else doc.text
        return prefix + ''.join(text + ws for text, ws in pieces)


class FailingAnalyzer(Analyzer):
    """Analyzer that cannot parse anything."""

    def tokenize(self, text):
        raise AnalyzerError("tokenizer unavailable")

    def expand_contractions(self, doc):
        return doc.text


@pytest.fixture
def analyzer():
    return LexiconAnalyzer()


@pytest.fixture
def replacer(analyzer):
    return PronounReplacer(analyzer=analyzer, expand_contractions=True)


@pytest.fixture
def highlighter():
    return GenderHighlighter(
        pronoun_specs=['she/her', 'he/him', 'they/them'],
        gendered_terms=['mother', 'father', 'woman', 'man']
    )


@pytest.fixture
def exclusions():
    return DomainExclusions({'example.org': 'Listed for testing.'})


@pytest.fixture
def failing_analyzer():
    return FailingAnalyzer()
