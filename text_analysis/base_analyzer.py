"""
Base Analyzer Module
Capability interface for the tokenizer/analyzer the rewriting engine consumes.

The engine never talks to a linguistic library directly. It asks an Analyzer
for an AnalyzedDocument, then uses four operations on it:

1. Tokenize - the annotated token stream (``tokens``)
2. Match by phrase - case-insensitive token sequence lookup (``match``/``has``)
3. Tag lookup - acronym flag and part of speech per token
4. Span replace - character span edits followed by re-analysis (``replace_spans``)

Any backend that can produce TokenInfo records (rule-based or statistical)
can be plugged in without touching the rewriting algorithms.
"""

import re
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Two to six capitals ("FBI", "HER") or dotted initials ("H.E.", "U.S.A").
_ACRONYM_PATTERN = re.compile(r'^(?:[A-Z]{2,6}|(?:[A-Z]\.){2,}[A-Z]?)$')


class AnalyzerError(RuntimeError):
    """Raised when a backend cannot analyze a piece of text."""


def looks_like_acronym(text: str) -> bool:
    """Shared acronym heuristic for backends without a dedicated tagger."""
    return bool(_ACRONYM_PATTERN.match(text))


@dataclass(frozen=True)
class TokenInfo:
    """One annotated token of an analyzed text."""
    text: str
    idx: int
    pos: str = ''
    tag: str = ''
    whitespace: str = ''
    is_acronym: bool = False

    @property
    def lower(self) -> str:
        return self.text.lower()

    @property
    def end_char(self) -> int:
        return self.idx + len(self.text)

    @property
    def is_space(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class Match:
    """A located occurrence of a phrase: token span [start, end) and its characters."""
    start: int
    end: int
    start_char: int
    end_char: int
    text: str


class AnalyzedDocument:
    """
    Annotated, mutable view of one text.

    Owned by a single substitution call. Every edit goes through
    ``replace_spans`` so the token stream always describes the current text.
    """

    def __init__(self, text: str, tokens: Sequence[TokenInfo], analyzer: 'Analyzer'):
        self._text = text
        self._tokens = list(tokens)
        self._analyzer = analyzer
        self._content = [i for i, token in enumerate(self._tokens) if not token.is_space]

    @property
    def text(self) -> str:
        return self._text

    @property
    def tokens(self) -> List[TokenInfo]:
        return self._tokens

    def render(self) -> str:
        """Render the document back to a plain string."""
        return self._text

    # === TOKEN NAVIGATION ===

    def next_content_index(self, index: int) -> Optional[int]:
        """Index of the first non-whitespace token after ``index``, or None."""
        for i in range(index + 1, len(self._tokens)):
            if not self._tokens[i].is_space:
                return i
        return None

    def previous_content_index(self, index: int) -> Optional[int]:
        """Index of the last non-whitespace token before ``index``, or None."""
        for i in range(index - 1, -1, -1):
            if not self._tokens[i].is_space:
                return i
        return None

    def words_at(self, index: int, words: Sequence[str]) -> Optional[Match]:
        """Match ``words`` (lowercase) against the content tokens starting at ``index``."""
        if index is None or index >= len(self._tokens) or self._tokens[index].is_space:
            return None
        return self._match_at(self._content.index(index), words)

    def _match_at(self, position: int, words: Sequence[str]) -> Optional[Match]:
        window = self._content[position:position + len(words)]
        if len(window) < len(words):
            return None
        for token_index, word in zip(window, words):
            if self._tokens[token_index].lower != word:
                return None
        # The span runs from the first token to the last, so the whitespace
        # between words of a phrase (newlines included) is replaced with it.
        first, last = self._tokens[window[0]], self._tokens[window[-1]]
        return Match(
            start=window[0],
            end=window[-1] + 1,
            start_char=first.idx,
            end_char=last.end_char,
            text=self._text[first.idx:last.end_char]
        )

    # === PHRASE MATCHING ===

    def match(self, phrase: str) -> List[Match]:
        """All non-overlapping, case-insensitive occurrences of ``phrase``, left to right."""
        words = phrase.lower().split()
        if not words:
            return []

        matches = []
        position = 0
        while position < len(self._content):
            found = self._match_at(position, words)
            if found:
                matches.append(found)
                position += len(words)
            else:
                position += 1
        return matches

    def has(self, phrase: str) -> bool:
        return bool(self.match(phrase))

    # === TAG LOOKUP ===

    def is_acronym(self, match: Match) -> bool:
        """True when any token of the match was tagged as an acronym."""
        return any(token.is_acronym for token in self._tokens[match.start:match.end])

    def token_tag(self, match: Match) -> str:
        return self._tokens[match.start].tag

    # === SPAN REPLACEMENT ===

    def replace_spans(self, replacements: Iterable[Tuple[int, int, str]]) -> int:
        """
        Replace character spans ``(start_char, end_char, new_text)`` and re-analyze.

        Spans refer to the current text and must not overlap.
        Returns the number of spans replaced.
        """
        ordered = sorted(replacements, key=lambda item: item[0], reverse=True)
        if not ordered:
            return 0

        text = self._text
        previous_start = len(text) + 1
        for start, end, new_text in ordered:
            if end > previous_start:
                raise ValueError(f"Overlapping replacement span ({start}, {end})")
            text = text[:start] + new_text + text[end:]
            previous_start = start

        self._reload(text)
        return len(ordered)

    def replace_matches(self, replacements: Iterable[Tuple[Match, str]]) -> int:
        return self.replace_spans(
            (match.start_char, match.end_char, new_text) for match, new_text in replacements
        )

    def expand_contractions(self) -> None:
        """Normalize contracted forms ("he's" -> "he is") in place."""
        expanded = self._analyzer.expand_contractions(self)
        if expanded != self._text:
            self._reload(expanded)

    def _reload(self, text: str) -> None:
        reloaded = self._analyzer.analyze(text)
        self._text = reloaded._text
        self._tokens = reloaded._tokens
        self._content = reloaded._content


class Analyzer(ABC):
    """
    Abstract tokenizer/analyzer backend.
    Subclasses implement tokenization and contraction expansion.
    """

    @abstractmethod
    def tokenize(self, text: str) -> List[TokenInfo]:
        """Return annotated tokens covering ``text`` in order."""

    @abstractmethod
    def expand_contractions(self, doc: AnalyzedDocument) -> str:
        """Return the text of ``doc`` with contractions written out."""

    def analyze(self, text: str) -> AnalyzedDocument:
        """Build an AnalyzedDocument, wrapping backend failures in AnalyzerError."""
        try:
            tokens = self.tokenize(text)
        except AnalyzerError:
            raise
        except Exception as e:
            raise AnalyzerError(f"Could not analyze text: {e}") from e
        return AnalyzedDocument(text, tokens, self)
