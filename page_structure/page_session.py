"""
Page Session
Runs the classification state machine over one page body and answers the
status / restore / toggle / reload messages sent about that page.
"""

import uuid
import logging
import threading
from collections import OrderedDict
from functools import partial
from typing import Any, Dict, Optional

from rewriting.excluded_domains import DomainExclusions, get_domain_exclusions
from rewriting.gender_highlights import GenderHighlighter, get_gender_highlighter
from rewriting.pronoun_replacement import MARKER_CLASS, PronounReplacer, get_pronoun_replacer
from rewriting.status import Status
from .segments import parse_body, replace_words_in_body, visible_texts

logger = logging.getLogger(__name__)


class PageSession:
    """
    One page body and its rewriting state.

    Every operation holds the session lock, so a restore always completes
    before the next pass starts and two passes never interleave.
    """

    def __init__(self, original_html: str, host: str = '',
                 replacer: Optional[PronounReplacer] = None,
                 highlighter: Optional[GenderHighlighter] = None,
                 exclusions: Optional[DomainExclusions] = None):
        self.page_id = uuid.uuid4().hex
        self.original_html = original_html
        self.host = host
        self.replacer = replacer or get_pronoun_replacer()
        self.highlighter = highlighter or get_gender_highlighter()
        self.exclusions = exclusions or get_domain_exclusions()

        self.current_html = original_html
        self.status: Optional[Status] = None
        self.something_to_toggle: Optional[str] = None
        self.is_toggled = False
        self._lock = threading.Lock()

    # === STATE MACHINE ===

    def run(self) -> Status:
        """Classify and rewrite the page, starting from the original body."""
        with self._lock:
            return self._run()

    def _run(self) -> Status:
        original = self.original_html
        self.current_html = original
        self.something_to_toggle = None
        self.is_toggled = False

        if self.exclusions.in_excluded_domain(self.host):
            self.status = Status.EXCLUDED_DOMAIN
        elif self.highlighter.has_personal_pronoun_spec(original):
            self._rewrite(self.highlighter.has_personal_pronoun_spec,
                          self.highlighter.highlight_personal_pronoun_specs)
            self.status = Status.PRONOUN_SPECS
            self.something_to_toggle = 'highlights'
        elif self.highlighter.visibly_mentions_gender(visible_texts(parse_body(original))):
            self._rewrite(self.highlighter.mentions_gender, self.highlighter.highlight_gender)
            self.status = Status.MENTIONS_GENDER
            self.something_to_toggle = 'highlights'
        else:
            if self.replacer.has_replaceable_pronouns(original):
                self._rewrite(self.replacer.has_replaceable_pronouns,
                              partial(self.replacer.replace_pronouns, markup=True))
            if self.current_html != original:
                self.status = Status.REPLACED_PRONOUNS
                self.something_to_toggle = 'changes'
            else:
                self.status = Status.NO_GENDERED_PRONOUNS

        logger.info(f"Page {self.page_id} on '{self.host}' classified as {self.status.value}")
        return self.status

    def _rewrite(self, needs_replacement, replace_function) -> None:
        soup = parse_body(self.original_html)
        if replace_words_in_body(soup, needs_replacement, replace_function):
            self.current_html = str(soup)

    # === USER ACTIONS ===

    def restore(self) -> Status:
        """Put back the originally captured body, byte for byte."""
        with self._lock:
            self.current_html = self.original_html
            self.status = Status.RESTORED_ORIGINAL
            return self.status

    def toggle(self) -> bool:
        """Show or hide the change/highlight markup."""
        with self._lock:
            soup = parse_body(self.current_html)
            markers = soup.select(f'.{MARKER_CLASS}')
            for node in markers:
                classes = [c for c in node.get('class', []) if c not in ('show', 'hide')]
                classes.append('hide' if self.is_toggled else 'show')
                node['class'] = classes
            if markers:
                self.current_html = str(soup)
            self.is_toggled = not self.is_toggled
            return self.is_toggled

    def reload(self) -> Status:
        """Equivalent of reloading the page: a fresh pass over the original body."""
        return self.run()

    def why_excluded(self) -> Optional[str]:
        if self.exclusions.in_excluded_domain(self.host):
            return self.exclusions.get_why_excluded(self.host)
        return None

    # === MESSAGES ===

    def get_status(self) -> Dict[str, Any]:
        return {
            'status': self.status.value if self.status else None,
            'isToggled': self.is_toggled,
            'whyExcluded': self.why_excluded()
        }

    def handle_message(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Respond to a popup-style message.

        Raises:
            ValueError: for an unrecognized message type
        """
        message_type = (request or {}).get('type')
        if message_type == 'getStatus':
            return self.get_status()
        elif message_type == 'restoreOriginalContent':
            status = self.restore()
            return {'status': status.value, 'isToggled': self.is_toggled}
        elif message_type == 'toggle':
            return {'isToggled': self.toggle()}
        elif message_type == 'reloadPage':
            status = self.reload()
            return {'status': status.value, 'isToggled': self.is_toggled}
        else:
            logger.error(f"Page session received a request with unrecognized type {message_type}")
            raise ValueError(f"Unrecognized message type: {message_type}")


class PageSessionStore:
    """
    In-memory registry of page sessions.

    Holds at most ``max_sessions`` sessions; adding one more evicts the
    least recently created.
    """

    def __init__(self, max_sessions: int = 100):
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {max_sessions}")
        self.max_sessions = max_sessions
        self._sessions: Dict[str, PageSession] = OrderedDict()
        self._lock = threading.Lock()

    def add(self, session: PageSession) -> PageSession:
        with self._lock:
            self._sessions[session.page_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info(f"Evicted page session {evicted_id}")
        return session

    def get(self, page_id: str) -> Optional[PageSession]:
        with self._lock:
            return self._sessions.get(page_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
