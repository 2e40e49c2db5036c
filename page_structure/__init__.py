"""
Page Structure Package

HTML segment collection and rewriting, and the per-page classification session.
"""

from .segments import is_editable, parse_body, replace_words_in_body, text_segments_under, visible_texts
from .page_session import PageSession, PageSessionStore
