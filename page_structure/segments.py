"""
Page Segments
Collects the text segments of an HTML body and rewrites them in place.
"""

import html
import logging
from typing import Callable, List

from bs4 import BeautifulSoup, NavigableString, Tag

logger = logging.getLogger(__name__)

# Elements whose text is never rendered as page prose.
NON_PROSE_ELEMENTS = frozenset({'script', 'style', 'noscript', 'template', 'head', 'title', 'textarea'})

EDITABLE_ELEMENTS = frozenset({'textarea', 'input', 'form'})


def parse_body(body_html: str) -> BeautifulSoup:
    return BeautifulSoup(body_html, 'html.parser')


def text_segments_under(root: Tag) -> List[NavigableString]:
    """
    Collect in a list all prose text nodes under ``root``, in document order.

    Comments, doctypes and the contents of script/style elements are skipped.
    """
    return [
        node for node in root.find_all(string=True)
        if type(node) is NavigableString
        and not any(parent.name in NON_PROSE_ELEMENTS for parent in node.parents)
    ]


def visible_texts(root: Tag) -> List[str]:
    """Rendered text of the page, one entry per text segment."""
    return [str(node) for node in text_segments_under(root) if node.strip()]


def is_editable(node) -> bool:
    """
    Heuristically determine whether the given node is editable:
    whether it has an ancestor that is a textarea, input, or form,
    or whether an ancestor has "edit" in its id or class.
    """
    element = node if isinstance(node, Tag) else node.parent
    while element is not None and not isinstance(element, BeautifulSoup):
        if element.name in EDITABLE_ELEMENTS:
            return True
        element_id = element.get('id')
        if isinstance(element_id, str) and 'edit' in element_id:
            return True
        classes = element.get('class') or []
        if isinstance(classes, str):
            classes = [classes]
        if any('edit' in name for name in classes):
            return True
        element = element.parent
    return False


def replace_words_in_body(soup: BeautifulSoup,
                          needs_replacement: Callable[[str], bool],
                          replace_function: Callable[[str], str]) -> int:
    """
    If a text node contains one or more keywords, replace it with nodes
    built from the rewritten (HTML) text.

    ``replace_function`` receives HTML-escaped text and returns HTML.
    Returns the number of segments rewritten; a segment that fails to
    rewrite is left as it was.
    """
    # Collect all text nodes before processing them: replacing nodes while
    # walking the tree would disturb the traversal.
    text_nodes = text_segments_under(soup)
    rewritten = 0

    for node in text_nodes:
        original_text = str(node)
        if not needs_replacement(original_text) or is_editable(node):
            continue

        escaped = html.escape(original_text, quote=False)
        try:
            new_html = replace_function(escaped)
        except Exception as e:
            logger.warning(f"Skipping text segment that could not be rewritten: {e}")
            continue
        if new_html == escaped:
            continue

        parent = node.parent
        fragment = BeautifulSoup(new_html, 'html.parser')
        if len(parent.contents) == 1:
            parent.clear()
            for child in list(fragment.contents):
                parent.append(child)
        else:
            span = soup.new_tag('span')
            for child in list(fragment.contents):
                span.append(child)
            node.replace_with(span)
        rewritten += 1

    return rewritten
