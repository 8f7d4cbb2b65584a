"""Highlighting of query terms in titles and snippets.

All terms are escaped and joined into one case-insensitive alternation, so
each occurrence is wrapped exactly once even when terms overlap. Longer
terms are tried first at any given position.
"""

import html
import re

from bs4 import BeautifulSoup
from bs4.element import Comment

HIGHLIGHT_CLASS = "highlight"

# Text inside these elements is never highlighted
_SKIP_PARENTS = frozenset({"script", "style"})


def build_pattern(terms: tuple[str, ...] | list[str]) -> re.Pattern[str] | None:
    """Compile the alternation for ``terms``, or None when there are none."""
    unique = sorted({term for term in terms if term}, key=lambda t: (-len(t), t))
    if not unique:
        return None
    return re.compile("|".join(re.escape(term) for term in unique), re.IGNORECASE)


def highlight_text(text: str, terms: tuple[str, ...] | list[str]) -> str:
    """HTML-escape plain ``text`` and mark every term occurrence."""
    pattern = build_pattern(terms)
    if pattern is None:
        return html.escape(text, quote=False)

    parts: list[str] = []
    position = 0
    for match in pattern.finditer(text):
        parts.append(html.escape(text[position : match.start()], quote=False))
        parts.append(_wrap_escaped(match.group(0)))
        position = match.end()
    parts.append(html.escape(text[position:], quote=False))
    return "".join(parts)


def _wrap_escaped(fragment: str) -> str:
    return f'<span class="{HIGHLIGHT_CLASS}">{html.escape(fragment, quote=False)}</span>'


def highlight_html(fragment: str, terms: tuple[str, ...] | list[str]) -> str:
    """Mark term occurrences inside the text nodes of an HTML fragment.

    Tags and attribute values are left untouched.
    """
    pattern = build_pattern(terms)
    if pattern is None:
        return fragment

    soup = BeautifulSoup(fragment, "html.parser")
    for node in list(soup.find_all(string=True)):
        if isinstance(node, Comment) or node.parent.name in _SKIP_PARENTS:
            continue
        text = str(node)
        if not pattern.search(text):
            continue
        replacement = BeautifulSoup(highlight_text(text, terms), "html.parser")
        for child in list(replacement.contents):
            node.insert_before(child)
        node.extract()
    return str(soup)

