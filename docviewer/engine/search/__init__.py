"""Search index and matcher.

Usage:
    from docviewer.engine.search import search, highlight_text

    outcome = search(store, "user id")
"""

from .highlight import HIGHLIGHT_CLASS, build_pattern, highlight_html, highlight_text
from .matcher import (
    MatchedLine,
    SearchOutcome,
    SearchQuery,
    SearchResult,
    match_lines,
    normalize_query,
    search,
)

__all__ = [
    # Matching
    "MatchedLine",
    "SearchOutcome",
    "SearchQuery",
    "SearchResult",
    "match_lines",
    "normalize_query",
    "search",
    # Highlighting
    "HIGHLIGHT_CLASS",
    "build_pattern",
    "highlight_html",
    "highlight_text",
]
