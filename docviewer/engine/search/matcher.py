"""Substring search over the document store.

Matching is presence/absence only:
- Title match: the whole normalized query is a substring of the title
- Line match: every query term is a substring of the line (AND, never OR)

Results follow manifest order. The matcher is a pure function of the store
snapshot and never touches navigation or table-of-contents state.
"""

import logging
import re
from dataclasses import dataclass, field

from ...config import settings
from ...models.enums import SearchStatus
from ..core.document import DocumentStore

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class SearchQuery:
    """A normalized search query.

    Attributes:
        raw: Operator input, lowercased and trimmed
        terms: Whitespace-delimited tokens of ``raw``, empties dropped
    """

    raw: str
    terms: tuple[str, ...]

    @property
    def too_short(self) -> bool:
        return len(self.raw) < settings.search_min_chars


@dataclass(frozen=True)
class MatchedLine:
    """A content line in which every query term occurs.

    Attributes:
        line_index: 0-based position of the line in the raw content
        line_text: The line as written in the source
    """

    line_index: int
    line_text: str


@dataclass
class SearchResult:
    """Per-document search hit.

    Attributes:
        document_id: ID of the matching document
        slug: Routing key of the matching document
        title: Document title
        title_matched: Whether the title contains the raw query
        matched_lines: Every matching content line in original order
    """

    document_id: str
    slug: str
    title: str
    title_matched: bool
    matched_lines: list[MatchedLine] = field(default_factory=list)

    @property
    def snippet(self) -> str | None:
        """First matched line, trimmed, or None for a title-only hit."""
        if not self.matched_lines:
            return None
        return self.matched_lines[0].line_text.strip()


@dataclass
class SearchOutcome:
    """What a search produced.

    ``status`` distinguishes a query that was too short to scan from one
    that scanned and found nothing.
    """

    query: SearchQuery
    status: SearchStatus
    results: list[SearchResult] = field(default_factory=list)


def normalize_query(raw_query: str) -> SearchQuery:
    """Lowercase, trim and tokenize operator input."""
    raw = raw_query.lower().strip()
    return SearchQuery(raw=raw, terms=tuple(raw.split()))


def match_lines(content: str, terms: tuple[str, ...]) -> list[MatchedLine]:
    """Collect every line of ``content`` containing all ``terms``."""
    if not terms:
        return []
    matched: list[MatchedLine] = []
    for index, line in enumerate(_LINE_BREAK.split(content)):
        lower_line = line.lower()
        if all(term in lower_line for term in terms):
            matched.append(MatchedLine(line_index=index, line_text=line))
    return matched


def search(store: DocumentStore, raw_query: str) -> SearchOutcome:
    """Search every document in the store.

    Args:
        store: Published document store
        raw_query: Query as typed by the operator

    Returns:
        SearchOutcome with status TOO_SHORT (no scan), NO_RESULTS or
        RESULTS; results are in manifest order
    """
    query = normalize_query(raw_query)
    if query.too_short:
        return SearchOutcome(query=query, status=SearchStatus.TOO_SHORT)

    results: list[SearchResult] = []
    for document in store:
        title_matched = query.raw in document.title.lower()
        matched_lines = match_lines(document.content, query.terms)
        if title_matched or matched_lines:
            results.append(
                SearchResult(
                    document_id=document.id,
                    slug=document.slug,
                    title=document.title,
                    title_matched=title_matched,
                    matched_lines=matched_lines,
                )
            )

    logger.debug(f"Search '{query.raw}': {len(results)} of {len(store)} documents matched")
    status = SearchStatus.RESULTS if results else SearchStatus.NO_RESULTS
    return SearchOutcome(query=query, status=status, results=results)
