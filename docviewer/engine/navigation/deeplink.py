"""Scrolling the rendered document to a search hit.

The matched source line is located in the rendered content by text. When
markdown rendering changed the line beyond recognition, the scroll position
is estimated from the line's relative position instead.
"""

import logging
from dataclasses import dataclass

from bs4 import Tag

from ...config import settings
from ..page import Page
from ..search.matcher import MatchedLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeepLinkResult:
    """Where the viewer scrolled for a search hit.

    Attributes:
        offset: Scroll position applied to the container
        element: Rendered element containing the line, None for the
            approximate fallback
    """

    offset: float
    element: Tag | None


def find_match_element(root: Tag, line_text: str) -> Tag | None:
    """Most specific rendered element whose text contains ``line_text``.

    Elements are visited in document order; a later candidate replaces the
    current one only if it has strictly fewer descendant elements.
    """
    target = line_text.strip()
    if not target:
        return None
    best: Tag | None = None
    best_size = 0
    for element in root.find_all(True):
        if target not in element.get_text():
            continue
        size = len(element.find_all(True))
        if best is None or size < best_size:
            best, best_size = element, size
    return best


def approximate_offset(page: Page, root: Tag, line_index: int) -> float:
    """Estimate the scroll position of a source line.

    Uses ``(line_index / total_text_lines) * rendered_height`` minus the
    header overlay, with the ratio clamped to [0, 1] and the result to >= 0.
    """
    total_lines = len(root.get_text().split("\n"))
    ratio = min(1.0, max(0.0, line_index / total_lines)) if total_lines else 0.0
    return max(0.0, ratio * page.content_height() - settings.header_height)


def scroll_to_match(page: Page, root: Tag, matched_line: MatchedLine) -> DeepLinkResult | None:
    """Scroll the container to ``matched_line`` and emphasize it.

    Never raises: lookup failures fall back to an approximate offset, and
    anything else is logged and ignored.
    """
    try:
        element = find_match_element(root, matched_line.line_text)
        if element is not None:
            top, _ = page.element_box(element)
            offset = max(0.0, top - settings.header_height - settings.scroll_margin)
            page.container.scroll_to(offset, smooth=True)
            page.emphasize(element, settings.emphasis_seconds)
            return DeepLinkResult(offset=offset, element=element)

        offset = approximate_offset(page, root, matched_line.line_index)
        page.container.scroll_to(offset, smooth=True)
        logger.debug(f"No rendered element for line {matched_line.line_index}; approximated")
        return DeepLinkResult(offset=offset, element=None)
    except Exception as e:
        logger.warning(f"Could not scroll to search match: {e}")
        return None
