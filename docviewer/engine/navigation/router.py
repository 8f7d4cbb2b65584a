"""Hash routing and pagination.

The location fragment is the single source of truth for which document is
active. ``activate`` and the pagination moves only ever change the
fragment; the fragment-change notification then drives the render. The one
exception is re-activating the slug that is already in the fragment, which
renders directly so the content is refreshed.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..core.document import DocumentStore
from ..page import Page
from ..search.matcher import MatchedLine

logger = logging.getLogger(__name__)

RenderCallback = Callable[[str], Awaitable[None]]


@dataclass(frozen=True)
class Pagination:
    """Previous/next controls for the active document."""

    index: int
    previous_enabled: bool
    next_enabled: bool
    previous_slug: str | None
    next_slug: str | None


def paginate(store: DocumentStore, index: int) -> Pagination:
    """Pagination controls for the document at manifest position ``index``.

    Previous is enabled iff ``index > 0``; next iff the index is resolved
    (not -1) and not the last one.
    """
    last = len(store) - 1
    previous_enabled = index > 0
    next_enabled = index != -1 and index < last
    return Pagination(
        index=index,
        previous_enabled=previous_enabled,
        next_enabled=next_enabled,
        previous_slug=store[index - 1].slug if previous_enabled else None,
        next_slug=store[index + 1].slug if next_enabled else None,
    )


class NavigationRouter:
    """Translates fragments into renders and owns pagination order."""

    def __init__(self, store: DocumentStore, page: Page, render: RenderCallback):
        self.store = store
        self.page = page
        self._render = render
        self.active_slug = ""
        self._pending_match: MatchedLine | None = None

    def resolve_fragment(self, fragment: str) -> str:
        """Slug to show for ``fragment``; empty falls back to the first document."""
        fragment = fragment.lstrip("#")
        if fragment:
            return fragment
        first = self.store.first()
        return first.slug if first is not None else ""

    async def on_fragment_change(self, fragment: str) -> None:
        """Handle a fragment-change notification from the page."""
        self.active_slug = self.resolve_fragment(fragment)
        await self._render(self.active_slug)

    async def activate(self, slug: str, matched_line: MatchedLine | None = None) -> None:
        """Make ``slug`` the active document.

        Args:
            slug: Target document slug
            matched_line: Search hit to scroll to once the document renders
        """
        self.request_deep_link(matched_line)
        if self.page.fragment != slug:
            await self.page.set_fragment(slug)
        else:
            # Same fragment fires no change event, so render directly
            self.active_slug = slug
            await self._render(slug)

    def request_deep_link(self, matched_line: MatchedLine | None) -> None:
        """Scroll to ``matched_line`` after the next render."""
        self._pending_match = matched_line

    def take_pending_match(self) -> MatchedLine | None:
        """Consume the deep-link target left by ``activate``."""
        match, self._pending_match = self._pending_match, None
        return match

    def current_index(self) -> int:
        return self.store.index_of(self.active_slug)

    def pagination(self) -> Pagination:
        return paginate(self.store, self.current_index())

    async def next(self) -> bool:
        """Move to the next document; a no-op when disabled."""
        pagination = self.pagination()
        if not pagination.next_enabled:
            return False
        await self.page.set_fragment(pagination.next_slug)
        return True

    async def previous(self) -> bool:
        """Move to the previous document; a no-op when disabled."""
        pagination = self.pagination()
        if not pagination.previous_enabled:
            return False
        await self.page.set_fragment(pagination.previous_slug)
        return True
