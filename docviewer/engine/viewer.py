"""UI controller for one documentation viewer.

``DocViewer`` owns the state of a single viewer (navigation, table of
contents, search overlay, theme) and glues page events to the store,
matcher, router and tracker. Events are dispatched by name to the handler
functions in ``engine.handlers``; after each event the current view can be
read with ``snapshot()``.

Rendering always runs the same pipeline, in order:

    lookup -> render -> code highlighting -> content swap -> TOC rebuild
    -> deep link to a pending search match
"""

import html
import logging
from typing import Any

from ..config import settings
from ..models import (
    DocumentInfo,
    EventName,
    MatchedLineInfo,
    PaginationInfo,
    SearchPanelInfo,
    SearchResultInfo,
    SearchStatus,
    SectionGroupInfo,
    TocEntryInfo,
    TocInfo,
    ViewState,
)
from .core.document import DocumentStore
from .errors import DocumentNotFoundError, LoadError, RenderError
from .handlers import HANDLERS, ViewerContext
from .navigation.deeplink import scroll_to_match
from .navigation.router import NavigationRouter, Pagination
from .page import Page
from .preferences import MemoryPreferenceStore, PreferenceStore
from .render import CodeHighlighter, Renderer, UnavailableRenderer, enhance_tables
from .search.highlight import highlight_html, highlight_text
from .search.matcher import SearchResult
from .state import ViewerState
from .toc.tracker import TocEntry, TocTracker

logger = logging.getLogger(__name__)

TITLE_MATCH_HINT = "<em>Match in title</em>"
SEARCHING_MESSAGE = "Searching..."
NO_RESULTS_MESSAGE = "No results found"


def too_short_message() -> str:
    return f"Type at least {settings.search_min_chars} characters to search..."


def toc_entry_info(entry: TocEntry) -> TocEntryInfo:
    return TocEntryInfo(
        heading_id=entry.heading_id,
        level=entry.level,
        text=entry.text,
        indent=entry.indent,
        padding_left_px=entry.padding_left_px,
        active=entry.active,
    )


def pagination_info(pagination: Pagination) -> PaginationInfo:
    return PaginationInfo(
        index=pagination.index,
        previous_enabled=pagination.previous_enabled,
        next_enabled=pagination.next_enabled,
        previous_slug=pagination.previous_slug,
        next_slug=pagination.next_slug,
    )


def nav_sections(
    store: DocumentStore,
    active_slug: str = "",
    expanded: set[str] | None = None,
) -> list[SectionGroupInfo]:
    """Navigation tree grouped by section, in first-seen order."""
    expanded = expanded or set()
    return [
        SectionGroupInfo(
            label=label,
            expanded=label in expanded,
            documents=[
                DocumentInfo(
                    id=document.id,
                    title=document.title,
                    slug=document.slug,
                    section=document.section,
                    path=document.path,
                    active=document.slug == active_slug,
                )
                for document in documents
            ],
        )
        for label, documents in store.grouped_by_section().items()
    ]


class DocViewer:
    """One viewer instance bound to a page."""

    def __init__(
        self,
        store: DocumentStore | None,
        page: Page,
        renderer: Renderer | None = None,
        highlighter: CodeHighlighter | None = None,
        preferences: PreferenceStore | None = None,
        load_error: LoadError | None = None,
    ):
        self.store = store if store is not None else DocumentStore().publish()
        self.page = page
        self.renderer: Renderer = renderer or UnavailableRenderer()
        self.highlighter = highlighter
        self.preferences = preferences or MemoryPreferenceStore()
        self.load_error = load_error

        self.state = ViewerState(
            theme=self.preferences.read_theme(),
            load_failed=load_error is not None,
        )
        self.router = NavigationRouter(self.store, page, self.render_active)
        self.toc = TocTracker(page)
        self.context = ViewerContext(
            store=self.store,
            page=page,
            router=self.router,
            toc=self.toc,
            state=self.state,
            preferences=self.preferences,
        )
        page.on_fragment_change(self.router.on_fragment_change)

    async def start(self) -> ViewState:
        """Show the initial document (or the load failure)."""
        if self.load_error is not None:
            logger.error(f"Unable to load file list or content: {self.load_error}")
            self.page.set_content_text(LoadError.user_message)
            self.toc.rebuild(None)
            return self.snapshot()

        await self.router.on_fragment_change(self.page.fragment)
        return self.snapshot()

    async def dispatch(self, event: EventName | str, params: dict[str, Any] | None = None) -> ViewState:
        """Run the handler for ``event`` and return the resulting view.

        Raises:
            ValueError: Unknown event or invalid parameters
        """
        try:
            name = EventName(event)
        except ValueError as e:
            raise ValueError(f"Invalid parameter: unknown event '{event}'") from e
        await HANDLERS[name](params or {}, self.context)
        return self.snapshot()

    # ============ RENDER PIPELINE ============

    async def render_active(self, slug: str) -> None:
        """Render ``slug`` into the content pane and resynchronize the TOC."""
        self.toc.disconnect()
        self.state.render_count += 1
        document = self.store.find_by_slug(slug)
        match = self.router.take_pending_match()

        if document is None:
            error = DocumentNotFoundError(slug)
            logger.error(f"Content for {slug} not pre-loaded or file not found.")
            self.page.set_content_text(error.user_message)
            self.toc.rebuild(self.page.content_root)
            return

        try:
            markup = self.renderer.render(document.content)
        except Exception as e:
            # Anything but RenderError is a renderer bug worth a traceback
            logger.warning(
                f"Rendering '{slug}' failed: {e}",
                exc_info=not isinstance(e, RenderError),
            )
            self.page.set_content_text(RenderError.user_message)
            self.toc.rebuild(self.page.content_root)
            return

        root = self.page.set_content_html(markup)
        if self.highlighter is not None:
            self.highlighter.highlight_all(root)
        enhance_tables(root)
        self.page.container.scroll_to(0)
        self.state.expanded_sections.add(document.section)

        self.toc.rebuild(root)
        if match is not None:
            scroll_to_match(self.page, root, match)

    # ============ VIEW ============

    def _snippet_html(self, result: SearchResult) -> str:
        snippet = result.snippet
        if snippet is None:
            return TITLE_MATCH_HINT if result.title_matched else ""
        try:
            rendered = self.renderer.render_inline(snippet)
        except Exception as e:
            logger.warning(f"Failed to render markdown snippet: {e}")
            rendered = html.escape(snippet, quote=False)
        return highlight_html(rendered, self.state.search.terms)

    def present_result(self, result: SearchResult) -> SearchResultInfo:
        return SearchResultInfo(
            document_id=result.document_id,
            slug=result.slug,
            title=result.title,
            title_html=highlight_text(result.title, self.state.search.terms),
            snippet_html=self._snippet_html(result),
            title_matched=result.title_matched,
            matched_lines=[
                MatchedLineInfo(line_index=line.line_index, line_text=line.line_text)
                for line in result.matched_lines
            ],
        )

    def search_panel(self) -> SearchPanelInfo:
        search_state = self.state.search
        message = {
            SearchStatus.TOO_SHORT: too_short_message(),
            SearchStatus.SEARCHING: SEARCHING_MESSAGE,
            SearchStatus.NO_RESULTS: NO_RESULTS_MESSAGE,
        }.get(search_state.status)
        return SearchPanelInfo(
            overlay_open=search_state.overlay_open,
            query=search_state.query,
            status=search_state.status,
            message=message,
            results=[self.present_result(result) for result in search_state.results],
        )

    def snapshot(self) -> ViewState:
        root = self.page.content_root
        return ViewState(
            fragment=self.page.fragment,
            active_slug=self.router.active_slug,
            active_heading_id=self.toc.active_heading_id,
            theme=self.state.theme,
            content_html=str(root) if root is not None else "",
            render_count=self.state.render_count,
            scroll_top=self.page.container.scroll_top,
            nav=nav_sections(self.store, self.router.active_slug, self.state.expanded_sections),
            pagination=pagination_info(self.router.pagination()),
            toc=TocInfo(
                visible=self.toc.visible,
                open=self.state.toc_open,
                entries=[toc_entry_info(entry) for entry in self.toc.entries],
            ),
            search=self.search_panel(),
        )
