"""Search event handlers.

Handles:
- search_input: Query typed into the search overlay
- search_select: A result was clicked
- search_open / search_close: Overlay visibility
"""

import asyncio
import logging
from typing import Any

from ...config import settings
from ...models.enums import SearchStatus
from ..search.matcher import normalize_query, search
from .base import ViewerContext

logger = logging.getLogger(__name__)


async def handle_search_input(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Run a search for the current input.

    Args:
        params: Dict containing:
            - query: Input text as typed

    Short queries show a hint without scanning. Otherwise the "searching"
    state is published, the handler pauses briefly, and the scan runs
    unless a newer keystroke superseded it.
    """
    text = str(params.get("query", ""))
    state = ctx.state.search
    state.generation += 1
    generation = state.generation
    state.query = text

    query = normalize_query(text)
    state.terms = query.terms
    state.results = []
    if query.too_short:
        state.status = SearchStatus.TOO_SHORT
        return

    state.status = SearchStatus.SEARCHING
    await asyncio.sleep(settings.search_delay_seconds)
    if generation != state.generation:
        logger.debug(f"Search '{query.raw}' superseded")
        return

    outcome = search(ctx.store, text)
    state.status = outcome.status
    state.results = outcome.results


async def handle_search_select(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Open a search result and deep-link to its first matched line.

    Args:
        params: Dict containing:
            - slug: Slug of the selected result
    """
    slug = params.get("slug")
    if not slug:
        raise ValueError("Invalid parameter: search_select requires 'slug'")

    result = next((r for r in ctx.state.search.results if r.slug == slug), None)
    ctx.state.search.overlay_open = False
    ctx.state.search.clear()

    matched_line = result.matched_lines[0] if result and result.matched_lines else None
    await ctx.router.activate(slug, matched_line=matched_line)


async def handle_search_open(params: dict[str, Any], ctx: ViewerContext) -> None:
    ctx.state.search.overlay_open = True


async def handle_search_close(params: dict[str, Any], ctx: ViewerContext) -> None:
    ctx.state.search.overlay_open = False
    ctx.state.search.clear()
