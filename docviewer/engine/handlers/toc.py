"""Table-of-contents event handlers.

Handles:
- scroll: The content container scrolled
- toc_click: A table-of-contents entry was clicked
- toc_toggle: The "on this page" panel button was clicked
"""

from typing import Any

from .base import ViewerContext


async def handle_scroll(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Move the scroll container; observers update the active heading.

    Args:
        params: Dict containing:
            - scroll_top: New scroll position in pixels
    """
    try:
        scroll_top = float(params.get("scroll_top", 0))
    except (TypeError, ValueError) as e:
        raise ValueError("Invalid parameter: scroll_top must be a number") from e
    ctx.page.container.scroll_to(scroll_top)


async def handle_toc_click(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Scroll to a heading of the active document.

    Args:
        params: Dict containing:
            - heading_id: Anchor id of the heading
    """
    heading_id = params.get("heading_id")
    if not heading_id:
        raise ValueError("Invalid parameter: toc_click requires 'heading_id'")
    ctx.toc.click(heading_id)


async def handle_toc_toggle(params: dict[str, Any], ctx: ViewerContext) -> None:
    ctx.state.toc_open = not ctx.state.toc_open
