"""Keyboard and theme handlers.

Handles:
- keydown: Global shortcuts (Escape, Ctrl/Cmd+K, Ctrl/Cmd+O, arrows)
- theme_toggle: Switch between light and dark
"""

import logging
from typing import Any

from ...models.enums import Theme
from .base import ViewerContext

logger = logging.getLogger(__name__)

# Arrow keys typed into these elements edit text instead of paginating
TEXT_INPUT_TAGS = frozenset({"INPUT", "TEXTAREA"})


async def handle_keydown(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Apply a keyboard shortcut.

    Args:
        params: Dict containing:
            - key: Key name as reported by the browser ("Escape", "k", ...)
            - ctrl / meta: Modifier flags
            - target: Tag name of the focused element
    """
    key = str(params.get("key", ""))
    modifier = bool(params.get("ctrl")) or bool(params.get("meta"))
    target = str(params.get("target", "")).upper()
    search_state = ctx.state.search

    if key == "Escape":
        search_state.overlay_open = False
        ctx.state.toc_open = False
        return

    if modifier and key.lower() == "k":
        if search_state.overlay_open:
            search_state.overlay_open = False
            search_state.clear()
        else:
            search_state.overlay_open = True
        return

    if modifier and key.lower() == "o":
        ctx.state.toc_open = not ctx.state.toc_open
        return

    if target in TEXT_INPUT_TAGS:
        return
    if key == "ArrowLeft":
        await ctx.router.previous()
    elif key == "ArrowRight":
        await ctx.router.next()


async def handle_theme_toggle(params: dict[str, Any], ctx: ViewerContext) -> None:
    """Flip the theme and persist the choice."""
    theme = Theme.LIGHT if ctx.state.theme == Theme.DARK else Theme.DARK
    ctx.state.theme = theme
    ctx.preferences.write_theme(theme)
    logger.debug(f"Theme switched to {theme}")
