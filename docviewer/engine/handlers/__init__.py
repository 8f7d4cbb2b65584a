"""Event handlers for the viewer.

This package contains handlers organized by concern:
- search: Search overlay input, result selection, overlay visibility
- navigation: Fragment changes, navigation links, sections, pagination
- toc: Scrolling, table-of-contents clicks and panel toggle
- ui: Keyboard shortcuts and theme

Each handler is a standalone async function that takes:
- params: dict[str, Any] - Event parameters
- ctx: ViewerContext - Components of the viewer (store, page, router, ...)
"""

from ...models.enums import EventName
from .base import HandlerFunc, ViewerContext
from .navigation import (
    handle_hashchange,
    handle_nav_click,
    handle_next,
    handle_previous,
    handle_section_toggle,
)
from .search import (
    handle_search_close,
    handle_search_input,
    handle_search_open,
    handle_search_select,
)
from .toc import handle_scroll, handle_toc_click, handle_toc_toggle
from .ui import handle_keydown, handle_theme_toggle

HANDLERS: dict[EventName, HandlerFunc] = {
    EventName.HASHCHANGE: handle_hashchange,
    EventName.SEARCH_INPUT: handle_search_input,
    EventName.SEARCH_SELECT: handle_search_select,
    EventName.SEARCH_OPEN: handle_search_open,
    EventName.SEARCH_CLOSE: handle_search_close,
    EventName.NAV_CLICK: handle_nav_click,
    EventName.SECTION_TOGGLE: handle_section_toggle,
    EventName.NEXT: handle_next,
    EventName.PREVIOUS: handle_previous,
    EventName.TOC_CLICK: handle_toc_click,
    EventName.TOC_TOGGLE: handle_toc_toggle,
    EventName.SCROLL: handle_scroll,
    EventName.KEYDOWN: handle_keydown,
    EventName.THEME_TOGGLE: handle_theme_toggle,
}

__all__ = [
    # Base
    "HANDLERS",
    "HandlerFunc",
    "ViewerContext",
    # Search handlers
    "handle_search_input",
    "handle_search_select",
    "handle_search_open",
    "handle_search_close",
    # Navigation handlers
    "handle_hashchange",
    "handle_nav_click",
    "handle_section_toggle",
    "handle_next",
    "handle_previous",
    # TOC handlers
    "handle_scroll",
    "handle_toc_click",
    "handle_toc_toggle",
    # UI handlers
    "handle_keydown",
    "handle_theme_toggle",
]
