"""Page surface the viewer drives.

The viewer never talks to a browser directly. Everything it needs from the
page (location fragment, content pane, scroll container, element geometry,
event subscription) goes through the ``Page`` protocol. ``HeadlessPage``
implements it on a BeautifulSoup tree with a simple block layout model and
backs server-side viewer sessions and the test-suite.
"""

import asyncio
import html
import logging
import math
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol

from bs4 import BeautifulSoup, Tag

if TYPE_CHECKING:
    from .toc.observer import ViewportObserver

logger = logging.getLogger(__name__)

FragmentListener = Callable[[str], Awaitable[None]]

EMPHASIS_CLASS = "search-emphasis"

# Fragment history entries kept per page
HISTORY_LIMIT = 100


class ScrollContainer:
    """The scrollable region holding the content pane.

    Observers attached to the container are re-evaluated after every
    scroll position change.
    """

    def __init__(self, height: float = 800.0):
        self.height = height
        self.scroll_top = 0.0
        self.last_scroll_smooth = False
        self._observers: list["ViewportObserver"] = []

    def scroll_to(self, top: float, smooth: bool = False) -> None:
        self.scroll_top = max(0.0, float(top))
        self.last_scroll_smooth = smooth
        self.notify()

    def attach(self, observer: "ViewportObserver") -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def detach(self, observer: "ViewportObserver") -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def notify(self) -> None:
        for observer in list(self._observers):
            observer.update()


class Page(Protocol):
    """What the viewer needs from the page it runs in."""

    container: ScrollContainer

    @property
    def fragment(self) -> str: ...

    async def set_fragment(self, fragment: str) -> None:
        """Push a new fragment and deliver the fragment-change event."""
        ...

    def replace_fragment(self, fragment: str) -> None:
        """Replace the fragment without a history entry or event."""
        ...

    def on_fragment_change(self, listener: FragmentListener) -> None: ...

    @property
    def content_root(self) -> Tag | None: ...

    def set_content_html(self, markup: str) -> Tag: ...

    def set_content_text(self, text: str) -> Tag: ...

    def element_box(self, element: Tag) -> tuple[float, float]:
        """Top and bottom of ``element`` in content coordinates."""
        ...

    def content_height(self) -> float: ...

    def emphasize(self, element: Tag, seconds: float) -> None: ...

    def set_toc_visible(self, visible: bool) -> None: ...


class HeadlessPage:
    """In-memory page with a line-based block layout.

    Each top-level block of the content pane is laid out below the previous
    one. Its height is ``line_height`` per wrapped text line plus
    ``block_gap``. Nested elements share the box of their top-level block.
    """

    def __init__(
        self,
        fragment: str = "",
        viewport_height: float = 800.0,
        line_height: float = 24.0,
        chars_per_line: int = 80,
        block_gap: float = 16.0,
    ):
        self._fragment = fragment.lstrip("#")
        self._listeners: list[FragmentListener] = []
        self._root: Tag | None = None
        self._boxes: dict[int, tuple[float, float]] = {}
        self._height = 0.0
        self.container = ScrollContainer(viewport_height)
        self.line_height = line_height
        self.chars_per_line = chars_per_line
        self.block_gap = block_gap
        self.toc_visible = False
        self.history: list[str] = [self._fragment]
        self.emphasized: list[Tag] = []

    # ============ LOCATION ============

    @property
    def fragment(self) -> str:
        return self._fragment

    async def set_fragment(self, fragment: str) -> None:
        fragment = fragment.lstrip("#")
        if fragment == self._fragment:
            return
        self._fragment = fragment
        self.history.append(fragment)
        del self.history[:-HISTORY_LIMIT]
        for listener in list(self._listeners):
            await listener(fragment)

    def replace_fragment(self, fragment: str) -> None:
        self._fragment = fragment.lstrip("#")
        self.history[-1] = self._fragment

    def on_fragment_change(self, listener: FragmentListener) -> None:
        self._listeners.append(listener)

    # ============ CONTENT ============

    @property
    def content_root(self) -> Tag | None:
        return self._root

    def set_content_html(self, markup: str) -> Tag:
        self._root = BeautifulSoup(markup, "html.parser")
        self.emphasized = []
        self._layout()
        return self._root

    def set_content_text(self, text: str) -> Tag:
        return self.set_content_html(f"<p>{html.escape(text, quote=False)}</p>")

    def _layout(self) -> None:
        self._boxes.clear()
        top = 0.0
        for block in self._root.children if self._root is not None else []:
            if not isinstance(block, Tag):
                continue
            lines = 0
            for text_line in block.get_text().split("\n"):
                lines += max(1, math.ceil(len(text_line) / self.chars_per_line))
            height = lines * self.line_height
            self._boxes[id(block)] = (top, top + height)
            top += height + self.block_gap
        self._height = top

    def element_box(self, element: Tag) -> tuple[float, float]:
        node: Tag | None = element
        while node is not None:
            box = self._boxes.get(id(node))
            if box is not None:
                return box
            node = node.parent
        return (0.0, 0.0)

    def content_height(self) -> float:
        return self._height

    # ============ DECORATION ============

    def emphasize(self, element: Tag, seconds: float) -> None:
        classes = element.get("class") or []
        if EMPHASIS_CLASS not in classes:
            element["class"] = [*classes, EMPHASIS_CLASS]
        self.emphasized.append(element)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; emphasis will not fade")
            return
        loop.call_later(seconds, self._fade, element)

    def _fade(self, element: Tag) -> None:
        self.emphasized = [e for e in self.emphasized if e is not element]
        classes = [c for c in element.get("class") or [] if c != EMPHASIS_CLASS]
        if classes:
            element["class"] = classes
        elif element.has_attr("class"):
            del element["class"]

    def set_toc_visible(self, visible: bool) -> None:
        self.toc_visible = visible
