"""Markdown rendering and code highlighting collaborators.

The renderer is built off the event loop and published through
``RendererGate``. If it is not ready within the configured timeout the
viewer continues with ``UnavailableRenderer``, whose calls raise
``RenderError`` and end up as a message in the content pane.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from bs4 import BeautifulSoup, Tag
from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from ..config import settings
from .errors import RenderError, RendererTimeout

logger = logging.getLogger(__name__)

TABLE_CLASSES = ["table", "table-striped", "table-hover", "table-bordered", "table-sm"]


class Renderer(Protocol):
    """Markdown to HTML collaborator."""

    def render(self, text: str) -> str: ...

    def render_inline(self, text: str) -> str: ...


class MarkdownRenderer:
    """markdown-it renderer with raw HTML, linkify, tables and strikethrough."""

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark", {"html": True, "linkify": True}).enable(
            ["linkify", "table", "strikethrough"]
        )

    def render(self, text: str) -> str:
        try:
            return self._md.render(text)
        except Exception as e:
            raise RenderError(f"Markdown rendering failed: {e}") from e

    def render_inline(self, text: str) -> str:
        try:
            return self._md.renderInline(text)
        except Exception as e:
            raise RenderError(f"Inline rendering failed: {e}") from e


class UnavailableRenderer:
    """Stand-in used when the renderer never became ready."""

    def __init__(self, reason: str = "Markdown renderer is not available"):
        self.reason = reason

    def render(self, text: str) -> str:
        raise RenderError(self.reason)

    def render_inline(self, text: str) -> str:
        raise RenderError(self.reason)


class RendererGate:
    """Readiness future for the markdown renderer.

    ``start`` builds the renderer in a worker thread; ``wait_ready`` waits
    for it with a bounded timeout and degrades instead of blocking forever.
    """

    def __init__(self, factory: Callable[[], Renderer] = MarkdownRenderer):
        self._factory = factory
        self._future: asyncio.Future | None = None

    def start(self) -> asyncio.Future:
        if self._future is None:
            self._future = asyncio.ensure_future(asyncio.to_thread(self._factory))
        return self._future

    @property
    def ready(self) -> bool:
        return (
            self._future is not None
            and self._future.done()
            and not self._future.cancelled()
            and self._future.exception() is None
        )

    async def wait_ready(self, timeout: float | None = None) -> Renderer:
        """Renderer once ready, or ``UnavailableRenderer`` on timeout/failure."""
        timeout = settings.renderer_timeout_seconds if timeout is None else timeout
        future = self.start()
        try:
            return await asyncio.wait_for(asyncio.shield(future), timeout)
        except asyncio.TimeoutError:
            error = RendererTimeout(f"Markdown renderer not ready after {timeout}s")
            logger.warning(f"{error}; continuing without rendering")
            return UnavailableRenderer(str(error))
        except Exception as e:
            logger.error(f"Markdown renderer failed to initialize: {e}", exc_info=True)
        return UnavailableRenderer()


class CodeHighlighter:
    """Pygments highlighting of rendered ``pre > code`` blocks, in place."""

    def __init__(self) -> None:
        self._formatter = HtmlFormatter(nowrap=True)

    def highlight_element(self, element: Tag) -> bool:
        """Highlight one code element.

        Returns:
            False if no lexer could be found (element left untouched)
        """
        if element.get("data-highlighted") == "yes":
            return False
        code = element.get_text()
        try:
            lexer = self._lexer_for(element, code)
        except ClassNotFound:
            logger.debug("No lexer for code block; leaving it unhighlighted")
            return False

        try:
            markup = highlight(code, lexer, self._formatter)
        except Exception as e:
            logger.warning(f"Code highlighting failed: {e}")
            return False
        fragment = BeautifulSoup(markup, "html.parser")
        element.clear()
        for child in list(fragment.contents):
            element.append(child)
        element["data-highlighted"] = "yes"
        return True

    def _lexer_for(self, element: Tag, code: str):
        for css_class in element.get("class") or []:
            if css_class.startswith("language-"):
                try:
                    return get_lexer_by_name(css_class.removeprefix("language-"))
                except ClassNotFound:
                    break
        return guess_lexer(code)

    def highlight_all(self, root: Tag) -> int:
        """Highlight every code block under ``root``; returns how many changed."""
        count = 0
        for element in root.select("pre code"):
            if self.highlight_element(element):
                count += 1
        return count


def enhance_tables(root: Tag) -> None:
    """Add table styling classes and per-cell ``data-label`` attributes."""
    for table in root.find_all("table"):
        classes = table.get("class") or []
        table["class"] = classes + [c for c in TABLE_CLASSES if c not in classes]

        headers = table.find_all("th")
        if not headers:
            continue
        body = table.find("tbody")
        for row in body.find_all("tr") if body else []:
            for index, cell in enumerate(row.find_all("td")):
                if index < len(headers):
                    cell["data-label"] = headers[index].get_text().strip()
