"""Table-of-contents tracker.

Rebuilt after every document render: collects the rank 2-6 headings of the
content pane, gives each a stable id, and tracks which heading is currently
being read through a ``ViewportObserver``.
"""

import logging
from dataclasses import dataclass

from bs4 import Tag

from ...config import settings
from ..page import Page
from .observer import IntersectionRecord, ViewportObserver

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h2", "h3", "h4", "h5", "h6"]


@dataclass
class TocEntry:
    """One line of the table of contents.

    Attributes:
        heading_id: Existing id of the heading, else ``heading-<index>``
        level: Heading rank (2-6)
        text: Rendered text of the heading
        active: Whether this heading is the one currently in view
    """

    heading_id: str
    level: int
    text: str
    active: bool = False

    @property
    def indent(self) -> int:
        return self.level - 2

    @property
    def padding_left_px(self) -> int | None:
        """Inline indentation for nested headings (None for rank 2)."""
        if self.level <= 2:
            return None
        return 16 + self.indent * 12


def collect_headings(root: Tag | None) -> list[tuple[Tag, TocEntry]]:
    """Find rank 2-6 headings in document order and assign their ids.

    Headings without an ``id`` get ``heading-<index>`` where index is the
    position among the collected headings. The ids are written back into
    the tree so anchors resolve.
    """
    if root is None:
        return []
    collected: list[tuple[Tag, TocEntry]] = []
    for index, heading in enumerate(root.find_all(HEADING_TAGS)):
        if not heading.get("id"):
            heading["id"] = f"heading-{index}"
        entry = TocEntry(
            heading_id=heading["id"],
            level=int(heading.name[1]),
            text=heading.get_text(),
        )
        collected.append((heading, entry))
    return collected


class TocTracker:
    """Owns the table of contents of the active document."""

    def __init__(self, page: Page):
        self.page = page
        self.entries: list[TocEntry] = []
        self.visible = False
        self.active_heading_id: str | None = None
        self._headings: dict[str, Tag] = {}
        self._observer: ViewportObserver | None = None

    def disconnect(self) -> None:
        if self._observer is not None:
            self._observer.disconnect()
            self._observer = None

    def rebuild(self, root: Tag | None) -> list[TocEntry]:
        """Rebuild entries and observation for freshly rendered content.

        The previous observer is always disconnected first, so stale
        headings can never mark an entry active.
        """
        self.disconnect()
        self.entries = []
        self._headings = {}
        self.active_heading_id = None

        collected = collect_headings(root)
        if not collected:
            self.visible = False
            self.page.set_toc_visible(False)
            return self.entries

        for heading, entry in collected:
            self.entries.append(entry)
            self._headings[entry.heading_id] = heading

        self.visible = True
        self.page.set_toc_visible(True)

        self._observer = ViewportObserver(self.page, self._on_intersection)
        for heading, entry in collected:
            self._observer.observe(entry.heading_id, heading)
        self._observer.update()
        logger.debug(f"TOC rebuilt with {len(self.entries)} entries")
        return self.entries

    def _on_intersection(self, records: list[IntersectionRecord]) -> None:
        for record in records:
            if record.is_intersecting and record.target_id in self._headings:
                self.set_active(record.target_id)

    def set_active(self, heading_id: str) -> None:
        """Mark exactly one entry active."""
        for entry in self.entries:
            entry.active = False
        for entry in self.entries:
            if entry.heading_id == heading_id:
                entry.active = True
                self.active_heading_id = heading_id
                return

    def click(self, heading_id: str) -> bool:
        """Scroll a heading into view and replace the fragment with its id.

        Returns:
            False if the heading is not part of the current TOC
        """
        heading = self._headings.get(heading_id)
        if heading is None:
            return False
        top, _ = self.page.element_box(heading)
        offset = top - settings.header_height - settings.scroll_margin
        self.page.container.scroll_to(offset, smooth=True)
        self.page.replace_fragment(heading_id)
        return True
