"""Viewport intersection observation for headings.

A ``ViewportObserver`` watches a set of elements against an activation band
of its scroll container. The band is the container viewport shrunk by
``band_top`` of its height at the top and ``band_bottom`` at the bottom
(20% / 70% by default, i.e. the strip between 20% and 30% of the viewport
height). After each scroll the callback receives one record per target
whose intersection state changed, in observation order.
"""

from collections.abc import Callable
from dataclasses import dataclass

from bs4 import Tag

from ...config import settings
from ..page import Page


@dataclass(frozen=True)
class IntersectionRecord:
    """Change of intersection state for one observed element."""

    target_id: str
    is_intersecting: bool


IntersectionCallback = Callable[[list[IntersectionRecord]], None]


class ViewportObserver:
    """Intersection observer scoped to a page's scroll container."""

    def __init__(
        self,
        page: Page,
        callback: IntersectionCallback,
        band_top: float | None = None,
        band_bottom: float | None = None,
    ):
        self.page = page
        self.callback = callback
        self.band_top = settings.toc_band_top if band_top is None else band_top
        self.band_bottom = settings.toc_band_bottom if band_bottom is None else band_bottom
        self._targets: list[tuple[str, Tag]] = []
        self._state: dict[str, bool] = {}
        self.connected = False

    def observe(self, target_id: str, element: Tag) -> None:
        self._targets.append((target_id, element))
        if not self.connected:
            self.page.container.attach(self)
            self.connected = True

    def disconnect(self) -> None:
        self.page.container.detach(self)
        self._targets.clear()
        self._state.clear()
        self.connected = False

    def band(self) -> tuple[float, float]:
        """Activation band in content coordinates."""
        container = self.page.container
        top = container.scroll_top + container.height * self.band_top
        bottom = container.scroll_top + container.height * (1.0 - self.band_bottom)
        return top, bottom

    def update(self) -> None:
        """Re-evaluate every target and report the ones that changed."""
        if not self.connected:
            return
        band_top, band_bottom = self.band()
        records: list[IntersectionRecord] = []
        for target_id, element in self._targets:
            top, bottom = self.page.element_box(element)
            intersecting = top <= band_bottom and bottom >= band_top
            if self._state.get(target_id) != intersecting:
                self._state[target_id] = intersecting
                records.append(IntersectionRecord(target_id, intersecting))
        if records:
            self.callback(records)
