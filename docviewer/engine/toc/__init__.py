"""Table-of-contents tracking for the active document."""

from .observer import IntersectionRecord, ViewportObserver
from .tracker import HEADING_TAGS, TocEntry, TocTracker, collect_headings

__all__ = [
    "HEADING_TAGS",
    "IntersectionRecord",
    "TocEntry",
    "TocTracker",
    "ViewportObserver",
    "collect_headings",
]
