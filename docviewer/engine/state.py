"""Per-viewer state owned by the UI controller."""

from dataclasses import dataclass, field

from ..models.enums import SearchStatus, Theme
from .search.matcher import SearchResult


@dataclass
class SearchState:
    """Search overlay and the latest search outcome.

    Attributes:
        overlay_open: Whether the search overlay is shown
        query: Input text as typed
        terms: Normalized terms used for highlighting
        status: Outcome of the latest query
        results: Hits of the latest completed scan
        generation: Bumped on every keystroke; a pending scan whose
            generation is stale is dropped
    """

    overlay_open: bool = False
    query: str = ""
    terms: tuple[str, ...] = ()
    status: SearchStatus = SearchStatus.IDLE
    results: list[SearchResult] = field(default_factory=list)
    generation: int = 0

    def clear(self) -> None:
        self.query = ""
        self.terms = ()
        self.status = SearchStatus.IDLE
        self.results = []
        self.generation += 1


@dataclass
class ViewerState:
    """UI state that is not derived from the store, router or TOC."""

    search: SearchState = field(default_factory=SearchState)
    expanded_sections: set[str] = field(default_factory=set)
    toc_open: bool = False
    theme: Theme = Theme.LIGHT
    render_count: int = 0
    load_failed: bool = False
