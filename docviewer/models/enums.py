"""Enumeration types for the documentation viewer."""

from enum import StrEnum


class EventName(StrEnum):
    """UI events a viewer reacts to."""

    HASHCHANGE = "hashchange"
    SEARCH_INPUT = "search_input"
    SEARCH_SELECT = "search_select"
    SEARCH_OPEN = "search_open"
    SEARCH_CLOSE = "search_close"
    NAV_CLICK = "nav_click"
    SECTION_TOGGLE = "section_toggle"
    NEXT = "next"
    PREVIOUS = "previous"
    TOC_CLICK = "toc_click"
    TOC_TOGGLE = "toc_toggle"
    SCROLL = "scroll"
    KEYDOWN = "keydown"
    THEME_TOGGLE = "theme_toggle"


class SearchStatus(StrEnum):
    """Outcome of a search request."""

    IDLE = "idle"  # Nothing typed yet
    TOO_SHORT = "too_short"  # Below the minimum query length, no scan
    SEARCHING = "searching"  # Scan scheduled, indicator shown
    NO_RESULTS = "no_results"
    RESULTS = "results"


class Theme(StrEnum):
    """Persisted colour scheme preference."""

    LIGHT = "light"
    DARK = "dark"
