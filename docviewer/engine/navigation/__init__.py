"""Hash routing, pagination and deep links into rendered documents."""

from .deeplink import DeepLinkResult, approximate_offset, find_match_element, scroll_to_match
from .router import NavigationRouter, Pagination, paginate

__all__ = [
    "NavigationRouter",
    "Pagination",
    "paginate",
    "DeepLinkResult",
    "approximate_offset",
    "find_match_element",
    "scroll_to_match",
]
