"""Base infrastructure for viewer event handlers.

Each handler receives the event parameters and a ViewerContext with the
components it may drive. Handlers mutate viewer state; the caller builds
the resulting view afterwards.
"""

from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from ..core.document import DocumentStore
from ..navigation.router import NavigationRouter
from ..page import Page
from ..preferences import PreferenceStore
from ..state import ViewerState
from ..toc.tracker import TocTracker


@dataclass
class ViewerContext:
    """Context object passed to all handlers.

    Decouples handlers from the DocViewer class.
    """

    store: DocumentStore
    page: Page
    router: NavigationRouter
    toc: TocTracker
    state: ViewerState
    preferences: PreferenceStore


# Type alias for handler functions
HandlerFunc = Callable[
    [dict[str, Any], ViewerContext],
    Coroutine[Any, Any, None],
]
