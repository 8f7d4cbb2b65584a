"""Server-side viewer sessions.

Each session is a ``DocViewer`` driving its own ``HeadlessPage``. All
sessions share the published document store and the renderer. Events for
one session are applied one at a time.
"""

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from uuid import uuid4

from ..config import settings
from ..engine.core.document import DocumentStore
from ..engine.errors import LoadError
from ..engine.page import HeadlessPage
from ..engine.preferences import JsonPreferenceStore, MemoryPreferenceStore, PreferenceStore
from ..engine.render import CodeHighlighter, Renderer
from ..engine.viewer import DocViewer
from ..models import ViewState

logger = logging.getLogger(__name__)


@dataclass
class ViewerSession:
    """A viewer and the lock serializing its events."""

    id: str
    viewer: DocViewer
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def view(self) -> ViewState:
        state = self.viewer.snapshot()
        state.session_id = self.id
        return state


class SessionRegistry:
    """Bounded set of live sessions; the oldest is evicted when full."""

    def __init__(self, max_sessions: int | None = None):
        self.max_sessions = max_sessions or settings.max_sessions
        self._sessions: OrderedDict[str, ViewerSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def _preferences(self) -> PreferenceStore:
        if settings.preferences_path:
            return JsonPreferenceStore(settings.preferences_path)
        return MemoryPreferenceStore()

    async def create(
        self,
        store: DocumentStore | None,
        renderer: Renderer,
        fragment: str = "",
        viewport_height: float = 800.0,
        load_error: LoadError | None = None,
    ) -> ViewerSession:
        """Open a session and render its initial document."""
        page = HeadlessPage(fragment=fragment, viewport_height=viewport_height)
        viewer = DocViewer(
            store,
            page,
            renderer=renderer,
            highlighter=CodeHighlighter(),
            preferences=self._preferences(),
            load_error=load_error,
        )
        session = ViewerSession(id=uuid4().hex, viewer=viewer)
        async with session.lock:
            await viewer.start()

        self._sessions[session.id] = session
        while len(self._sessions) > self.max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            evicted.viewer.toc.disconnect()
            logger.info(f"Evicted viewer session {evicted_id}")
        logger.debug(f"Opened viewer session {session.id} at '{fragment}'")
        return session

    def get(self, session_id: str) -> ViewerSession | None:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.viewer.toc.disconnect()
        return True
