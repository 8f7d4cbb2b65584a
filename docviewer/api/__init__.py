"""API utilities and dependencies.

This package contains shared API utilities:
- deps: FastAPI dependency injection functions
- sessions: Server-side viewer sessions
"""

from .deps import (
    get_renderer,
    get_session,
    get_sessions,
    get_store,
    sanitize_error_message,
)
from .sessions import SessionRegistry, ViewerSession

__all__ = [
    "get_store",
    "get_renderer",
    "get_sessions",
    "get_session",
    "sanitize_error_message",
    "SessionRegistry",
    "ViewerSession",
]
