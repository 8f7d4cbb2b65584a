"""FastAPI dependency injection functions.

This module contains shared dependencies for API endpoints:
- Access to the loaded document store and renderer
- Viewer session lookup
- Error sanitization
"""

import logging

from fastapi import HTTPException, Request

from ..engine.core.document import DocumentStore
from ..engine.render import Renderer, UnavailableRenderer
from .sessions import SessionRegistry, ViewerSession

logger = logging.getLogger(__name__)


# ============ ERROR SANITIZATION ============


def sanitize_error_message(error: Exception) -> str:
    """
    Sanitize error messages to prevent information disclosure.

    Returns a generic message for unexpected errors while preserving
    useful information for known error types.
    """
    error_str = str(error)

    # Known safe error patterns that can be returned to client
    safe_patterns = [
        "Invalid parameter",
        "No document with slug",
        "Session not found",
        "Documentation not loaded",
    ]

    for pattern in safe_patterns:
        if pattern.lower() in error_str.lower():
            return error_str

    # Log the actual error for debugging
    logger.error(f"Viewer event error: {error}", exc_info=True)

    # Return generic message for unknown errors
    return "An error occurred processing your request. Please try again."


# ============ APP STATE ============


def get_store(request: Request) -> DocumentStore:
    """Loaded document store, or 503 while loading failed."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Documentation not loaded")
    return store


def get_renderer(request: Request) -> Renderer:
    return getattr(request.app.state, "renderer", None) or UnavailableRenderer()


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_session(session_id: str, request: Request) -> ViewerSession:
    session = get_sessions(request).get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session
