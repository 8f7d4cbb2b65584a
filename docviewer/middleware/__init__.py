"""ASGI middleware for the viewer service."""

from .viewer_headers import ViewerHeadersMiddleware, cache_control_for

__all__ = [
    "ViewerHeadersMiddleware",
    "cache_control_for",
]
