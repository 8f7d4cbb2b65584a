"""Response headers for the viewer API.

Rendered documents and session views carry markup produced from raw
markdown, inline HTML included, so they are served with a content security
policy that forbids scripts, forms and framing. Documents and navigation
never change while the process runs and may be cached; session views are
per-client state and must not be.
"""

import logging
from uuid import uuid4

from ..config import settings

logger = logging.getLogger(__name__)

RENDERED_MARKUP_CSP = (
    "default-src 'none'; img-src 'self' https: data:; style-src 'self' 'unsafe-inline'; "
    "base-uri 'none'; form-action 'none'; frame-ancestors 'none'"
)

# Paths whose responses embed rendered document markup
MARKUP_PREFIXES = ("/v1/docs/", "/v1/sessions")

# Paths served from the published, read-only document store
STORE_PREFIXES = ("/v1/docs/", "/v1/nav")


def cache_control_for(path: str, status: int) -> str:
    """Cache-Control value for a response to ``path`` with ``status``."""
    if path.startswith("/v1/sessions"):
        return "no-store"
    if 200 <= status < 300 and path.startswith(STORE_PREFIXES):
        return f"public, max-age={settings.docs_cache_seconds}"
    return "no-cache"


class ViewerHeadersMiddleware:
    """
    Add request id, caching and content security headers.

    Pure ASGI middleware, so streamed bodies pass through untouched.
    Headers already set by a route are left alone.

    Headers added:
        - X-Request-Id: Unique request identifier for tracing
        - X-Content-Type-Options: nosniff
        - Cache-Control: per path, see ``cache_control_for``
        - Content-Security-Policy: on responses carrying rendered markup
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        request_id = uuid4().hex

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                status = message["status"]
                headers = list(message.get("headers", []))
                present = {name.lower() for name, _ in headers}

                extra = [
                    (b"x-request-id", request_id.encode()),
                    (b"x-content-type-options", b"nosniff"),
                    (b"cache-control", cache_control_for(path, status).encode()),
                ]
                if path.startswith(MARKUP_PREFIXES):
                    extra.append((b"content-security-policy", RENDERED_MARKUP_CSP.encode()))

                headers.extend((name, value) for name, value in extra if name not in present)
                message = {**message, "headers": headers}
                logger.debug(f"{scope.get('method')} {path} -> {status} [{request_id}]")
            await send(message)

        await self.app(scope, receive, send_with_headers)
