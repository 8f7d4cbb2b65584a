"""FastAPI server for the documentation viewer."""

import logging
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from bs4 import BeautifulSoup
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api.deps import (
    get_renderer,
    get_session,
    get_sessions,
    get_store,
    sanitize_error_message,
)
from .api.sessions import SessionRegistry, ViewerSession
from .config import settings
from .engine.core.document import DocumentStore
from .engine.core.loader import load_documents
from .engine.errors import LoadError, RenderError
from .engine.navigation.router import paginate
from .engine.render import CodeHighlighter, MarkdownRenderer, Renderer, RendererGate, enhance_tables
from .engine.toc.tracker import collect_headings
from .engine.viewer import nav_sections, pagination_info, toc_entry_info
from .middleware import ViewerHeadersMiddleware
from .models import (
    EventRequest,
    HealthResponse,
    NavResponse,
    ReadyResponse,
    RenderedDocumentResponse,
    SessionCreateRequest,
    ViewState,
)

logger = logging.getLogger(__name__)

StoreLoader = Callable[[], Awaitable[DocumentStore]]

# ============ SENTRY INITIALIZATION ============


def _init_sentry() -> None:
    """Initialize Sentry if a DSN is configured."""
    if not settings.sentry_dsn:
        logger.debug("Sentry DSN not configured - error tracking disabled")
        return
    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.starlette import StarletteIntegration

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1 if settings.environment == "production" else 1.0,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
            ],
        )
        logger.info("Sentry error tracking initialized")
    except ImportError:
        logger.warning("Sentry DSN configured but sentry-sdk not installed")


# ============ APPLICATION ============


def create_app(
    loader: StoreLoader | None = None,
    renderer_factory: Callable[[], Renderer] = MarkdownRenderer,
) -> FastAPI:
    """Build the application.

    Args:
        loader: Coroutine function returning the published store
            (defaults to loading ``settings.manifest_url``)
        renderer_factory: Builds the markdown renderer off the event loop
    """
    loader = loader or load_documents

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting docviewer v{__version__}")

        if not settings.debug and settings.cors_allowed_origins == "*":
            logger.warning(
                "SECURITY WARNING: CORS is configured to allow all origins ('*'). "
                "Set DOCVIEWER_CORS_ALLOWED_ORIGINS to specific domains in production."
            )

        gate = RendererGate(renderer_factory)
        gate.start()
        app.state.gate = gate
        app.state.sessions = SessionRegistry()
        app.state.store = None
        app.state.load_error = None

        try:
            app.state.store = await loader()
        except LoadError as e:
            logger.error(f"Unable to load file list or content: {e}")
            app.state.load_error = e

        app.state.renderer = await gate.wait_ready()
        yield
        logger.info("Shutting down docviewer")

    app = FastAPI(
        title="docviewer",
        description="Documentation viewer - search, hash routing and table of contents",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(ViewerHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins_list != ["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    _register_exception_handlers(app)
    _register_routes(app)
    return app


# ============ EXCEPTION HANDLERS ============


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent response format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with sanitized error messages."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "An internal server error occurred. Please try again.",
            },
        )


# ============ ROUTES ============


def _render_document(store: DocumentStore, slug: str, renderer: Renderer) -> RenderedDocumentResponse:
    document = store.find_by_slug(slug)
    if document is None:
        raise HTTPException(status_code=404, detail=f"No document with slug '{slug}'")

    try:
        markup = renderer.render(document.content)
    except Exception as e:
        logger.warning(f"Rendering '{slug}' failed: {e}", exc_info=not isinstance(e, RenderError))
        raise HTTPException(status_code=503, detail=RenderError.user_message) from e

    root = BeautifulSoup(markup, "html.parser")
    CodeHighlighter().highlight_all(root)
    enhance_tables(root)
    toc = [toc_entry_info(entry) for _, entry in collect_headings(root)]

    return RenderedDocumentResponse(
        id=document.id,
        slug=document.slug,
        title=document.title,
        section=document.section,
        html=str(root),
        toc=toc,
        pagination=pagination_info(paginate(store, store.index_of(slug))),
    )


def _register_routes(app: FastAPI) -> None:
    # ============ HEALTH ENDPOINTS ============

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint (lightweight liveness check)."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(UTC),
        )

    @app.get("/ready", tags=["Health"])
    async def readiness_check(request: Request):
        """Readiness check - documents loaded and renderer available."""
        checks = {
            "documents": request.app.state.store is not None,
            "renderer": request.app.state.gate.ready,
        }
        all_ok = all(checks.values())
        response = ReadyResponse(
            status="ready" if all_ok else "not_ready",
            version=__version__,
            checks=checks,
        )
        return JSONResponse(
            content=response.model_dump(mode="json"),
            status_code=200 if all_ok else 503,
        )

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "docviewer",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    # ============ DOCUMENT ENDPOINTS ============

    @app.get("/v1/nav", response_model=NavResponse, tags=["Documents"])
    async def get_nav(store: Annotated[DocumentStore, Depends(get_store)]) -> NavResponse:
        """Navigation tree grouped by section."""
        return NavResponse(sections=nav_sections(store), total_documents=len(store))

    @app.get("/v1/docs/{slug}", response_model=RenderedDocumentResponse, tags=["Documents"])
    async def get_document(
        slug: str,
        store: Annotated[DocumentStore, Depends(get_store)],
        renderer: Annotated[Renderer, Depends(get_renderer)],
    ) -> RenderedDocumentResponse:
        """Rendered document with its table of contents and pagination."""
        return _render_document(store, slug, renderer)

    # ============ SESSION ENDPOINTS ============

    @app.post("/v1/sessions", response_model=ViewState, tags=["Sessions"])
    async def create_session(
        body: SessionCreateRequest,
        request: Request,
        sessions: Annotated[SessionRegistry, Depends(get_sessions)],
    ) -> ViewState:
        """Open a viewer session showing ``fragment`` (or the first document)."""
        session = await sessions.create(
            request.app.state.store,
            get_renderer(request),
            fragment=body.fragment,
            viewport_height=body.viewport_height,
            load_error=request.app.state.load_error,
        )
        return session.view()

    @app.get("/v1/sessions/{session_id}", response_model=ViewState, tags=["Sessions"])
    async def get_session_view(
        session: Annotated[ViewerSession, Depends(get_session)],
    ) -> ViewState:
        """Current view of a session."""
        return session.view()

    @app.post("/v1/sessions/{session_id}/events", response_model=ViewState, tags=["Sessions"])
    async def post_event(
        body: EventRequest,
        session: Annotated[ViewerSession, Depends(get_session)],
    ) -> ViewState:
        """Dispatch a UI event to a session and return the resulting view."""
        async with session.lock:
            try:
                await session.viewer.dispatch(body.event, body.params)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=sanitize_error_message(e)) from e
        return session.view()

    @app.delete("/v1/sessions/{session_id}", tags=["Sessions"])
    async def delete_session(
        session_id: str,
        sessions: Annotated[SessionRegistry, Depends(get_sessions)],
    ):
        """Close a session."""
        if not sessions.close(session_id):
            raise HTTPException(status_code=404, detail="Session not found")
        return {"success": True}


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_init_sentry()

app = create_app()


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "docviewer.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
