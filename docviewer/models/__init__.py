"""Pydantic models for the documentation viewer.

This module re-exports all models. Import from submodules directly for
cleaner imports:

    from docviewer.models.enums import EventName
    from docviewer.models.viewer import ViewState
"""

# ============ DOCUMENT MODELS ============
from .documents import (
    DEFAULT_SECTION,
    DocumentInfo,
    ManifestEntry,
    NavResponse,
    SectionGroupInfo,
)

# ============ ENUMS ============
from .enums import EventName, SearchStatus, Theme

# ============ REQUEST MODELS ============
from .requests import EventRequest, SessionCreateRequest

# ============ RESPONSE MODELS ============
from .viewer import (
    HealthResponse,
    MatchedLineInfo,
    PaginationInfo,
    ReadyResponse,
    RenderedDocumentResponse,
    SearchPanelInfo,
    SearchResultInfo,
    TocEntryInfo,
    TocInfo,
    ViewState,
)

__all__ = [
    # Documents
    "DEFAULT_SECTION",
    "DocumentInfo",
    "ManifestEntry",
    "NavResponse",
    "SectionGroupInfo",
    # Enums
    "EventName",
    "SearchStatus",
    "Theme",
    # Requests
    "EventRequest",
    "SessionCreateRequest",
    # Responses
    "HealthResponse",
    "MatchedLineInfo",
    "PaginationInfo",
    "ReadyResponse",
    "RenderedDocumentResponse",
    "SearchPanelInfo",
    "SearchResultInfo",
    "TocEntryInfo",
    "TocInfo",
    "ViewState",
]
