"""Response models describing what a viewer shows."""

from datetime import datetime

from pydantic import BaseModel, Field

from .documents import SectionGroupInfo
from .enums import SearchStatus, Theme


class TocEntryInfo(BaseModel):
    """One table-of-contents line."""

    heading_id: str = Field(..., description="Anchor id of the heading")
    level: int = Field(..., ge=2, le=6, description="Heading rank")
    text: str = Field(..., description="Heading text")
    indent: int = Field(..., ge=0, description="Nesting depth relative to rank 2")
    padding_left_px: int | None = Field(default=None, description="Inline indentation")
    active: bool = Field(default=False, description="Whether this heading is in view")


class TocInfo(BaseModel):
    """Table-of-contents panel."""

    visible: bool = Field(default=False, description="False hides the panel entirely")
    open: bool = Field(default=False, description="Panel toggled open on small screens")
    entries: list[TocEntryInfo] = Field(default_factory=list)


class PaginationInfo(BaseModel):
    """Previous/next controls."""

    index: int = Field(..., description="Manifest index of the active document, -1 if unresolved")
    previous_enabled: bool = False
    next_enabled: bool = False
    previous_slug: str | None = None
    next_slug: str | None = None


class MatchedLineInfo(BaseModel):
    """A content line that matched every query term."""

    line_index: int = Field(..., ge=0)
    line_text: str


class SearchResultInfo(BaseModel):
    """A search hit ready for display."""

    document_id: str
    slug: str
    title: str
    title_html: str = Field(..., description="Title with highlighted terms")
    snippet_html: str = Field(..., description="First matched line or title-match hint")
    title_matched: bool
    matched_lines: list[MatchedLineInfo] = Field(default_factory=list)


class SearchPanelInfo(BaseModel):
    """Search overlay state."""

    overlay_open: bool = False
    query: str = ""
    status: SearchStatus = SearchStatus.IDLE
    message: str | None = Field(default=None, description="Hint, progress or empty-result text")
    results: list[SearchResultInfo] = Field(default_factory=list)


class RenderedDocumentResponse(BaseModel):
    """A rendered document with its table of contents."""

    id: str
    slug: str
    title: str
    section: str
    html: str
    toc: list[TocEntryInfo] = Field(default_factory=list)
    pagination: PaginationInfo


class ViewState(BaseModel):
    """Everything a viewer session currently displays."""

    session_id: str | None = None
    fragment: str = ""
    active_slug: str = ""
    active_heading_id: str | None = None
    theme: Theme = Theme.LIGHT
    content_html: str = ""
    render_count: int = Field(default=0, ge=0)
    scroll_top: float = Field(default=0.0, ge=0.0)
    nav: list[SectionGroupInfo] = Field(default_factory=list)
    pagination: PaginationInfo
    toc: TocInfo = Field(default_factory=TocInfo)
    search: SearchPanelInfo = Field(default_factory=SearchPanelInfo)


class HealthResponse(BaseModel):
    """Liveness check response."""

    status: str
    version: str
    timestamp: datetime


class ReadyResponse(BaseModel):
    """Readiness check response."""

    status: str
    version: str
    checks: dict[str, bool] = Field(default_factory=dict)
