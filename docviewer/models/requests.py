"""Request models for the viewer API."""

from typing import Any

from pydantic import BaseModel, Field

from .enums import EventName


class EventRequest(BaseModel):
    """A UI event delivered to a viewer session."""

    event: EventName = Field(..., description="The event to dispatch")
    params: dict[str, Any] = Field(default_factory=dict, description="Event parameters")


class SessionCreateRequest(BaseModel):
    """Parameters for opening a viewer session."""

    fragment: str = Field(default="", description="Initial location fragment (slug)")
    viewport_height: float = Field(default=800.0, gt=0, description="Scroll container height")
