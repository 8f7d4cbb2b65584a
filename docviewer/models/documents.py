"""Manifest and navigation models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SECTION = "General"


class ManifestEntry(BaseModel):
    """One document descriptor from the manifest."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Document title")
    path: str = Field(..., min_length=1, description="Location of the markdown source")
    section: str = Field(
        default=DEFAULT_SECTION,
        alias="doc-section",
        description="Navigation grouping label",
    )

    @field_validator("section", mode="before")
    @classmethod
    def _default_section(cls, value: str | None) -> str:
        return value or DEFAULT_SECTION


class DocumentInfo(BaseModel):
    """A document as listed in the navigation panel."""

    id: str = Field(..., description="Document ID")
    title: str = Field(..., description="Document title")
    slug: str = Field(..., description="Hash-routing key")
    section: str = Field(..., description="Section label")
    path: str = Field(..., description="Source path")
    active: bool = Field(default=False, description="Whether this is the active document")


class SectionGroupInfo(BaseModel):
    """A navigation section and its documents, in manifest order."""

    label: str = Field(..., description="Section label")
    documents: list[DocumentInfo] = Field(default_factory=list)
    expanded: bool = Field(default=False, description="Whether the section is expanded")


class NavResponse(BaseModel):
    """Navigation tree for the whole manifest."""

    sections: list[SectionGroupInfo] = Field(default_factory=list)
    total_documents: int = Field(default=0, ge=0)
