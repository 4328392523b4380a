"""
Pydantic models for HAR (HTTP Archive) captures.

These models represent the structure of a browser network log before
normalization into report rows. Validation is lenient: every field the
engine does not strictly need is optional, and unknown fields are kept.

Entries are left as raw dicts on HarLog so that one malformed entry is
rejected on its own instead of failing the whole document.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HarTimings(BaseModel):
    """Per-phase timings in ms. -1 (or absent) means the phase did not apply."""

    model_config = ConfigDict(extra="allow")

    blocked: Optional[float] = None
    dns: Optional[float] = None
    connect: Optional[float] = None
    ssl: Optional[float] = None
    send: Optional[float] = None
    wait: Optional[float] = None
    receive: Optional[float] = None


class HarContent(BaseModel):
    """Response body description."""

    model_config = ConfigDict(extra="allow")

    size: Optional[float] = Field(None, description="Uncompressed body size in bytes")
    mimeType: Optional[str] = None


class HarRequest(BaseModel):
    """Request line of an entry."""

    model_config = ConfigDict(extra="allow")

    method: Optional[str] = None
    url: str = Field(..., description="Absolute request URL")


class HarResponse(BaseModel):
    """Response status and content of an entry."""

    model_config = ConfigDict(extra="allow")

    status: Optional[int] = None
    content: Optional[HarContent] = None


class HarEntry(BaseModel):
    """One request/response pair in the log."""

    model_config = ConfigDict(extra="allow")

    request: HarRequest
    response: Optional[HarResponse] = None
    time: Optional[float] = Field(None, description="Total elapsed time in ms")
    timings: Optional[HarTimings] = None
    startedDateTime: Optional[str] = None


class HarPageTimings(BaseModel):
    """Page-level load events in ms relative to navigation start."""

    model_config = ConfigDict(extra="allow")

    onContentLoad: Optional[float] = None
    onLoad: Optional[float] = None


class HarPage(BaseModel):
    """A page (navigation) declared in the log."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    pageTimings: Optional[HarPageTimings] = None


class HarLog(BaseModel):
    """The 'log' object of a HAR document."""

    model_config = ConfigDict(extra="allow")

    version: Optional[str] = None
    entries: List[Any] = Field(..., description="Raw entries, validated one at a time")
    pages: List[Any] = Field(default_factory=list, description="Raw pages, validated one at a time")

    @field_validator("pages", mode="before")
    @classmethod
    def null_pages_as_empty(cls, v: Any) -> Any:
        """Treat an explicit null as no declared pages."""
        return [] if v is None else v


class HarDocument(BaseModel):
    """Root of a HAR document."""

    model_config = ConfigDict(extra="allow")

    log: HarLog
