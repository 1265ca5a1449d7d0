"""Query models for reading a built catalog.

Mirrors the parameters and metadata of the public artifacts API so the same
filtering, sorting and paging rules apply wherever the catalog is read.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from ..constants import QUERY_DEFAULT_LIMIT, QUERY_MAX_LIMIT
from .artifact import Platform, SupportStatus


class ArtifactsQuery(BaseModel):
    """Filter, sort and paging options for a catalog query."""

    platform: Platform | None = Field(default=None, description="Restrict to one platform")
    version: str | None = Field(default=None, description="Exact version to look up")
    status: SupportStatus | None = Field(default=None, description="Only this support status")
    include_eol: bool = Field(default=False, description="Include end-of-life builds")
    sort_by: Literal["version", "date"] = "version"
    sort_order: Literal["asc", "desc"] = "desc"
    limit: int = Field(default=QUERY_DEFAULT_LIMIT, description="Page size")
    offset: int = Field(default=0, ge=0, description="Entries to skip")

    @field_validator("limit")
    @classmethod
    def clamp_limit(cls, value: int) -> int:
        """Clamp page size to the range the API serves."""
        return max(1, min(value, QUERY_MAX_LIMIT))


class PlatformStats(BaseModel):
    """Status counts for one platform."""

    total: int = 0
    filtered: int = 0
    recommended: int = 0
    latest: int = 0
    active: int = 0
    deprecated: int = 0
    eol: int = 0
    unknown: int = 0


class Pagination(BaseModel):
    """Paging metadata for the first selected platform."""

    limit: int
    offset: int
    filtered: int
    total: int
    current_page: int
    total_pages: int


class QueryResult(BaseModel):
    """Query output: wire-shaped entries plus metadata."""

    data: dict[str, dict[str, dict[str, Any]]] = Field(default_factory=dict)
    platforms: list[Platform] = Field(default_factory=list)
    recommended: dict[str, dict[str, Any] | None] = Field(default_factory=dict)
    latest: dict[str, dict[str, Any] | None] = Field(default_factory=dict)
    stats: dict[str, PlatformStats] = Field(default_factory=dict)
    pagination: Pagination
    filters: dict[str, Any] = Field(default_factory=dict)
    support_schedule: dict[str, str] = Field(default_factory=dict)
