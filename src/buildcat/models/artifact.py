"""Catalog models served to API and UI consumers.

Field names and aliases here are the published JSON contract: the web UI and
the artifacts API read ``download_urls``, ``artifact_url``, ``published_at``,
``supportStatus``, ``supportEnds`` and ``eol`` verbatim. All models are frozen
so a built catalog can be shared between readers without copying.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)


class Platform(str, Enum):
    """Platforms artifacts are published for."""

    WINDOWS = "windows"
    LINUX = "linux"


class SupportStatus(str, Enum):
    """Lifecycle classification of an artifact version."""

    RECOMMENDED = "recommended"
    LATEST = "latest"
    ACTIVE = "active"
    DEPRECATED = "deprecated"
    EOL = "eol"
    UNKNOWN = "unknown"


# Statuses that carry a support end date
DATED_STATUSES = frozenset({SupportStatus.ACTIVE, SupportStatus.DEPRECATED, SupportStatus.EOL})


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with millisecond precision.

    Matches the ``toISOString()`` form the web consumers already parse,
    e.g. ``2024-05-01T12:00:00.000Z``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class ArtifactDownloadUrls(BaseModel):
    """Archive download links for one artifact build."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    zip: str = Field(description="Zip (or primary archive) download URL")
    seven_zip: str = Field(alias="7z", description="7z (or platform bundle) download URL")


class ArtifactEntry(BaseModel):
    """One version's resolved catalog record.

    ``eol`` is computed from ``support_status`` so the two can never disagree.

    Attributes:
        version: Raw upstream identifier, also the catalog key.
        recommended: Advisory flag, set on the single recommended build.
        critical: Advisory flag for builds upstream marks as critical updates.
        download_urls: Archive URLs for this build.
        artifact_url: Canonical upstream page for the build.
        published_at: Publication time, None when upstream gave none usable.
        support_status: Lifecycle classification.
        support_ends: End of support, only for active/deprecated/eol builds.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str = Field(description="Raw upstream version identifier")
    recommended: bool = Field(default=False, description="Recommended build flag")
    critical: bool = Field(default=False, description="Critical update flag")
    download_urls: ArtifactDownloadUrls = Field(description="Archive download URLs")
    artifact_url: str = Field(description="Canonical upstream page for this build")
    published_at: datetime | None = Field(default=None, description="Publication timestamp")
    support_status: SupportStatus = Field(
        default=SupportStatus.UNKNOWN, alias="supportStatus", description="Support status"
    )
    support_ends: datetime | None = Field(
        default=None, alias="supportEnds", description="End of support"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def eol(self) -> bool:
        """True iff the build is end-of-life."""
        return self.support_status is SupportStatus.EOL

    @model_validator(mode="after")
    def validate_support_ends(self) -> Self:
        """Only builds with a time-based lifecycle may carry an end date."""
        if self.support_ends is not None and self.support_status not in DATED_STATUSES:
            raise ValueError(
                f"supportEnds is not allowed for status '{self.support_status.value}'"
            )
        return self

    @field_serializer("published_at", "support_ends", when_used="json")
    def serialize_timestamp(self, value: datetime | None) -> str | None:
        return format_timestamp(value) if value is not None else None

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready dict consumers receive."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Version identifier -> entry. Keys are unique; order carries no meaning.
ArtifactCategory = Mapping[str, ArtifactEntry]


class ArtifactData(BaseModel):
    """Complete two-platform catalog snapshot.

    Categories are read-only views: a published snapshot cannot be changed
    through the mapping any more than through its frozen entries.
    """

    model_config = ConfigDict(frozen=True)

    windows: ArtifactCategory = Field(default_factory=dict, validate_default=True)
    linux: ArtifactCategory = Field(default_factory=dict, validate_default=True)

    @field_validator("windows", "linux", mode="after")
    @classmethod
    def freeze_category(cls, value: ArtifactCategory) -> ArtifactCategory:
        return MappingProxyType(dict(value))

    @field_serializer("windows", "linux", mode="wrap")
    def serialize_category(
        self, value: ArtifactCategory, handler: SerializerFunctionWrapHandler
    ) -> dict[str, Any]:
        return handler(dict(value))

    def category(self, platform: Platform | str) -> ArtifactCategory:
        """Return the category for a platform."""
        return getattr(self, Platform(platform).value)

    def is_empty(self) -> bool:
        return not self.windows and not self.linux

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready catalog dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize the catalog to its JSON wire form."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
