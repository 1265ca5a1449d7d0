"""Upstream record and parsed version models.

``UpstreamRecord`` is the input contract with the fetch layer;
``VersionDescriptor`` is what the version parser makes of one record.
"""

from datetime import UTC, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

_OLDEST = datetime.min.replace(tzinfo=UTC)


class UpstreamRecord(BaseModel):
    """One raw tag/release record as delivered by the upstream fetch layer.

    Attributes:
        version: Raw identifier (tag name or build number).
        published_at: Publication time as given upstream, may be missing or malformed.
        sha: Commit/tag identity the build was made from.
        recommended: Upstream explicitly marks this as the recommended build.
        critical: Upstream marks this as a critical update.
        artifact_url: Canonical upstream page for the build, if known.
    """

    model_config = ConfigDict(frozen=True)

    version: str = Field(validation_alias=AliasChoices("version", "raw"))
    published_at: str | datetime | None = Field(
        default=None, validation_alias=AliasChoices("published_at", "publishedAt")
    )
    sha: str = Field(default="", validation_alias=AliasChoices("sha", "sourceSha", "hash"))
    recommended: bool = Field(
        default=False, validation_alias=AliasChoices("recommended", "isUpstreamRecommended")
    )
    critical: bool = False
    artifact_url: str | None = Field(
        default=None, validation_alias=AliasChoices("artifact_url", "artifactPageUrl")
    )


class VersionDescriptor(BaseModel):
    """Structured, comparable form of a raw version identifier.

    Attributes:
        raw: Original identifier, preserved verbatim for identity and display.
        numeric_parts: Ordering key extracted from the identifier.
        published_at: Publication time (UTC), None when missing or unparseable.
        source_sha: Commit/tag identity.
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    numeric_parts: tuple[int, ...] = Field(min_length=1)
    published_at: datetime | None = None
    source_sha: str = ""

    @property
    def is_dated(self) -> bool:
        return self.published_at is not None

    def sort_key(self) -> tuple[tuple[int, ...], datetime, str]:
        """Ascending sort key: numeric parts, then publication time, then raw text.

        Undated versions sort as the oldest among equal numeric keys.
        """
        return (self.numeric_parts, self.published_at or _OLDEST, self.raw)
