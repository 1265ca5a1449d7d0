"""Build report models.

A catalog build never fails on bad records; instead it reports what it
dropped so callers can surface it.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .artifact import ArtifactData, Platform


class SkippedRecord(BaseModel):
    """A record excluded from the catalog because its identifier did not parse."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(description="Raw identifier as received")
    reason: str = Field(description="Why the record was rejected")


class PlatformReport(BaseModel):
    """Outcome of building one platform's category.

    Attributes:
        platform: Platform this report covers.
        total: Number of input records.
        accepted: Number of entries in the resulting category.
        skipped: Records rejected by the version parser.
        duplicates: Identifiers whose extra copies were dropped.
        unknown: Accepted identifiers without a usable publication time.
    """

    model_config = ConfigDict(frozen=True)

    platform: Platform
    total: int = Field(default=0, ge=0)
    accepted: int = Field(default=0, ge=0)
    skipped: list[SkippedRecord] = Field(default_factory=list)
    duplicates: list[str] = Field(default_factory=list)
    unknown: list[str] = Field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class BuildReport(BaseModel):
    """Per-platform reports for one catalog build."""

    model_config = ConfigDict(frozen=True)

    as_of: datetime = Field(description="Reference time used for classification")
    windows: PlatformReport = Field(
        default_factory=lambda: PlatformReport(platform=Platform.WINDOWS)
    )
    linux: PlatformReport = Field(default_factory=lambda: PlatformReport(platform=Platform.LINUX))

    def for_platform(self, platform: Platform | str) -> PlatformReport:
        return getattr(self, Platform(platform).value)

    @property
    def skipped_total(self) -> int:
        return self.windows.skipped_count + self.linux.skipped_count


class CatalogBuild(BaseModel):
    """A built catalog together with its report."""

    model_config = ConfigDict(frozen=True)

    data: ArtifactData
    report: BuildReport
