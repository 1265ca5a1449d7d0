"""Pydantic data models for buildcat.

This package defines the data structures used throughout buildcat for:
- Upstream input records and parsed versions (UpstreamRecord, VersionDescriptor)
- The published catalog contract (ArtifactData, ArtifactEntry, ArtifactDownloadUrls)
- Build observability (BuildReport, PlatformReport, SkippedRecord)
- Catalog queries (ArtifactsQuery, QueryResult)

Catalog models are frozen and serialize to the JSON shape the web UI and
artifacts API consume.

Example:
    >>> from buildcat.models import ArtifactData
    >>> ArtifactData().to_wire()
    {'windows': {}, 'linux': {}}
"""

from .artifact import (
    DATED_STATUSES,
    ArtifactCategory,
    ArtifactData,
    ArtifactDownloadUrls,
    ArtifactEntry,
    Platform,
    SupportStatus,
    format_timestamp,
)
from .query import ArtifactsQuery, Pagination, PlatformStats, QueryResult
from .report import BuildReport, CatalogBuild, PlatformReport, SkippedRecord
from .version import UpstreamRecord, VersionDescriptor

__all__ = [
    "DATED_STATUSES",
    "ArtifactCategory",
    "ArtifactData",
    "ArtifactDownloadUrls",
    "ArtifactEntry",
    "ArtifactsQuery",
    "BuildReport",
    "CatalogBuild",
    "Pagination",
    "Platform",
    "PlatformReport",
    "PlatformStats",
    "QueryResult",
    "SkippedRecord",
    "SupportStatus",
    "UpstreamRecord",
    "VersionDescriptor",
    "format_timestamp",
]
