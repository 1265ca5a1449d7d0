"""Core business logic for buildcat.

This package contains pure catalog logic with no external I/O:
- version_parser: Raw identifier parsing into comparable versions
- download_urls: Archive URL construction per platform
- classifier: Support-status classification over a platform's versions
- catalog_builder: Two-platform catalog assembly and build reports
- query: Filtering, sorting and paging of built catalogs
- snapshot: Atomic publication of refreshed catalogs
"""

from .catalog_builder import (
    assemble_catalog,
    build_catalog,
    build_platform_category,
    resolve_duplicates,
)
from .classifier import Classification, classify_versions, order_versions, pick_recommended
from .download_urls import build_artifact_url, build_download_urls, resolve_platform
from .query import platform_stats, query_catalog, sort_entries
from .snapshot import CatalogStore, RecordSource
from .version_parser import extract_numeric_parts, parse_record, parse_timestamp, parse_version

__all__ = [
    "CatalogStore",
    "Classification",
    "RecordSource",
    "assemble_catalog",
    "build_artifact_url",
    "build_catalog",
    "build_download_urls",
    "build_platform_category",
    "classify_versions",
    "extract_numeric_parts",
    "order_versions",
    "parse_record",
    "parse_timestamp",
    "parse_version",
    "pick_recommended",
    "platform_stats",
    "query_catalog",
    "resolve_duplicates",
    "resolve_platform",
    "sort_entries",
]
