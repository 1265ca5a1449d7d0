"""Read-side queries over a built catalog.

Filtering, sorting, paging and summary metadata exactly as the public
artifacts API serves them. Queries never modify the snapshot.
"""

import math
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from ..config import SupportPolicy
from ..models import (
    ArtifactCategory,
    ArtifactData,
    ArtifactEntry,
    ArtifactsQuery,
    Pagination,
    Platform,
    PlatformStats,
    QueryResult,
    SupportStatus,
)
from .version_parser import extract_numeric_parts

_OLDEST = datetime.min.replace(tzinfo=UTC)


def _version_key(entry: ArtifactEntry) -> tuple[tuple[int, ...], datetime, str]:
    return (extract_numeric_parts(entry.version), entry.published_at or _OLDEST, entry.version)


def _date_key(entry: ArtifactEntry) -> tuple[datetime, tuple[int, ...], str]:
    return (entry.published_at or _OLDEST, extract_numeric_parts(entry.version), entry.version)


def sort_entries(
    entries: Iterable[ArtifactEntry],
    sort_by: str = "version",
    sort_order: str = "desc",
) -> list[ArtifactEntry]:
    """Sort entries by parsed version or by publication date.

    Undated entries sort as the oldest.
    """
    key = _date_key if sort_by == "date" else _version_key
    return sorted(entries, key=key, reverse=sort_order != "asc")


def _matches(entry: ArtifactEntry, query: ArtifactsQuery) -> bool:
    if query.version is not None:
        # Exact lookups return the build even when it is end-of-life
        return entry.version == query.version
    if entry.eol and not query.include_eol:
        return False
    return query.status is None or entry.support_status is query.status


def platform_stats(category: ArtifactCategory, filtered: int = 0) -> PlatformStats:
    """Count a category's entries per support status."""
    counts = dict.fromkeys(SupportStatus, 0)
    for entry in category.values():
        counts[entry.support_status] += 1
    return PlatformStats(
        total=len(category),
        filtered=filtered,
        **{status.value: count for status, count in counts.items()},
    )


def _find(category: ArtifactCategory, predicate) -> dict[str, Any] | None:
    for entry in sort_entries(category.values()):
        if predicate(entry):
            return entry.to_wire()
    return None


def query_catalog(
    data: ArtifactData,
    query: ArtifactsQuery | None = None,
    policy: SupportPolicy | None = None,
) -> QueryResult:
    """Filter, sort and page a catalog snapshot.

    Args:
        data: Catalog snapshot
        query: Query options (defaults apply when None)
        policy: Policy used to describe the support schedule

    Returns:
        QueryResult with wire-shaped entries per platform and metadata
    """
    query = query or ArtifactsQuery()
    policy = policy or SupportPolicy()
    platforms = [query.platform] if query.platform else list(Platform)

    result_data: dict[str, dict[str, dict[str, Any]]] = {}
    recommended: dict[str, dict[str, Any] | None] = {}
    latest: dict[str, dict[str, Any] | None] = {}
    stats: dict[str, PlatformStats] = {}

    for platform in platforms:
        category = data.category(platform)
        matching = sort_entries(
            (entry for entry in category.values() if _matches(entry, query)),
            query.sort_by,
            query.sort_order,
        )
        page = matching[query.offset : query.offset + query.limit]
        result_data[platform.value] = {entry.version: entry.to_wire() for entry in page}
        stats[platform.value] = platform_stats(category, filtered=len(matching))
        recommended[platform.value] = _find(category, lambda e: e.recommended)
        latest[platform.value] = _find(
            category, lambda e: e.support_status is SupportStatus.LATEST
        )

    first = stats[platforms[0].value]
    pagination = Pagination(
        limit=query.limit,
        offset=query.offset,
        filtered=first.filtered,
        total=first.total,
        current_page=query.offset // query.limit + 1,
        total_pages=math.ceil(first.filtered / query.limit),
    )

    return QueryResult(
        data=result_data,
        platforms=platforms,
        recommended=recommended,
        latest=latest,
        stats=stats,
        pagination=pagination,
        filters=query.model_dump(mode="json", exclude={"limit", "offset"}),
        support_schedule=policy.support_schedule(),
    )
