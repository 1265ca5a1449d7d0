"""Catalog assembly from upstream record batches.

Turns the raw records of each platform into the published two-platform
catalog. The build is a pure, synchronous transformation: every call returns
a brand-new snapshot and never touches a previous one.

Bad records never fail a build. Identifiers without a numeric segment are
skipped, duplicate identifiers are resolved by the configured policy, and
both are listed in the build report.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from ..config import DuplicatePolicy, SupportPolicy
from ..constants import DEFAULT_BASE_URL
from ..errors import VersionParseError
from ..models import (
    ArtifactCategory,
    ArtifactData,
    ArtifactEntry,
    BuildReport,
    CatalogBuild,
    Platform,
    PlatformReport,
    SkippedRecord,
    UpstreamRecord,
    VersionDescriptor,
)
from .classifier import classify_versions, normalize_as_of
from .download_urls import build_artifact_url, build_download_urls, resolve_platform
from .version_parser import parse_record

logger = logging.getLogger(__name__)

RecordInput = UpstreamRecord | Mapping[str, Any]
Parsed = tuple[UpstreamRecord, VersionDescriptor]


def _coerce_record(item: RecordInput) -> UpstreamRecord:
    if isinstance(item, UpstreamRecord):
        return item
    return UpstreamRecord.model_validate(item)


def _raw_identifier(item: RecordInput) -> str:
    """Best-effort identifier for a record that failed validation."""
    if isinstance(item, Mapping):
        value = item.get("version", item.get("raw"))
        if value is not None:
            return str(value)
    return "<missing>"


def _replaces(
    current: VersionDescriptor, candidate: VersionDescriptor, rule: DuplicatePolicy
) -> bool:
    """Decide whether a duplicate candidate replaces the copy already kept."""
    if rule is DuplicatePolicy.FIRST_SEEN:
        return False
    if rule is DuplicatePolicy.LAST_SEEN:
        return True
    if candidate.published_at is None:
        return current.published_at is None
    if current.published_at is None:
        return True
    return candidate.published_at >= current.published_at


def resolve_duplicates(
    parsed: Iterable[Parsed],
    rule: DuplicatePolicy = DuplicatePolicy.LATEST_PUBLISHED,
) -> tuple[dict[str, Parsed], list[str]]:
    """Keep one record per raw identifier.

    Args:
        parsed: Records with their parsed versions, in input order
        rule: Duplicate resolution policy

    Returns:
        Tuple of (kept records by identifier, identifiers of dropped copies)
    """
    kept: dict[str, Parsed] = {}
    dropped: list[str] = []
    for item in parsed:
        raw = item[1].raw
        current = kept.get(raw)
        if current is None:
            kept[raw] = item
            continue
        dropped.append(raw)
        if _replaces(current[1], item[1], rule):
            kept[raw] = item
    return kept, dropped


def build_platform_category(
    records: Iterable[RecordInput],
    platform: Platform | str,
    policy: SupportPolicy,
    *,
    as_of: datetime,
    base_url: str = DEFAULT_BASE_URL,
) -> tuple[ArtifactCategory, PlatformReport]:
    """Build one platform's category from its upstream records.

    Args:
        records: Upstream records for this platform
        platform: Target platform
        policy: Support policy
        as_of: Reference time for classification
        base_url: Artifact host root for download URLs

    Returns:
        Tuple of (category, report)

    Raises:
        UnknownPlatformError: If the platform is not recognized
    """
    platform = resolve_platform(platform)

    total = 0
    skipped: list[SkippedRecord] = []
    parsed: list[Parsed] = []
    for item in records:
        total += 1
        try:
            record = _coerce_record(item)
            parsed.append((record, parse_record(record)))
        except ValidationError as e:
            reason = f"invalid record: {e.error_count()} validation error(s)"
            skipped.append(SkippedRecord(version=_raw_identifier(item), reason=reason))
        except VersionParseError as e:
            skipped.append(SkippedRecord(version=record.version, reason=str(e)))

    kept, duplicates = resolve_duplicates(parsed, policy.duplicate_policy)
    flagged = {raw for raw, (record, _) in kept.items() if record.recommended}
    classes = classify_versions(
        (version for _, version in kept.values()),
        policy,
        flagged=flagged,
        as_of=as_of,
    )

    critical_versions = set(policy.critical_versions)
    category: dict[str, ArtifactEntry] = {}
    for raw, (record, version) in kept.items():
        outcome = classes[raw]
        category[raw] = ArtifactEntry(
            version=raw,
            recommended=outcome.recommended,
            critical=record.critical or raw in critical_versions,
            download_urls=build_download_urls(version, platform, base_url),
            artifact_url=record.artifact_url or build_artifact_url(version, platform, base_url),
            published_at=version.published_at,
            support_status=outcome.status,
            support_ends=outcome.support_ends,
        )

    report = PlatformReport(
        platform=platform,
        total=total,
        accepted=len(category),
        skipped=skipped,
        duplicates=duplicates,
        unknown=sorted(raw for raw, (_, version) in kept.items() if not version.is_dated),
    )
    _log_report(report)
    return category, report


def _log_report(report: PlatformReport) -> None:
    logger.info(
        "%s: %d artifacts from %d records (%d skipped, %d duplicates, %d undated)",
        report.platform.value,
        report.accepted,
        report.total,
        report.skipped_count,
        len(report.duplicates),
        len(report.unknown),
    )
    for entry in report.skipped:
        logger.warning("%s: skipped %r: %s", report.platform.value, entry.version, entry.reason)
    if report.duplicates:
        logger.warning(
            "%s: dropped duplicate records for %s",
            report.platform.value,
            ", ".join(sorted(set(report.duplicates))),
        )


def assemble_catalog(
    windows_records: Iterable[RecordInput],
    linux_records: Iterable[RecordInput],
    policy: SupportPolicy | None = None,
    *,
    as_of: datetime | None = None,
    base_url: str = DEFAULT_BASE_URL,
) -> CatalogBuild:
    """Build the full catalog and its report.

    Args:
        windows_records: Upstream records for Windows
        linux_records: Upstream records for Linux
        policy: Support policy (defaults apply when None)
        as_of: Reference time for classification (defaults to now, UTC)
        base_url: Artifact host root for download URLs

    Returns:
        CatalogBuild with the new snapshot and per-platform report
    """
    policy = policy or SupportPolicy()
    as_of = normalize_as_of(as_of)

    windows, windows_report = build_platform_category(
        windows_records, Platform.WINDOWS, policy, as_of=as_of, base_url=base_url
    )
    linux, linux_report = build_platform_category(
        linux_records, Platform.LINUX, policy, as_of=as_of, base_url=base_url
    )
    return CatalogBuild(
        data=ArtifactData(windows=windows, linux=linux),
        report=BuildReport(as_of=as_of, windows=windows_report, linux=linux_report),
    )


def build_catalog(
    windows_records: Iterable[RecordInput],
    linux_records: Iterable[RecordInput],
    policy: SupportPolicy | None = None,
    *,
    as_of: datetime | None = None,
    base_url: str = DEFAULT_BASE_URL,
) -> ArtifactData:
    """Build the two-platform catalog.

    Total over data: empty inputs give empty categories and bad records are
    skipped (see ``assemble_catalog`` for the report).
    """
    return assemble_catalog(
        windows_records, linux_records, policy, as_of=as_of, base_url=base_url
    ).data
