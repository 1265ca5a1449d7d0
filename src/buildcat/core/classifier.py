"""Support-status classification for one platform's versions.

Status depends on a version's rank among its peers, so classification is a
whole-list pass rather than a per-record function. Ordering is newest first:
numeric parts, then publication time, then raw identifier, which makes every
input deterministic.

Only dated versions are ranked. A version without a usable publication time
is ``unknown`` and carries no end date, unless nothing on the platform is
dated: then the newest identifier is ``latest`` and the recommended fallback.
"""

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from ..config import SupportPolicy
from ..models import SupportStatus, VersionDescriptor

logger = logging.getLogger(__name__)

_LATEST_END = datetime.max.replace(tzinfo=UTC)


@dataclass(frozen=True)
class Classification:
    """Classification outcome for a single version."""

    status: SupportStatus
    support_ends: datetime | None = None
    recommended: bool = False


def normalize_as_of(as_of: datetime | None) -> datetime:
    """Return the reference time as an aware UTC datetime (now when None)."""
    if as_of is None:
        return datetime.now(UTC)
    if as_of.tzinfo is None:
        return as_of.replace(tzinfo=UTC)
    return as_of.astimezone(UTC)


def order_versions(versions: Iterable[VersionDescriptor]) -> list[VersionDescriptor]:
    """Return versions newest first."""
    return sorted(versions, key=lambda v: v.sort_key(), reverse=True)


def _signal_lapsed(
    successor: VersionDescriptor | None,
    policy: SupportPolicy,
    as_of: datetime,
) -> bool:
    """Check whether an upstream recommendation has outlived the threshold."""
    threshold = policy.recommendation_threshold
    if threshold is None or successor is None or successor.published_at is None:
        return False
    return as_of - successor.published_at > threshold


def pick_recommended(
    dated: list[VersionDescriptor],
    flagged: Collection[str],
    policy: SupportPolicy,
    as_of: datetime,
) -> VersionDescriptor:
    """Choose the single recommended version.

    Args:
        dated: Ranked versions, newest first (must be non-empty)
        flagged: Raw identifiers upstream marks as recommended
        policy: Support policy
        as_of: Reference time

    Returns:
        Newest flagged version whose signal hasn't lapsed, else the latest version
    """
    for index, version in enumerate(dated):
        if version.raw not in flagged:
            continue
        successor = dated[index - 1] if index > 0 else None
        if _signal_lapsed(successor, policy, as_of):
            logger.debug("Recommendation for %s has lapsed", version.raw)
            continue
        return version
    return dated[0]


def classify_superseded(
    replaced_at: datetime,
    policy: SupportPolicy,
    as_of: datetime,
) -> Classification:
    """Classify a version from the time its successor has been out.

    Support ends ``deprecation_window`` after the successor's release; until
    ``active_window`` has passed the version is still active.

    Args:
        replaced_at: Publication time of the next newer version
        policy: Support policy
        as_of: Reference time
    """
    try:
        support_ends = replaced_at + policy.deprecation_window
    except OverflowError:
        support_ends = _LATEST_END
    if as_of > support_ends:
        status = SupportStatus.EOL
    elif as_of - replaced_at > policy.active_window:
        status = SupportStatus.DEPRECATED
    else:
        status = SupportStatus.ACTIVE
    return Classification(status=status, support_ends=support_ends)


def classify_versions(
    versions: Iterable[VersionDescriptor],
    policy: SupportPolicy,
    *,
    flagged: Collection[str] = (),
    as_of: datetime | None = None,
) -> dict[str, Classification]:
    """Assign a support status to every version of one platform.

    Args:
        versions: Parsed versions with unique raw identifiers
        policy: Support policy
        flagged: Raw identifiers upstream marks as recommended
        as_of: Reference time for the windows (defaults to now, UTC)

    Returns:
        Classification per raw identifier, one for every input version
    """
    as_of = normalize_as_of(as_of)
    result: dict[str, Classification] = {}

    ordered = order_versions(versions)
    ranked = [version for version in ordered if version.is_dated]
    if ranked:
        for version in ordered:
            if not version.is_dated:
                result[version.raw] = Classification(status=SupportStatus.UNKNOWN)
    else:
        # Nothing dated: rank on the identifier alone
        ranked = ordered
    if not ranked:
        return result

    latest = ranked[0]
    recommended = pick_recommended(ranked, flagged, policy, as_of)
    ignored = {v.raw for v in ranked if v.raw in flagged} - {recommended.raw}
    if ignored:
        logger.warning(
            "Ignoring recommendation flag on %s; recommended build is %s",
            ", ".join(sorted(ignored)),
            recommended.raw,
        )

    for index, version in enumerate(ranked):
        if version is latest:
            result[version.raw] = Classification(
                status=SupportStatus.LATEST, recommended=version is recommended
            )
        elif version is recommended:
            result[version.raw] = Classification(
                status=SupportStatus.RECOMMENDED, recommended=True
            )
        else:
            replaced_at = ranked[index - 1].published_at
            if replaced_at is None:
                result[version.raw] = Classification(status=SupportStatus.UNKNOWN)
            else:
                result[version.raw] = classify_superseded(replaced_at, policy, as_of)
        logger.debug("Classified %s as %s", version.raw, result[version.raw].status.value)

    return result
