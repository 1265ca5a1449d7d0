"""Version identifier parsing for buildcat."""

from datetime import UTC, datetime

from ..constants import NUMERIC_SEGMENT_RE
from ..errors import VersionParseError
from ..models import UpstreamRecord, VersionDescriptor


def extract_numeric_parts(raw: str) -> tuple[int, ...]:
    """Extract the ordered numeric segments of an identifier.

    Every run of ASCII digits is a segment and everything else separates
    them. ``v1.0.0.7290`` gives ``(1, 0, 0, 7290)``, ``b7290`` gives
    ``(7290,)`` and ``unstable-build`` gives ``()``.

    Args:
        raw: Raw identifier

    Returns:
        Tuple of integers, empty if nothing numeric was found
    """
    return tuple(int(segment) for segment in NUMERIC_SEGMENT_RE.findall(raw))


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an upstream publication time into an aware UTC datetime.

    Accepts ISO-8601 text (``Z`` suffix allowed) or a datetime. Naive values
    are taken as UTC.

    Returns:
        Parsed timestamp, or None if missing or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        return None


def parse_version(
    raw: str,
    published_at: str | datetime | None = None,
    source_sha: str = "",
) -> VersionDescriptor:
    """Parse a raw identifier into a VersionDescriptor.

    Args:
        raw: Raw tag/release identifier, kept verbatim
        published_at: Publication time as given upstream
        source_sha: Commit/tag identity

    Returns:
        Parsed descriptor; ``published_at`` is None when the time is unusable

    Raises:
        VersionParseError: If the identifier has no numeric segment
    """
    if not raw or not raw.strip():
        raise VersionParseError("empty version identifier")
    try:
        numeric_parts = extract_numeric_parts(raw)
    except ValueError as e:
        raise VersionParseError(f"unusable numeric segment in '{raw[:40]}': {e}") from e
    if not numeric_parts:
        raise VersionParseError(f"no numeric segment in '{raw}'")
    return VersionDescriptor(
        raw=raw,
        numeric_parts=numeric_parts,
        published_at=parse_timestamp(published_at),
        source_sha=source_sha,
    )


def parse_record(record: UpstreamRecord) -> VersionDescriptor:
    """Parse an upstream record's identity fields."""
    return parse_version(record.version, record.published_at, record.sha)
