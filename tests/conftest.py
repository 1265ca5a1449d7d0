"""Shared test fixtures for buildcat tests."""

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from typer.testing import CliRunner

from buildcat.models import UpstreamRecord, VersionDescriptor

AS_OF = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def days_ago(days: float) -> datetime:
    """Return a timestamp the given number of days before AS_OF."""
    return AS_OF - timedelta(days=days)


def make_record(
    version: str,
    published_at: str | datetime | None = None,
    sha: str = "abc123",
    recommended: bool = False,
    critical: bool = False,
    artifact_url: str | None = None,
) -> UpstreamRecord:
    """Create an upstream record for testing."""
    return UpstreamRecord(
        version=version,
        published_at=published_at,
        sha=sha,
        recommended=recommended,
        critical=critical,
        artifact_url=artifact_url,
    )


def make_version(
    raw: str,
    published_at: datetime | None = None,
    numeric_parts: tuple[int, ...] | None = None,
) -> VersionDescriptor:
    """Create a parsed version for testing."""
    return VersionDescriptor(
        raw=raw,
        numeric_parts=numeric_parts or (int(raw),),
        published_at=published_at,
        source_sha="abc123",
    )


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_records() -> list[UpstreamRecord]:
    """A platform history spanning every time-based status."""
    return [
        make_record("100", days_ago(1), sha="sha100"),
        make_record("99", days_ago(10), sha="sha99", recommended=True),
        make_record("98", days_ago(20), sha="sha98"),
        make_record("97", days_ago(30), sha="sha97"),
        make_record("96", days_ago(100), sha="sha96"),
        make_record("95", days_ago(200), sha="sha95"),
    ]


@pytest.fixture
def records_file(tmp_path: Path):
    """Write a list of record dicts to a JSON file and return its path."""

    def _write(name: str, records: list[dict]) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(records))
        return path

    return _write
