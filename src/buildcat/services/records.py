"""File-based loading of upstream record batches and built catalogs."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import RecordLoadError
from ..models import ArtifactData, Platform

logger = logging.getLogger(__name__)


def _from_github_tag(item: dict[str, Any], index: int) -> dict[str, Any]:
    """Map a GitHub tags API item onto the upstream record shape.

    Tag items look like ``{"name": "v1.0.0.7290", "commit": {"sha": "..."}}``;
    a commit date is picked up when the payload was enriched with one.

    Raises:
        RecordLoadError: If ``commit`` or ``commit.committer`` is not an object
    """
    commit = item.get("commit") or {}
    if not isinstance(commit, dict):
        raise RecordLoadError(f"record {index}: commit is not an object")
    committer = commit.get("committer") or {}
    if not isinstance(committer, dict):
        raise RecordLoadError(f"record {index}: commit.committer is not an object")
    record: dict[str, Any] = {"version": item["name"], "sha": commit.get("sha", "")}
    date = committer.get("date") or item.get("published_at")
    if date is not None:
        record["published_at"] = date
    return record


def normalize_record_items(payload: Any) -> list[dict[str, Any]]:
    """Turn a decoded JSON payload into a list of record dicts.

    Accepts a list of records, an object with a ``records`` list, or a list
    of GitHub tag items. Individual records are validated later by the
    catalog builder, which skips the bad ones.

    Raises:
        RecordLoadError: If the payload is not a list of objects
    """
    if isinstance(payload, dict) and "records" in payload:
        payload = payload["records"]
    if not isinstance(payload, list):
        raise RecordLoadError("expected a JSON list of records")

    items: list[dict[str, Any]] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise RecordLoadError(f"record {index} is not an object")
        if "name" in item and "version" not in item and "raw" not in item:
            item = _from_github_tag(item, index)
        items.append(item)
    return items


def load_records(path: Path) -> list[dict[str, Any]]:
    """Load one platform's record batch from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        List of record dicts

    Raises:
        RecordLoadError: If the file cannot be read or decoded
    """
    try:
        payload = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise RecordLoadError(f"Cannot load records from {path}: {e}") from e
    try:
        items = normalize_record_items(payload)
    except RecordLoadError as e:
        raise RecordLoadError(f"Cannot load records from {path}: {e}") from e
    logger.debug("Loaded %d records from %s", len(items), path)
    return items


def load_catalog(path: Path) -> ArtifactData:
    """Load a built catalog from its JSON wire form.

    Raises:
        RecordLoadError: If the file cannot be read or is not a valid catalog
    """
    try:
        return ArtifactData.model_validate_json(path.read_text())
    except (OSError, ValidationError) as e:
        raise RecordLoadError(f"Cannot load catalog from {path}: {e}") from e


class JsonFileRecordSource:
    """Record source backed by one JSON file per platform.

    A platform without a file yields an empty batch.
    """

    def __init__(self, windows: Path | None = None, linux: Path | None = None) -> None:
        self.paths = {Platform.WINDOWS: windows, Platform.LINUX: linux}

    def fetch_records(self, platform: Platform) -> list[dict[str, Any]]:
        path = self.paths[Platform(platform)]
        if path is None:
            return []
        return load_records(path)
