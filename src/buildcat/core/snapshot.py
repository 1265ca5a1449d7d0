"""Snapshot publication for a periodically refreshed catalog.

A refresh builds a complete new catalog off to the side and then swaps the
store's reference to it. Readers hold whatever snapshot they fetched; they
never see a half-built one. When refreshes overlap, the one that completes
last wins.
"""

import logging
import threading
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from ..config import SupportPolicy
from ..constants import DEFAULT_BASE_URL
from ..models import CatalogBuild, Platform
from .catalog_builder import RecordInput, assemble_catalog

logger = logging.getLogger(__name__)


class RecordSource(Protocol):
    """Anything that can hand over one platform's upstream records."""

    def fetch_records(self, platform: Platform) -> Sequence[RecordInput]: ...


class CatalogStore:
    """Holds the current catalog snapshot.

    Attributes:
        generation: Number of snapshots published so far.
    """

    def __init__(self, build: CatalogBuild | None = None) -> None:
        self._lock = threading.Lock()
        self._current = build
        self.generation = 0 if build is None else 1

    def current(self) -> CatalogBuild | None:
        """Return the latest published snapshot, or None before the first one."""
        return self._current

    def publish(self, build: CatalogBuild) -> int:
        """Make a build the current snapshot.

        Returns:
            The new generation number
        """
        with self._lock:
            self._current = build
            self.generation += 1
            generation = self.generation
        logger.debug("Published catalog generation %d", generation)
        return generation

    def refresh(
        self,
        source: RecordSource,
        policy: SupportPolicy | None = None,
        *,
        as_of: datetime | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> CatalogBuild:
        """Fetch records from a source, build a new snapshot and publish it.

        Errors raised by the source propagate and leave the current snapshot
        in place.
        """
        build = assemble_catalog(
            source.fetch_records(Platform.WINDOWS),
            source.fetch_records(Platform.LINUX),
            policy,
            as_of=as_of,
            base_url=base_url,
        )
        self.publish(build)
        return build
