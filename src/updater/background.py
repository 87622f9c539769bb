"""Background execution of update cycles.

This module runs update cycles on one worker thread so a serving path
is not blocked. A single worker serializes cycles within the process.
"""

from __future__ import annotations

import concurrent.futures

from core.types import UpdateOutcome
from sources.release_source import ReleaseSource
from updater.orchestrator import TzDatabaseUpdater


class BackgroundUpdater:
    """Single-worker executor wrapping one orchestrator."""

    def __init__(self, updater: TzDatabaseUpdater) -> None:
        self._updater = updater
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="tzsync-update",
        )

    def submit(self, source: ReleaseSource) -> "concurrent.futures.Future[UpdateOutcome]":
        """Queue one update cycle.

        Args:
            source: Release source for the cycle.

        Returns:
            Future resolving to the cycle outcome.
        """
        return self._executor.submit(self._updater.run, source)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting cycles and optionally wait for queued ones."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BackgroundUpdater":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.shutdown(wait=True)
