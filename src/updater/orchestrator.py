"""Update-and-swap orchestration for tzdata snapshots.

This module runs one linear update cycle: read the latest version, compare
it with the installed one, fetch and install when stale, then delete the
old snapshot and signal recompilation. A cycle never raises; failures end
in the ``error`` outcome and leave the previous snapshot active.
"""

from __future__ import annotations

from core.errors import TzSyncStoreError
from core.logging_config import get_logger
from core.types import RecompileHook, UpdateOutcome, UpdateReport
from sources.release_source import ReleaseSource
from store.archive_installer import ArchiveInstaller
from store.snapshot_registry import SnapshotRegistry

_LOGGER = get_logger(__name__)


class TzDatabaseUpdater:
    """Orchestrator for one tzdata update cycle.

    Concurrent ``run`` calls on the same data root are not coordinated
    here and must be serialized by the caller.
    """

    def __init__(
        self,
        registry: SnapshotRegistry,
        installer: ArchiveInstaller,
        recompile: RecompileHook | None = None,
    ) -> None:
        self._registry = registry
        self._installer = installer
        self._recompile = recompile

    def run(self, source: ReleaseSource) -> UpdateOutcome:
        """Run one update cycle and return its outcome.

        Args:
            source: Release source selecting online or offline mode.

        Returns:
            ``updated``, ``no_update``, or ``error``.
        """
        return self.run_with_report(source).outcome

    def run_with_report(self, source: ReleaseSource) -> UpdateReport:
        """Run one update cycle and return a detailed report.

        Args:
            source: Release source selecting online or offline mode.

        Returns:
            Report with outcome and the versions involved.
        """
        try:
            current_version = self._registry.current_version()
        except TzSyncStoreError as error:
            _LOGGER.error("tzdata_registry_read_failed", error=str(error))
            return UpdateReport(outcome="error", previous_version=None, error_message=str(error))
        try:
            latest_version = source.latest_version()
        except Exception as error:
            _LOGGER.error(
                "tzdata_version_read_failed",
                source=source.name,
                error_type=type(error).__name__,
                error=str(error),
            )
            return UpdateReport(
                outcome="error",
                previous_version=current_version,
                error_message=str(error),
            )
        if latest_version == current_version:
            _LOGGER.info("tzdata_up_to_date", version=current_version, source=source.name)
            return UpdateReport(
                outcome="no_update",
                previous_version=current_version,
                latest_version=latest_version,
            )
        error_message = self._fetch_and_install(source, latest_version)
        if error_message is not None:
            return UpdateReport(
                outcome="error",
                previous_version=current_version,
                latest_version=latest_version,
                error_message=error_message,
            )
        if current_version is not None:
            self._delete_old_snapshot(current_version)
        _LOGGER.info(
            "tzdata_updated",
            previous_version=current_version,
            version=latest_version,
            source=source.name,
        )
        self._signal_recompile()
        return UpdateReport(
            outcome="updated",
            previous_version=current_version,
            latest_version=latest_version,
        )

    def _fetch_and_install(self, source: ReleaseSource, version: str) -> str | None:
        """Fetch and install one version.

        Returns:
            None on success, else the failure message.
        """
        try:
            archive_bytes = source.fetch_archive(version)
        except Exception as error:
            _LOGGER.error(
                "tzdata_fetch_failed",
                version=version,
                source=source.name,
                error_type=type(error).__name__,
                error=str(error),
            )
            return str(error)
        try:
            self._installer.install(version, archive_bytes)
        except Exception as error:
            _LOGGER.error(
                "tzdata_install_failed",
                version=version,
                step=getattr(error, "step", None),
                error=str(error),
            )
            return str(error)
        return None

    def _delete_old_snapshot(self, version: str) -> None:
        """Delete the replaced snapshot; failures only leak disk space."""
        try:
            self._registry.delete_snapshot(version)
        except TzSyncStoreError as error:
            _LOGGER.warning("tzdata_old_snapshot_delete_failed", version=version, error=str(error))

    def _signal_recompile(self) -> None:
        if self._recompile is None:
            return
        try:
            self._recompile()
        except Exception as error:
            # Recompile failures never change the decided outcome.
            _LOGGER.error(
                "tzdata_recompile_failed",
                error_type=type(error).__name__,
                error=str(error),
            )
