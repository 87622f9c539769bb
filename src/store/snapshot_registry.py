"""Installed snapshot registry.

This module derives the installed tzdata version from the snapshot
directories present under the data root. No metadata file is kept,
so the directories are the single source of truth.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from core.constants import SNAPSHOT_DIR_PREFIX
from core.errors import TzSyncStoreError
from core.types import InstalledSnapshot


class SnapshotRegistry:
    """Filesystem view of installed tzdata snapshots."""

    def __init__(self, data_root: Path) -> None:
        self._data_root = data_root

    @property
    def data_root(self) -> Path:
        return self._data_root

    def list_snapshots(self) -> tuple[InstalledSnapshot, ...]:
        """List installed snapshots ordered by version name.

        Returns:
            Snapshots sorted lexicographically by version.

        Raises:
            TzSyncStoreError: If the data root cannot be listed.
        """
        if not self._data_root.exists():
            return ()
        try:
            entries = list(self._data_root.iterdir())
        except OSError as error:
            raise TzSyncStoreError(
                f"Failed to list snapshot directories in {self._data_root}: {error}. "
                "Check TZSYNC_DATA_ROOT permissions."
            ) from error
        snapshots = [
            InstalledSnapshot(
                version=entry.name.removeprefix(SNAPSHOT_DIR_PREFIX),
                path=entry,
            )
            for entry in entries
            if entry.is_dir()
            and entry.name.startswith(SNAPSHOT_DIR_PREFIX)
            and len(entry.name) > len(SNAPSHOT_DIR_PREFIX)
        ]
        return tuple(sorted(snapshots, key=lambda snapshot: snapshot.version))

    def list_installed_versions(self) -> tuple[str, ...]:
        """Return installed version identifiers in sorted order."""
        return tuple(snapshot.version for snapshot in self.list_snapshots())

    def current_version(self) -> str | None:
        """Return the active version, or None when nothing is installed.

        After a completed update only one snapshot exists. If an earlier
        cleanup failed and several remain, the last by name is active.
        """
        versions = self.list_installed_versions()
        return versions[-1] if versions else None

    def snapshot_dir(self, version: str) -> Path:
        """Return the directory path for one version."""
        return self._data_root / f"{SNAPSHOT_DIR_PREFIX}{version}"

    def delete_snapshot(self, version: str) -> None:
        """Recursively delete one snapshot directory.

        Args:
            version: Version to delete. Missing directories are ignored.

        Raises:
            TzSyncStoreError: If the directory exists but cannot be removed.
        """
        snapshot_dir = self.snapshot_dir(version)
        if not snapshot_dir.exists():
            return
        try:
            shutil.rmtree(snapshot_dir)
        except OSError as error:
            raise TzSyncStoreError(
                f"Failed to delete snapshot directory {snapshot_dir}: {error}. "
                "Remove it manually to reclaim disk space."
            ) from error
