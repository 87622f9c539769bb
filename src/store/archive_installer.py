"""Archive installation into versioned snapshot directories.

This module writes a downloaded archive to a staging area, extracts the
tzdata allow-list into a staging directory, and promotes it into place
with a single rename. A snapshot directory is therefore either absent
or complete.
"""

from __future__ import annotations

import shutil
import tarfile
import zlib
from pathlib import Path

from core.constants import (
    ARCHIVE_FILE_PREFIX,
    ARCHIVE_FILE_SUFFIX,
    SNAPSHOT_DIR_PREFIX,
    STAGING_DIR_NAME,
    TZDATA_FILES_TO_EXTRACT,
)
from core.errors import TzSyncInstallError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_EXTRACT_ERRORS = (tarfile.TarError, OSError, EOFError, KeyError, zlib.error)


class ArchiveInstaller:
    """Installer that turns archive bytes into a snapshot directory."""

    def __init__(
        self,
        data_root: Path,
        files_to_extract: tuple[str, ...] = TZDATA_FILES_TO_EXTRACT,
    ) -> None:
        self._data_root = data_root
        self._staging_root = data_root / STAGING_DIR_NAME
        self._files_to_extract = files_to_extract

    def install(self, version: str, archive_bytes: bytes) -> Path:
        """Install one version from compressed archive bytes.

        Args:
            version: Version identifier used for file and directory names.
            archive_bytes: Gzip-compressed tar archive.

        Returns:
            Path of the promoted snapshot directory.

        Raises:
            TzSyncInstallError: If any step fails. The failing step is
                recorded on the error. A failed ``extract`` leaves the
                temporary archive behind; the next attempt overwrites it.
        """
        archive_path = self._staging_root / f"{ARCHIVE_FILE_PREFIX}{version}{ARCHIVE_FILE_SUFFIX}"
        staging_dir = self._staging_root / f"{SNAPSHOT_DIR_PREFIX}{version}"
        target_dir = self._data_root / f"{SNAPSHOT_DIR_PREFIX}{version}"
        self._write_archive(version, archive_path, archive_bytes)
        self._extract(version, archive_path, staging_dir)
        self._remove_archive(version, archive_path, staging_dir)
        self._promote(version, staging_dir, target_dir)
        _LOGGER.info(
            "tzdata_snapshot_installed",
            version=version,
            snapshot_dir=str(target_dir),
            file_count=len(self._files_to_extract),
        )
        return target_dir

    def _write_archive(self, version: str, archive_path: Path, archive_bytes: bytes) -> None:
        try:
            self._staging_root.mkdir(parents=True, exist_ok=True)
            archive_path.write_bytes(archive_bytes)
        except OSError as error:
            raise TzSyncInstallError(
                version,
                "write_archive",
                f"Failed to write temporary archive {archive_path}: {error}. "
                "Check TZSYNC_DATA_ROOT is writable.",
            ) from error

    def _extract(self, version: str, archive_path: Path, staging_dir: Path) -> None:
        """Extract allow-listed members as regular files into staging."""
        _remove_tree(staging_dir)
        try:
            staging_dir.mkdir(parents=True)
            with tarfile.open(archive_path, mode="r:gz") as archive:
                for member_name in self._files_to_extract:
                    _extract_member(archive, member_name, staging_dir)
        except _EXTRACT_ERRORS as error:
            _remove_tree(staging_dir)
            raise TzSyncInstallError(
                version,
                "extract",
                f"Failed to extract tzdata {version} from {archive_path}: {error!r}. "
                "The archive may be corrupt or incomplete.",
            ) from error

    def _remove_archive(self, version: str, archive_path: Path, staging_dir: Path) -> None:
        try:
            archive_path.unlink()
        except OSError as error:
            _remove_tree(staging_dir)
            raise TzSyncInstallError(
                version,
                "remove_archive",
                f"Failed to remove temporary archive {archive_path}: {error}.",
            ) from error

    def _promote(self, version: str, staging_dir: Path, target_dir: Path) -> None:
        """Move the staged snapshot into its versioned directory."""
        try:
            # A leftover directory for this version is never the active one.
            if target_dir.exists():
                shutil.rmtree(target_dir)
            staging_dir.rename(target_dir)
        except OSError as error:
            _remove_tree(staging_dir)
            raise TzSyncInstallError(
                version,
                "promote",
                f"Failed to move staged snapshot into {target_dir}: {error}.",
            ) from error


def _extract_member(archive: tarfile.TarFile, member_name: str, staging_dir: Path) -> None:
    member = archive.getmember(member_name)
    if not member.isfile():
        raise tarfile.TarError(f"member '{member_name}' is not a regular file")
    member_file = archive.extractfile(member)
    if member_file is None:
        raise tarfile.TarError(f"member '{member_name}' has no content")
    with member_file:
        (staging_dir / member_name).write_bytes(member_file.read())


def _remove_tree(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path, ignore_errors=True)
