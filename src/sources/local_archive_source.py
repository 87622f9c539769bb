"""Offline release source backed by a directory of archives.

This module picks the latest ``tzdata<version>.tar.gz`` file by name.
Names are assumed to sort lexicographically in release order, which
holds for IANA versions within the same century (``2023c`` < ``2023d``
< ``2024a``). The ordering is not validated.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import ARCHIVE_FILE_PREFIX, ARCHIVE_FILE_SUFFIX
from core.errors import TzSyncArchiveReadError, TzSyncNoLocalArchivesError


class LocalArchiveSource:
    """Release source reading archives from a local directory."""

    def __init__(self, archive_dir: Path) -> None:
        self._archive_dir = archive_dir

    @property
    def name(self) -> str:
        return f"local:{self._archive_dir}"

    def latest_version(self) -> str:
        """Return the version of the lexicographically last archive.

        Returns:
            Version identifier recovered from the archive file name.

        Raises:
            TzSyncNoLocalArchivesError: If the directory is missing,
                unreadable, or holds no archives.
        """
        archive_names = self._list_archive_names()
        if not archive_names:
            raise TzSyncNoLocalArchivesError(
                f"No tzdata archives found in {self._archive_dir}. "
                f"Add {ARCHIVE_FILE_PREFIX}<version>{ARCHIVE_FILE_SUFFIX} files and retry."
            )
        return version_from_archive_name(archive_names[-1])

    def fetch_archive(self, version: str) -> bytes:
        """Read the archive bytes for ``version``.

        Args:
            version: Version identifier.

        Returns:
            Compressed archive bytes.

        Raises:
            TzSyncArchiveReadError: If the archive is missing or unreadable.
        """
        archive_path = self._archive_dir / archive_name_for_version(version)
        try:
            return archive_path.read_bytes()
        except OSError as error:
            raise TzSyncArchiveReadError(
                f"Failed to read tzdata archive at {archive_path}: {error}. "
                "Check the archive directory contents and permissions."
            ) from error

    def _list_archive_names(self) -> list[str]:
        try:
            entries = list(self._archive_dir.iterdir())
        except OSError as error:
            raise TzSyncNoLocalArchivesError(
                f"Failed to list tzdata archives in {self._archive_dir}: {error}. "
                "Check TZSYNC_ARCHIVE_PATH."
            ) from error
        return sorted(
            entry.name
            for entry in entries
            if entry.is_file()
            and entry.name.startswith(ARCHIVE_FILE_PREFIX)
            and entry.name.endswith(ARCHIVE_FILE_SUFFIX)
        )


def archive_name_for_version(version: str) -> str:
    """Return the archive file name for one version."""
    return f"{ARCHIVE_FILE_PREFIX}{version}{ARCHIVE_FILE_SUFFIX}"


def version_from_archive_name(archive_name: str) -> str:
    """Strip the fixed prefix and suffix from an archive file name.

    Args:
        archive_name: File name such as ``tzdata2023c.tar.gz``.

    Returns:
        Version identifier such as ``2023c``.
    """
    return archive_name.removeprefix(ARCHIVE_FILE_PREFIX).removesuffix(ARCHIVE_FILE_SUFFIX).strip()
