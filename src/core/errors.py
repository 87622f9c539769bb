"""tzsync exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each update step raises a specific error type so the orchestrator
can log which step failed and keep the active snapshot untouched.
"""

from __future__ import annotations


class TzSyncError(Exception):
    """Base exception for all tzsync failures."""


class TzSyncConfigError(TzSyncError):
    """Raised for invalid runtime configuration."""


class TzSyncDependencyError(TzSyncError):
    """Raised when an optional runtime dependency is missing."""


class TzSyncTransportError(TzSyncError):
    """Raised for unexpected network transport failures."""


class TzSyncVersionFetchError(TzSyncError):
    """Raised when the latest remote version cannot be read."""


class TzSyncNoLocalArchivesError(TzSyncError):
    """Raised when the offline archive directory holds no archives."""


class TzSyncArchiveReadError(TzSyncError):
    """Raised when a local archive file cannot be read."""


class TzSyncDownloadError(TzSyncError):
    """Raised when a remote archive download fails."""

    def __init__(self, version: str, message: str) -> None:
        super().__init__(message)
        self.version = version


class TzSyncInstallError(TzSyncError):
    """Raised when writing or extracting a snapshot fails.

    Attributes:
        version: Version that was being installed.
        step: Installer step that failed.
    """

    def __init__(self, version: str, step: str, message: str) -> None:
        super().__init__(message)
        self.version = version
        self.step = step


class TzSyncStoreError(TzSyncError):
    """Raised for snapshot directory listing and deletion failures."""
