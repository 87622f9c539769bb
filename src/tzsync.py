"""Public SDK surface for tzsync.

This module provides a stable import path for embedding applications.
It re-exports the updater, release sources, and typed config models.
"""

from __future__ import annotations

from core.config import TzSyncConfig
from core.types import InstalledSnapshot, UpdateOutcome, UpdateReport
from sources.http_transport import HttpResponse, HttpTransport, RequestsTransport
from sources.iana_source import IanaReleaseSource
from sources.local_archive_source import LocalArchiveSource
from sources.release_source import (
    ReleaseSource,
    build_release_source,
    open_release_source,
)
from store.archive_installer import ArchiveInstaller
from store.snapshot_registry import SnapshotRegistry
from updater.background import BackgroundUpdater
from updater.orchestrator import TzDatabaseUpdater
from updater.recompile import build_updater, maybe_recompile

__all__ = [
    "ArchiveInstaller",
    "BackgroundUpdater",
    "HttpResponse",
    "HttpTransport",
    "IanaReleaseSource",
    "InstalledSnapshot",
    "LocalArchiveSource",
    "ReleaseSource",
    "RequestsTransport",
    "SnapshotRegistry",
    "TzDatabaseUpdater",
    "TzSyncConfig",
    "UpdateOutcome",
    "UpdateReport",
    "build_release_source",
    "build_updater",
    "maybe_recompile",
    "open_release_source",
]
