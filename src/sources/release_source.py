"""Release source strategy selection.

This module defines the source protocol the orchestrator consumes and
maps validated config onto an online or offline implementation.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol

from core.config import TzSyncConfig
from core.errors import TzSyncConfigError
from sources.http_transport import HttpTransport, RequestsTransport
from sources.iana_source import IanaReleaseSource
from sources.local_archive_source import LocalArchiveSource


class ReleaseSource(Protocol):
    """Where the latest tzdata version and its archive come from."""

    @property
    def name(self) -> str: ...

    def latest_version(self) -> str: ...

    def fetch_archive(self, version: str) -> bytes: ...


def build_release_source(
    config: TzSyncConfig,
    transport: HttpTransport | None = None,
) -> ReleaseSource:
    """Build the release source selected by config.

    Args:
        config: Runtime configuration.
        transport: Optional HTTP transport; a ``requests`` transport is
            created for online mode when omitted.

    Returns:
        Offline source when ``config.offline_mode`` is set, else IANA source.

    Raises:
        TzSyncConfigError: If offline mode has no archive path.
    """
    if config.offline_mode:
        if config.archive_path is None:
            raise TzSyncConfigError(
                "Offline mode requires an archive directory. "
                "Set TZSYNC_ARCHIVE_PATH or pass --archive-path."
            )
        return LocalArchiveSource(config.archive_path)
    return IanaReleaseSource(
        transport=transport or RequestsTransport(),
        hostname=config.hostname,
        timeout=config.http_timeout_seconds,
    )


@contextmanager
def open_release_source(
    config: TzSyncConfig,
    transport: HttpTransport | None = None,
) -> Iterator[ReleaseSource]:
    """Build the configured release source and release what it owns on exit.

    A caller-supplied transport is left open for the caller to reuse. A
    ``requests`` transport created here is closed when the block exits.

    Raises:
        TzSyncConfigError: If offline mode has no archive path.
    """
    owned_transport: RequestsTransport | None = None
    if transport is None and not config.offline_mode:
        owned_transport = RequestsTransport()
        transport = owned_transport
    try:
        yield build_release_source(config, transport=transport)
    finally:
        if owned_transport is not None:
            owned_transport.close()
