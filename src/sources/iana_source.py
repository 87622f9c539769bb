"""Online release source backed by the IANA tzdb endpoints.

This module reads the published tzdb version and downloads release
archives through an injected HTTP transport.
"""

from __future__ import annotations

import re

from core.constants import (
    ARCHIVE_FILE_PREFIX,
    ARCHIVE_FILE_SUFFIX,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_IANA_HOSTNAME,
    HTTP_STATUS_OK,
    IANA_RELEASES_PATH,
    IANA_VERSION_PATH,
)
from core.errors import TzSyncDownloadError, TzSyncTransportError, TzSyncVersionFetchError
from core.logging_config import get_logger
from sources.http_transport import HttpTransport

_LOGGER = get_logger(__name__)
_VERSION_TOKEN = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]*")


class IanaReleaseSource:
    """Release source reading from ``https://data.iana.org``."""

    def __init__(
        self,
        transport: HttpTransport,
        hostname: str = DEFAULT_IANA_HOSTNAME,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self._transport = transport
        self._hostname = hostname
        self._timeout = timeout

    @property
    def name(self) -> str:
        return f"iana:{self._hostname}"

    def latest_version(self) -> str:
        """Read the latest published tzdb version.

        Returns:
            Version identifier with surrounding whitespace removed.

        Raises:
            TzSyncVersionFetchError: On non-200 status, empty body, a body that
                is not a plain release name, or transport failure.
        """
        try:
            response = self._transport.request(
                "GET", IANA_VERSION_PATH, hostname=self._hostname, timeout=self._timeout
            )
        except TzSyncTransportError as error:
            raise TzSyncVersionFetchError(
                f"Failed to read the latest tzdb version from {self._hostname}: {error}"
            ) from error
        if response.status_code != HTTP_STATUS_OK:
            raise TzSyncVersionFetchError(
                f"Failed to read the latest tzdb version from {self._hostname}: "
                f"unexpected HTTP status {response.status_code}. Retry later."
            )
        version = response.body.decode("utf-8", errors="replace").strip()
        if not version:
            raise TzSyncVersionFetchError(
                f"Version endpoint on {self._hostname} returned an empty body. Retry later."
            )
        if not _VERSION_TOKEN.fullmatch(version) or ".." in version:
            raise TzSyncVersionFetchError(
                f"Version endpoint on {self._hostname} returned an unusable version {version!r}. "
                "Expected a release name such as 2023c."
            )
        return version

    def fetch_archive(self, version: str) -> bytes:
        """Download the release archive for ``version``.

        Args:
            version: Version identifier, e.g. ``2023d``.

        Returns:
            Compressed archive bytes.

        Raises:
            TzSyncDownloadError: On non-200 status or transport failure.
        """
        path = f"{IANA_RELEASES_PATH}/{ARCHIVE_FILE_PREFIX}{version}{ARCHIVE_FILE_SUFFIX}"
        _LOGGER.info("tzdata_download_started", version=version, hostname=self._hostname)
        try:
            response = self._transport.request(
                "GET", path, hostname=self._hostname, timeout=self._timeout
            )
        except TzSyncTransportError as error:
            raise TzSyncDownloadError(
                version,
                f"Failed to download tzdata {version} from {self._hostname}: {error}",
            ) from error
        if response.status_code != HTTP_STATUS_OK:
            raise TzSyncDownloadError(
                version,
                f"Failed to download tzdata {version} from {self._hostname}: "
                f"unexpected HTTP status {response.status_code}. Retry later.",
            )
        _LOGGER.info("tzdata_download_finished", version=version, size_bytes=len(response.body))
        return response.body
