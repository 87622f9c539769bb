"""Unit tests for the IANA online release source."""

from __future__ import annotations

import pytest

from core.errors import TzSyncDownloadError, TzSyncVersionFetchError
from sources.http_transport import HttpResponse
from sources.iana_source import IanaReleaseSource
from tests.fake_transport import FakeTransport, iana_transport


def test_latest_version_trims_response_body() -> None:
    """Version body should be returned without surrounding whitespace."""
    transport = iana_transport("2023d", archives={})
    source = IanaReleaseSource(transport)

    version = source.latest_version()

    assert version == "2023d"


def test_latest_version_requests_fixed_path_with_timeout() -> None:
    """Version read should issue one GET with the configured host and timeout."""
    transport = iana_transport("2024a", archives={})
    source = IanaReleaseSource(transport, hostname="mirror.example.org", timeout=4.5)

    source.latest_version()

    assert transport.requests == [
        ("GET", "/time-zones/tzdb/version", "mirror.example.org", 4.5)
    ]


def test_latest_version_raises_for_non_200_status() -> None:
    """Non-200 version responses should raise a version fetch error."""
    transport = FakeTransport(
        responses={"/time-zones/tzdb/version": HttpResponse(status_code=503, body=b"busy")}
    )
    source = IanaReleaseSource(transport)

    with pytest.raises(TzSyncVersionFetchError, match="503"):
        source.latest_version()


def test_latest_version_raises_for_transport_failure() -> None:
    """Timeouts and connection failures map to version fetch errors."""
    transport = FakeTransport(failing_paths={"/time-zones/tzdb/version"})
    source = IanaReleaseSource(transport)

    with pytest.raises(TzSyncVersionFetchError):
        source.latest_version()


def test_latest_version_raises_for_blank_body() -> None:
    """A blank version body is not a usable version identifier."""
    transport = FakeTransport(
        responses={"/time-zones/tzdb/version": HttpResponse(status_code=200, body=b" \n")}
    )
    source = IanaReleaseSource(transport)

    with pytest.raises(TzSyncVersionFetchError):
        source.latest_version()


@pytest.mark.parametrize(
    "body", [b"../../etc\n", b"2023d/x\n", b"2023 d\n", b"2023d\x00\n", b"..\n"]
)
def test_latest_version_rejects_unsafe_version_tokens(body: bytes) -> None:
    """Bodies that are not a plain release name must never reach a request path."""
    transport = FakeTransport(
        responses={"/time-zones/tzdb/version": HttpResponse(status_code=200, body=body)}
    )
    source = IanaReleaseSource(transport)

    with pytest.raises(TzSyncVersionFetchError, match="unusable version"):
        source.latest_version()

    assert len(transport.requests) == 1


def test_fetch_archive_returns_body_bytes() -> None:
    """Archive fetch should return the versioned release body."""
    transport = iana_transport("2023d", archives={"2023d": b"archive-bytes"})
    source = IanaReleaseSource(transport)

    archive_bytes = source.fetch_archive("2023d")

    assert archive_bytes == b"archive-bytes" and transport.requests[-1][1] == (
        "/time-zones/releases/tzdata2023d.tar.gz"
    )


def test_fetch_archive_raises_download_error_with_version() -> None:
    """Missing releases should raise a download error naming the version."""
    transport = iana_transport("2023d", archives={})
    source = IanaReleaseSource(transport)

    with pytest.raises(TzSyncDownloadError) as error_info:
        source.fetch_archive("2023d")

    assert error_info.value.version == "2023d"


def test_fetch_archive_raises_download_error_on_timeout() -> None:
    """Transport failures during download map to download errors."""
    transport = FakeTransport(failing_paths={"/time-zones/releases/tzdata2023d.tar.gz"})
    source = IanaReleaseSource(transport)

    with pytest.raises(TzSyncDownloadError):
        source.fetch_archive("2023d")
