"""Unit tests for the requests-backed HTTP transport."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
import requests

from core.errors import TzSyncTransportError
from sources.http_transport import RequestsTransport


@dataclass
class _FakeResponse:
    status_code: int
    content: bytes


@dataclass
class _FakeSession:
    response: _FakeResponse | None = None
    error: Exception | None = None
    calls: list[tuple[str, str, float]] = field(default_factory=list)

    def request(self, method: str, url: str, timeout: float) -> _FakeResponse:
        self.calls.append((method, url, timeout))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def test_request_builds_https_url_and_passes_timeout() -> None:
    """Transport should target https://<host><path> with the given timeout."""
    session = _FakeSession(response=_FakeResponse(status_code=200, content=b"2023d\n"))
    transport = RequestsTransport(session=session)  # type: ignore[arg-type]

    response = transport.request(
        "GET", "/time-zones/tzdb/version", hostname="data.iana.org", timeout=3.0
    )

    assert session.calls == [("GET", "https://data.iana.org/time-zones/tzdb/version", 3.0)] and (
        response.status_code == 200 and response.body == b"2023d\n"
    )


def test_request_returns_non_200_responses_unchanged() -> None:
    """Status interpretation belongs to sources, not the transport."""
    session = _FakeSession(response=_FakeResponse(status_code=404, content=b""))
    transport = RequestsTransport(session=session)  # type: ignore[arg-type]

    response = transport.request("GET", "/missing", hostname="data.iana.org", timeout=1.0)

    assert response.status_code == 404


def test_request_wraps_timeouts_in_transport_error() -> None:
    """requests timeouts should surface as transport errors."""
    session = _FakeSession(error=requests.Timeout("read timed out"))
    transport = RequestsTransport(session=session)  # type: ignore[arg-type]

    with pytest.raises(TzSyncTransportError, match="read timed out"):
        transport.request("GET", "/time-zones/tzdb/version", hostname="data.iana.org", timeout=1.0)


def test_request_wraps_connection_errors_in_transport_error() -> None:
    """Connection failures should surface as transport errors."""
    session = _FakeSession(error=requests.ConnectionError("connection refused"))
    transport = RequestsTransport(session=session)  # type: ignore[arg-type]

    with pytest.raises(TzSyncTransportError):
        transport.request("GET", "/", hostname="localhost", timeout=1.0)
