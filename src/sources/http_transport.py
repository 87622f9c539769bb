"""HTTP transport capability used by online release sources.

This module isolates the HTTP client behind a narrow request interface.
Sources depend on the protocol so tests can swap in a fake transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import requests

from core.errors import TzSyncTransportError


@dataclass(frozen=True)
class HttpResponse:
    """Minimal response model returned by transports.

    Attributes:
        status_code: HTTP status code.
        body: Raw response body.
    """

    status_code: int
    body: bytes


class HttpTransport(Protocol):
    """Read-only HTTP request capability."""

    def request(self, method: str, path: str, hostname: str, timeout: float) -> HttpResponse:
        """Issue one request and return the full response.

        Raises:
            TzSyncTransportError: On connection, TLS, or timeout failures.
        """
        ...


class RequestsTransport:
    """HTTPS transport backed by a ``requests`` session."""

    def __init__(self, session: requests.Session | None = None, scheme: str = "https") -> None:
        self._session = session or requests.Session()
        self._scheme = scheme

    def request(self, method: str, path: str, hostname: str, timeout: float) -> HttpResponse:
        """Issue one request against ``hostname`` and buffer the body.

        Args:
            method: HTTP method, e.g. ``GET``.
            path: Absolute request path.
            hostname: Target host name.
            timeout: Connect and read timeout in seconds.

        Returns:
            Buffered response.

        Raises:
            TzSyncTransportError: If the request cannot complete.
        """
        url = f"{self._scheme}://{hostname}{path}"
        try:
            response = self._session.request(method, url, timeout=timeout)
        except requests.RequestException as error:
            raise TzSyncTransportError(
                f"HTTP {method} {url} failed: {error}. Check network access and retry."
            ) from error
        return HttpResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()
