"""Unit tests for release source selection."""

from __future__ import annotations

import pytest

from core.config import TzSyncConfig
from core.errors import TzSyncConfigError
from sources.iana_source import IanaReleaseSource
from sources.local_archive_source import LocalArchiveSource
from sources.release_source import build_release_source, open_release_source
from tests.fake_transport import iana_transport


def test_build_release_source_selects_local_archives_offline(tmp_path) -> None:
    """Offline config should yield a local archive source."""
    config = TzSyncConfig(data_root=tmp_path, offline_mode=True, archive_path=tmp_path)

    source = build_release_source(config)

    assert isinstance(source, LocalArchiveSource)


def test_build_release_source_selects_iana_online(tmp_path) -> None:
    """Online config should yield an IANA source using the given transport."""
    transport = iana_transport("2023d", archives={})
    config = TzSyncConfig(data_root=tmp_path, hostname="mirror.example.org")

    source = build_release_source(config, transport=transport)
    version = source.latest_version()

    assert isinstance(source, IanaReleaseSource) and version == "2023d" and (
        transport.requests[0][2] == "mirror.example.org"
    )


def test_build_release_source_rejects_offline_without_archive_path(tmp_path) -> None:
    """Offline mode with no archive path is a configuration error."""
    config = TzSyncConfig(data_root=tmp_path, offline_mode=True)

    with pytest.raises(TzSyncConfigError):
        build_release_source(config)


def test_open_release_source_closes_transport_it_creates(tmp_path, monkeypatch) -> None:
    """A transport created for online mode should be closed when the block exits."""
    transport = iana_transport("2023d", archives={})
    monkeypatch.setattr("sources.release_source.RequestsTransport", lambda: transport)
    config = TzSyncConfig(data_root=tmp_path)

    with open_release_source(config) as source:
        version = source.latest_version()

    assert version == "2023d" and transport.closed is True


def test_open_release_source_closes_transport_when_block_raises(
    tmp_path, monkeypatch
) -> None:
    """Owned transports should be released even when the caller fails."""
    transport = iana_transport("2023d", archives={})
    monkeypatch.setattr("sources.release_source.RequestsTransport", lambda: transport)
    config = TzSyncConfig(data_root=tmp_path)

    with pytest.raises(RuntimeError):
        with open_release_source(config):
            raise RuntimeError("caller failed")

    assert transport.closed is True


def test_open_release_source_leaves_injected_transport_open(tmp_path) -> None:
    """Caller-supplied transports belong to the caller and stay open."""
    transport = iana_transport("2023d", archives={})
    config = TzSyncConfig(data_root=tmp_path)

    with open_release_source(config, transport=transport) as source:
        source.latest_version()

    assert transport.closed is False
