"""Integration tests for full tzdata update cycles."""

from __future__ import annotations

from core.config import TzSyncConfig
from tests.archive_fixtures import build_tzdata_archive, write_tzdata_archive
from tests.fake_transport import iana_transport
from tzsync import SnapshotRegistry, maybe_recompile


def test_offline_cycles_follow_new_archives(tmp_path) -> None:
    """Dropping a newer archive in the directory should roll the snapshot forward."""
    archive_dir = tmp_path / "archives"
    data_root = tmp_path / "data"
    config = TzSyncConfig(data_root=data_root, offline_mode=True, archive_path=archive_dir)
    compiled: list[str | None] = []
    registry = SnapshotRegistry(data_root)

    def _compile() -> None:
        compiled.append(registry.current_version())

    write_tzdata_archive(archive_dir, "2023c")
    first = maybe_recompile(config, compile_fn=_compile)
    second = maybe_recompile(config, compile_fn=_compile)
    write_tzdata_archive(archive_dir, "2023d")
    third = maybe_recompile(config, compile_fn=_compile)

    assert (first, second, third) == ("updated", "no_update", "updated") and (
        compiled == ["2023c", "2023d"] and registry.list_installed_versions() == ("2023d",)
    )


def test_online_cycle_matches_iana_release_example(tmp_path) -> None:
    """Version body '2023d\\n' should replace an installed 2023c snapshot."""
    data_root = tmp_path / "data"
    offline_config = TzSyncConfig(
        data_root=data_root, offline_mode=True, archive_path=tmp_path / "archives"
    )
    write_tzdata_archive(tmp_path / "archives", "2023c")
    maybe_recompile(offline_config)
    transport = iana_transport("2023d", archives={"2023d": build_tzdata_archive("2023d")})

    outcome = maybe_recompile(TzSyncConfig(data_root=data_root), transport=transport)

    assert (
        outcome == "updated"
        and (data_root / "tzdata2023d").is_dir()
        and not (data_root / "tzdata2023c").exists()
    )
