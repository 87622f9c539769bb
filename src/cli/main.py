"""tzsync CLI entry points.
This module exposes commands for updating and inspecting tzdata snapshots.
It maps argparse commands onto source, store, and updater calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.update_command import add_update_command, run_update_command
from core.config import TzSyncConfig
from core.errors import TzSyncConfigError, TzSyncError
from sources.release_source import open_release_source
from store.snapshot_registry import SnapshotRegistry


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tzsync", description="IANA tzdata snapshot updater")
    parser.add_argument("--data-root", help="Override TZSYNC_DATA_ROOT for this command")
    parser.add_argument("--config", help="YAML config file layered over environment values")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Read releases from the local archive directory instead of IANA",
    )
    parser.add_argument("--archive-path", help="Local directory of tzdata<version>.tar.gz files")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_update_command(subparsers)
    _add_latest_command(subparsers)
    _add_installed_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tzsync CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
    except TzSyncConfigError as error:
        print(f"config_error={error}")
        return 2
    if args.command == "update":
        return run_update_command(config, args)
    if args.command == "latest":
        return _run_latest_command(config)
    if args.command == "installed":
        return _run_installed_command(config)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> TzSyncConfig:
    """Build validated config with CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Validated runtime config.

    Raises:
        TzSyncConfigError: If config values are invalid.
    """
    config = TzSyncConfig.from_file(args.config) if args.config else TzSyncConfig.from_env()
    if args.data_root:
        config = replace(config, data_root=Path(args.data_root).expanduser().resolve())
    if args.archive_path:
        config = replace(config, archive_path=Path(args.archive_path).expanduser().resolve())
    if args.offline:
        config = replace(config, offline_mode=True)
    return config.validate()


def _run_latest_command(config: TzSyncConfig) -> int:
    """Handle latest command.

    Args:
        config: Validated runtime config.

    Returns:
        Exit code.
    """
    with open_release_source(config) as source:
        try:
            version = source.latest_version()
        except TzSyncError as error:
            print(f"error={error}")
            return 1
    print(version)
    return 0


def _run_installed_command(config: TzSyncConfig) -> int:
    """Handle installed command.

    Args:
        config: Validated runtime config.

    Returns:
        Exit code.
    """
    registry = SnapshotRegistry(config.data_root)
    try:
        versions = registry.list_installed_versions()
    except TzSyncError as error:
        print(f"error={error}")
        return 1
    for version in versions:
        print(version)
    return 0


def _add_latest_command(subparsers: Any) -> None:
    """Register latest subcommand."""
    subparsers.add_parser("latest", help="Print the latest available tzdata version")


def _add_installed_command(subparsers: Any) -> None:
    """Register installed subcommand."""
    subparsers.add_parser("installed", help="List installed tzdata snapshots")
