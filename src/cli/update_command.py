"""Update command wiring for tzsync CLI."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any

from core.config import TzSyncConfig
from sources.release_source import open_release_source
from updater.recompile import build_updater


def add_update_command(subparsers: Any) -> None:
    """Register update subcommand."""
    parser = subparsers.add_parser(
        "update",
        help="Install the latest tzdata release when it differs from the installed one",
    )
    parser.add_argument(
        "--recompile-command",
        help="Command run after a successful update (overrides TZSYNC_RECOMPILE_COMMAND)",
    )


def run_update_command(config: TzSyncConfig, args: argparse.Namespace) -> int:
    """Run one update cycle and print its outcome."""
    if args.recompile_command:
        config = replace(config, recompile_command=args.recompile_command)
    with open_release_source(config) as source:
        report = build_updater(config).run_with_report(source)
    print(f"outcome={report.outcome}")
    print(f"previous_version={report.previous_version or '-'}")
    print(f"latest_version={report.latest_version or '-'}")
    if report.error_message:
        print(f"error={report.error_message}")
    return 1 if report.outcome == "error" else 0
