"""Recompilation hand-off after a successful update.

This module wires the downstream compiler into the orchestrator. The
compiler itself is opaque: any no-argument callable, or an external
command configured with ``TZSYNC_RECOMPILE_COMMAND``.
"""

from __future__ import annotations

import shlex
import subprocess

from core.config import TzSyncConfig
from core.logging_config import get_logger
from core.types import RecompileHook, UpdateOutcome
from sources.http_transport import HttpTransport
from sources.release_source import open_release_source
from store.archive_installer import ArchiveInstaller
from store.snapshot_registry import SnapshotRegistry
from updater.orchestrator import TzDatabaseUpdater

_LOGGER = get_logger(__name__)


def logged_recompile(compile_fn: RecompileHook) -> RecompileHook:
    """Wrap a compiler callable with start and finish log events."""

    def _hook() -> None:
        _LOGGER.info("tzdata_recompile_started")
        compile_fn()
        _LOGGER.info("tzdata_recompile_finished")

    return _hook


def command_recompile_hook(command: str) -> RecompileHook:
    """Build a hook that runs an external compiler command.

    Args:
        command: Shell-style command line, split with ``shlex``.

    Returns:
        Hook raising ``subprocess.CalledProcessError`` on non-zero exit.
    """
    argv = shlex.split(command)

    def _hook() -> None:
        subprocess.run(argv, check=True)

    return _hook


def build_updater(
    config: TzSyncConfig,
    compile_fn: RecompileHook | None = None,
) -> TzDatabaseUpdater:
    """Build an orchestrator rooted at ``config.data_root``.

    Args:
        config: Runtime configuration.
        compile_fn: Optional compiler callable. Falls back to the
            configured recompile command when omitted.

    Returns:
        Orchestrator with registry, installer, and recompile hook.
    """
    if compile_fn is None and config.recompile_command:
        compile_fn = command_recompile_hook(config.recompile_command)
    return TzDatabaseUpdater(
        registry=SnapshotRegistry(config.data_root),
        installer=ArchiveInstaller(config.data_root),
        recompile=logged_recompile(compile_fn) if compile_fn is not None else None,
    )


def maybe_recompile(
    config: TzSyncConfig,
    compile_fn: RecompileHook | None = None,
    transport: HttpTransport | None = None,
) -> UpdateOutcome:
    """Update tzdata from the configured source and recompile when updated.

    Args:
        config: Validated runtime configuration.
        compile_fn: Optional compiler callable.
        transport: Optional HTTP transport for online mode.

    Returns:
        Outcome of the update cycle.

    Raises:
        TzSyncConfigError: If config is invalid for the selected mode.
    """
    config.validate()
    with open_release_source(config, transport=transport) as source:
        return build_updater(config, compile_fn).run(source)
