"""Shared typed models.

This module defines immutable data models used by the source, store,
updater, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal

UpdateOutcome = Literal["updated", "no_update", "error"]
RecompileHook = Callable[[], None]


@dataclass(frozen=True)
class UpdateReport:
    """Result of one orchestration cycle.

    Attributes:
        outcome: Terminal state of the cycle.
        previous_version: Version active before the cycle, if any.
        latest_version: Latest version reported by the source, if read.
        error_message: Failure description when ``outcome`` is ``error``.
    """

    outcome: UpdateOutcome
    previous_version: str | None
    latest_version: str | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class InstalledSnapshot:
    """One extracted tzdata snapshot on disk.

    Attributes:
        version: Version identifier, e.g. ``2023c``.
        path: Snapshot directory path.
    """

    version: str
    path: Path
