"""Runtime configuration model for tzsync.

This module owns all environment variable and config file parsing.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import math
import os
from pathlib import Path
from typing import Mapping, cast

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_IANA_HOSTNAME,
)
from core.errors import TzSyncConfigError, TzSyncDependencyError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})
_CONFIG_FILE_KEYS = frozenset(
    {
        "data_root",
        "offline_mode",
        "archive_path",
        "hostname",
        "http_timeout_seconds",
        "recompile_command",
    }
)


@dataclass(frozen=True)
class TzSyncConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Writable directory holding snapshots and staging files.
        offline_mode: Read releases from ``archive_path`` instead of IANA.
        archive_path: Local directory of ``tzdata<version>.tar.gz`` archives.
        hostname: Host serving the IANA version and release endpoints.
        http_timeout_seconds: Timeout applied to every network request.
        recompile_command: Optional command run after a successful update.
    """

    data_root: Path
    offline_mode: bool = False
    archive_path: Path | None = None
    hostname: str = DEFAULT_IANA_HOSTNAME
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    recompile_command: str | None = None

    @classmethod
    def from_env(cls) -> "TzSyncConfig":
        """Build config from process environment variables.

        Returns:
            A config object. Call ``validate`` before starting an update.

        Raises:
            TzSyncConfigError: If environment values cannot be parsed.
        """
        data_root_value = os.getenv("TZSYNC_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        archive_path_value = os.getenv("TZSYNC_ARCHIVE_PATH")
        return cls(
            data_root=_resolve_path(data_root_value),
            offline_mode=_parse_bool("TZSYNC_OFFLINE_MODE", os.getenv("TZSYNC_OFFLINE_MODE", "")),
            archive_path=_resolve_path(archive_path_value) if archive_path_value else None,
            hostname=os.getenv("TZSYNC_HOSTNAME", DEFAULT_IANA_HOSTNAME),
            http_timeout_seconds=_parse_timeout(
                "TZSYNC_HTTP_TIMEOUT",
                os.getenv("TZSYNC_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT_SECONDS)),
            ),
            recompile_command=os.getenv("TZSYNC_RECOMPILE_COMMAND") or None,
        )

    @classmethod
    def from_file(cls, config_path: str) -> "TzSyncConfig":
        """Build config from a YAML mapping, layered over environment values.

        Args:
            config_path: Path to a YAML file with config keys.

        Returns:
            A config object with file values taking precedence.

        Raises:
            TzSyncDependencyError: If PyYAML is unavailable.
            TzSyncConfigError: If the file is missing or invalid.
        """
        payload = _load_yaml_mapping(config_path)
        config = cls.from_env()
        overrides: dict[str, object] = {}
        if "data_root" in payload:
            overrides["data_root"] = _resolve_path(str(payload["data_root"]))
        if "offline_mode" in payload:
            overrides["offline_mode"] = _parse_bool("offline_mode", payload["offline_mode"])
        if "archive_path" in payload:
            raw_archive_path = payload["archive_path"]
            overrides["archive_path"] = (
                _resolve_path(str(raw_archive_path)) if raw_archive_path else None
            )
        if "hostname" in payload:
            overrides["hostname"] = str(payload["hostname"])
        if "http_timeout_seconds" in payload:
            overrides["http_timeout_seconds"] = _parse_timeout(
                "http_timeout_seconds", payload["http_timeout_seconds"]
            )
        if "recompile_command" in payload:
            raw_command = payload["recompile_command"]
            overrides["recompile_command"] = str(raw_command) if raw_command else None
        return replace(config, **overrides)  # type: ignore[arg-type]

    def validate(self) -> "TzSyncConfig":
        """Check cross-field constraints required before an update runs.

        Returns:
            The same config, for call chaining.

        Raises:
            TzSyncConfigError: If offline mode has no archive path or the
                timeout is not a positive finite number.
        """
        if self.offline_mode and self.archive_path is None:
            raise TzSyncConfigError(
                "Offline mode requires an archive directory. "
                "Set TZSYNC_ARCHIVE_PATH or pass --archive-path."
            )
        if not math.isfinite(self.http_timeout_seconds) or self.http_timeout_seconds <= 0:
            raise TzSyncConfigError(
                f"Invalid HTTP timeout {self.http_timeout_seconds}: expected a positive, "
                "finite number of seconds. Fix TZSYNC_HTTP_TIMEOUT or http_timeout_seconds."
            )
        return self


def _resolve_path(raw_value: str) -> Path:
    return Path(raw_value).expanduser().resolve()


def _parse_bool(field_name: str, raw_value: object) -> bool:
    """Parse a boolean flag from env text or YAML scalar.

    Args:
        field_name: Name used in error messages.
        raw_value: Raw string or bool value.

    Returns:
        Parsed flag.

    Raises:
        TzSyncConfigError: If the value is not a recognized boolean.
    """
    if isinstance(raw_value, bool):
        return raw_value
    normalized = str(raw_value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise TzSyncConfigError(
        f"Invalid {field_name} value: expected true/false, got '{raw_value}'. "
        "Use one of 1, 0, true, false, yes, no."
    )


def _parse_timeout(field_name: str, raw_value: object) -> float:
    """Parse the HTTP timeout value.

    Args:
        field_name: Name used in error messages.
        raw_value: Raw string or number.

    Returns:
        Timeout in seconds.

    Raises:
        TzSyncConfigError: If value is not a finite number.
    """
    try:
        timeout = float(cast(str, raw_value))
    except (TypeError, ValueError) as error:
        raise TzSyncConfigError(
            f"Invalid {field_name} value: "
            f"expected number of seconds, got '{raw_value}'. "
            f"Set {field_name} to a numeric value."
        ) from error
    if not math.isfinite(timeout):
        raise TzSyncConfigError(
            f"Invalid {field_name} value: expected a finite number of seconds, "
            f"got '{raw_value}'."
        )
    return timeout


def _load_yaml_mapping(config_path: str) -> Mapping[str, object]:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise TzSyncDependencyError(
            "YAML config support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    config_file = Path(config_path).expanduser().resolve()
    if not config_file.exists():
        raise TzSyncConfigError(
            f"Config file does not exist at {config_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(config_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise TzSyncConfigError(
            f"Failed to read config at {config_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise TzSyncConfigError(
            f"Failed to parse YAML config at {config_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise TzSyncConfigError(
            f"Invalid config at {config_file}: expected mapping, got {type(payload).__name__}."
        )
    unknown_keys = sorted(str(key) for key in payload if key not in _CONFIG_FILE_KEYS)
    if unknown_keys:
        raise TzSyncConfigError(
            f"Unknown config keys in {config_file}: {', '.join(unknown_keys)}. "
            f"Supported keys: {', '.join(sorted(_CONFIG_FILE_KEYS))}."
        )
    return {str(key): value for key, value in payload.items()}
