"""Core constants used across tzsync modules.

This module centralizes endpoints, file names, and the tzdata allow-list.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".tzsync")
DEFAULT_IANA_HOSTNAME = "data.iana.org"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
IANA_VERSION_PATH = "/time-zones/tzdb/version"
IANA_RELEASES_PATH = "/time-zones/releases"
HTTP_STATUS_OK = 200
SNAPSHOT_DIR_PREFIX = "tzdata"
ARCHIVE_FILE_PREFIX = "tzdata"
ARCHIVE_FILE_SUFFIX = ".tar.gz"
STAGING_DIR_NAME = ".staging"
TZDATA_FILES_TO_EXTRACT = (
    "africa",
    "antarctica",
    "asia",
    "australasia",
    "backward",
    "etcetera",
    "europe",
    "northamerica",
    "southamerica",
    "iso3166.tab",
    "zone1970.tab",
)
