"""Server-wide defaults: log levels and static file locations."""

from __future__ import annotations

from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for server logging, lowest first."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


DEFAULT_LOG_LEVEL = LogLevel.INFO
ENABLE_LOGGING = True
ENFORCE_WS_SPEC = False

STATIC_DIRECTORY = "static/"
STATIC_ENDPOINT = "/static/<path>"


def normalize_static_dir(path: str) -> str:
    """Return ``path`` with forward slashes only and a trailing slash.

    Raises ValueError for an empty path.
    """
    if not path:
        raise ValueError("static directory must not be empty")
    normalized = path.replace("\\", "/")
    if not normalized.endswith("/"):
        normalized += "/"
    return normalized