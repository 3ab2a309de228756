"""Configuration constants and .env loading.

WHY: Centralizes the few knobs the inspector has (validation mode,
log level, download limits) so they are easy to find and override
without touching code.

HOW: python-dotenv loads the .env file on import. Defaults are plain
module-level values, each overridable through an environment variable.
The parse helpers raise ValueError with a clear message when a value
is malformed.

RULES:
- JPEG_INSPECTOR_STRICT: "true"/"false", default "true"
- JPEG_INSPECTOR_LOG_LEVEL: logging level name, default "WARNING"
- JPEG_INSPECTOR_HTTP_TIMEOUT: seconds, default 30
- JPEG_INSPECTOR_MAX_DOWNLOAD_BYTES: default 64 MiB
- Bad values raise ValueError at import time, never silently fall back
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    value = os.getenv(name, default).strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError("{} must be true or false, got {!r}".format(name, value))


def _env_number(name: str, default: str, cast: type) -> float:
    raw = os.getenv(name, default).strip()
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError("{} must be a number, got {!r}".format(name, raw)) from None
    if value <= 0:
        raise ValueError("{} must be positive, got {}".format(name, value))
    return value


def parse_log_level(name: str) -> int:
    """Map a level name such as "debug" to its logging constant.

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError("Unknown log level {!r}".format(name))
    return level


# ---------------------------------------------------------------------------
# Parsing defaults
# ---------------------------------------------------------------------------

DEFAULT_STRICT_MODE = _env_bool("JPEG_INSPECTOR_STRICT", "true")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = parse_log_level(os.getenv("JPEG_INSPECTOR_LOG_LEVEL", "WARNING"))
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ---------------------------------------------------------------------------
# Remote sources
# ---------------------------------------------------------------------------

HTTP_TIMEOUT_S = _env_number("JPEG_INSPECTOR_HTTP_TIMEOUT", "30", float)
MAX_DOWNLOAD_BYTES = int(_env_number("JPEG_INSPECTOR_MAX_DOWNLOAD_BYTES", str(64 * 1024 * 1024), int))

# ---------------------------------------------------------------------------
# File extensions the CLI expects to see
# ---------------------------------------------------------------------------

JPEG_EXTENSIONS: set[str] = {".jpg", ".jpeg", ".jpe", ".jfif", ".jif"}
"""Lowercase extensions, with dot. Other extensions only trigger a warning."""
