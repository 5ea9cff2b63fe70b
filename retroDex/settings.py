"""Django settings for retroDex.

The project has no web surface and no database: Django provides
configuration, logging setup, and the management-command runner for the
dex compiler. Paths and limits are driven by environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_int(name: str, *, default: int) -> int:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed integer value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw.strip())


def _env_path(name: str, *, default: Path) -> Path:
    """Parse a filesystem path environment variable, relative to BASE_DIR."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    path = Path(raw.strip()).expanduser()
    return path if path.is_absolute() else BASE_DIR / path


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or "dev-only-insecure-secret-key"

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "dex.apps.DexConfig",
]

DATABASES: dict[str, dict[str, object]] = {}

USE_TZ = True
TIME_ZONE = "UTC"

# Snapshot root in the `api/v2` layout (pokemon/<id>/index.json, move/<id>/index.json, ...).
DEX_SOURCE_DIR = _env_path("DEX_SOURCE_DIR", default=BASE_DIR / "_data" / "api" / "v2")
# Directory the compiled creature/move/trait tables are written to and loaded from.
DEX_OUTPUT_DIR = _env_path("DEX_OUTPUT_DIR", default=BASE_DIR / "_build" / "dex")
# Upper bound of the default creature id scan (eras 1-3 end at 386).
DEX_DEFAULT_MAX_ID = _env_int("DEX_DEFAULT_MAX_ID", default=386)

DEX_LOG_LEVEL = os.getenv("DEX_LOG_LEVEL", "INFO").strip().upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "compiler": {"handlers": ["console"], "level": DEX_LOG_LEVEL, "propagate": False},
        "dexdata": {"handlers": ["console"], "level": DEX_LOG_LEVEL, "propagate": False},
        "dex": {"handlers": ["console"], "level": DEX_LOG_LEVEL, "propagate": False},
    },
}
