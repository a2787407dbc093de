"""
gridkit configuration — all environment variables in one place.

Read from environment at import time. Engines and the CLI take their
defaults from the `settings` singleton.
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "")
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


class Settings:
    """Engine and CLI settings from environment variables."""

    # Paginator
    DEFAULT_PAGE_SIZE: int = _env_int("GRIDKIT_PAGE_SIZE", 10)

    # Attribute parsing: raise AttributeParseError instead of falling back
    STRICT_ATTRIBUTES: bool = _env_bool("GRIDKIT_STRICT_ATTRIBUTES")

    # Logging (applied by the CLI only)
    LOG_LEVEL: str = os.environ.get("GRIDKIT_LOG_LEVEL", "WARNING").upper()


# Singleton instance
settings = Settings()
