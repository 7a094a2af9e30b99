"""Environment variable helpers."""

from __future__ import annotations

import logging
import os
from typing import Optional

# core.logging depends on this module, so warnings go through the stdlib logger directly.
logger = logging.getLogger(__name__)

_LEVEL_NAMES = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key, default)
    if value is None:
        logger.debug("Environment variable %s not set. Using default=%s.", key, default)
    return value


def env_log_level(key: str, default: int) -> int:
    """Resolve a logging level from a name (``debug``) or a number (``10``)."""

    raw = env_str(key)
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().lower()
    if normalized in _LEVEL_NAMES:
        return _LEVEL_NAMES[normalized]
    try:
        value = int(normalized)
        if value < 0:
            raise ValueError
        return value
    except ValueError:
        logger.warning("Invalid log level %s='%s'. Falling back to %s.", key, raw, logging.getLevelName(default))
        return default
