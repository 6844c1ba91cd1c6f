"""Root logger setup for the headless shell and embedding hosts.

Environment overrides win over saved settings:
  - ``WEATHERLIKE_LOG_LEVEL``: level name (``warning``) or number (``15``)
  - ``WEATHERLIKE_DEBUG``: truthy value forces DEBUG
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LOG_LEVEL_ENV = "WEATHERLIKE_LOG_LEVEL"
DEBUG_ENV = "WEATHERLIKE_DEBUG"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_level(raw: Optional[str], fallback: int = logging.INFO) -> int:
    text = (raw or "").strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper()) if text else None
    return level if isinstance(level, int) else fallback


def env_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    env = os.environ if environ is None else environ
    explicit = env.get(LOG_LEVEL_ENV)
    if explicit:
        return parse_level(explicit)
    if (env.get(DEBUG_ENV) or "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def configure_root(default_level: int = logging.INFO, *, environ: Optional[Mapping[str, str]] = None) -> int:
    """Install the compact root handler once and return the effective level."""
    forced = env_level(environ)
    effective = forced if forced is not None else default_level
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(effective)
    _quiet_transport(effective)
    return effective


def apply_saved_preferences(debug_enabled: bool, *, environ: Optional[Mapping[str, str]] = None) -> int:
    forced = env_level(environ)
    if forced is not None:
        level = forced
    else:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    _quiet_transport(level)
    return level


def env_requests_debug(environ: Optional[Mapping[str, str]] = None) -> bool:
    forced = env_level(environ)
    return forced is not None and forced <= logging.DEBUG


def _quiet_transport(level: int) -> None:
    # urllib3 connection chatter is only useful when debugging.
    logging.getLogger("urllib3").setLevel(level if level <= logging.DEBUG else logging.WARNING)


__all__ = [
    "DEBUG_ENV",
    "LOG_LEVEL_ENV",
    "apply_saved_preferences",
    "configure_root",
    "env_level",
    "env_requests_debug",
    "parse_level",
]
