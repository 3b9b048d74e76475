"""Root logger setup for the desktop app.

Level precedence, highest first:
  1. ``KEYFLOW_LOG_LEVEL`` (a level name such as ``warning`` or a number)
  2. a truthy ``KEYFLOW_DEBUG_LOGGING`` or ``KEYFLOW_DEBUG``, forcing DEBUG
  3. the caller's default, or the "debug logging" box of the settings dialog
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

LEVEL_VAR = "KEYFLOW_LOG_LEVEL"
DEBUG_VARS = ("KEYFLOW_DEBUG_LOGGING", "KEYFLOW_DEBUG")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_level(raw: Union[int, str, None], default: int = logging.INFO) -> int:
    """Turn a level name or number into a ``logging`` level.

    Unrecognised text yields ``default`` instead of raising.
    """
    if isinstance(raw, int):
        return raw
    text = (raw or "").strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        pass
    # getLevelName maps known names to ints and anything else to a string.
    named = logging.getLevelName(text.upper())
    return named if isinstance(named, int) else default


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` if nothing is set."""
    raw = os.environ.get(LEVEL_VAR, "")
    if raw.strip():
        return parse_level(raw)
    for name in DEBUG_VARS:
        if os.environ.get(name, "").strip().lower() in _TRUTHY:
            return logging.DEBUG
    return None


def env_forces_debug() -> bool:
    level = env_level()
    return level is not None and level <= logging.DEBUG


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install the console handler once and set the root level.

    Returns:
        The level that was applied.
    """
    level = env_level()
    if level is None:
        level = parse_level(default_level)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    return level


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Apply the settings dialog choice unless the environment overrides it."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


__all__ = [
    "apply_gui_preferences",
    "configure_root",
    "env_forces_debug",
    "env_level",
    "level_name",
    "parse_level",
]
