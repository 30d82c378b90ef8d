# config.py
"""
Environment-driven defaults for probcore.

probcore has no configuration file. Two environment variables are read the
first time settings are needed:

- ``PROBCORE_SEED``: integer seed for the lazily created default random source.
- ``PROBCORE_LOG_LEVEL``: level name used by :func:`configure_logging`.
"""
from __future__ import annotations

import functools
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

__all__ = [
    "Settings",
    "load_settings",
    "reload_settings",
    "configure_logging",
]

SEED_ENV_VAR = "PROBCORE_SEED"
LOG_LEVEL_ENV_VAR = "PROBCORE_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    default_seed: Optional[int] = None
    log_level: Optional[str] = None


def _parse_seed(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    try:
        seed = int(raw)
    except ValueError as e:
        raise ValueError(f"{SEED_ENV_VAR} must be an integer, got {raw!r}") from e
    if seed < 0:
        raise ValueError(f"{SEED_ENV_VAR} must be non-negative, got {seed}")
    return seed


@functools.lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Read settings from the environment (cached after the first call)."""
    level = os.environ.get(LOG_LEVEL_ENV_VAR)
    return Settings(
        default_seed=_parse_seed(os.environ.get(SEED_ENV_VAR)),
        log_level=level.strip().upper() if level and level.strip() else None,
    )


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again."""
    load_settings.cache_clear()
    return load_settings()


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach a stream handler to the ``probcore`` logger.

    ``level`` overrides ``PROBCORE_LOG_LEVEL``. When neither is given the
    logger level is left as it is. Calling this twice does not add a second
    handler.
    """
    logger = logging.getLogger("probcore")
    if level is None:
        level = load_settings().log_level
    if level is not None:
        if isinstance(level, str) and logging.getLevelName(level.upper()) == f"Level {level.upper()}":
            raise ValueError(f"Unknown log level {level!r}")
        logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(getattr(h, "_probcore_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._probcore_handler = True
        logger.addHandler(handler)
    return logger
