"""
Engine configuration.
Settings are read from HABIT_ENGINE_* environment variables with bounded defaults.
"""
import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

from habit_engine.constants import (
    STREAK_MAX_LOOKBACK_DAYS,
    TOP_STREAKS_LIMIT,
    ABANDONED_DISPLAY_LIMIT,
    DEFAULT_LOG_DIRECTORY,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    LOG_LEVELS,
    ENV_STREAK_LOOKBACK,
    ENV_TOP_STREAKS,
    ENV_ABANDONED_LIMIT,
    ENV_LOG_DIR,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
)

logger = logging.getLogger("habit_engine.config")


class EngineSettings(BaseModel):
    # Streak walk bound in calendar days
    streak_max_lookback_days: int = Field(default=STREAK_MAX_LOOKBACK_DAYS, ge=1, le=3650)

    # Display limits
    top_streaks_limit: int = Field(default=TOP_STREAKS_LIMIT, ge=1, le=100)
    abandoned_display_limit: int = Field(default=ABANDONED_DISPLAY_LIMIT, ge=1, le=100)

    # Logging
    log_dir: str = Field(default=DEFAULT_LOG_DIRECTORY)
    log_file: str = Field(default=DEFAULT_LOG_FILE)
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    class Config:
        frozen = True


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default on bad values"""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


def _env_log_level(name: str, default: str) -> str:
    """Read a log level name, falling back to default on unknown values"""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        logger.warning(f"Ignoring unknown {name}={raw!r}, using {default}")
        return default
    return level


def load_settings(overrides: Optional[dict] = None) -> EngineSettings:
    """
    Build settings from the environment.

    Args:
        overrides: Explicit values that take precedence over the environment

    Returns:
        EngineSettings instance
    """
    values = {
        "streak_max_lookback_days": _env_int(ENV_STREAK_LOOKBACK, STREAK_MAX_LOOKBACK_DAYS),
        "top_streaks_limit": _env_int(ENV_TOP_STREAKS, TOP_STREAKS_LIMIT),
        "abandoned_display_limit": _env_int(ENV_ABANDONED_LIMIT, ABANDONED_DISPLAY_LIMIT),
        "log_dir": os.getenv(ENV_LOG_DIR, DEFAULT_LOG_DIRECTORY),
        "log_file": os.getenv(ENV_LOG_FILE, DEFAULT_LOG_FILE),
        "log_level": _env_log_level(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
    }
    if overrides:
        values.update(overrides)
    return EngineSettings(**values)
