"""
Logging configuration for applications embedding the habit engine.
The engine itself only creates named loggers; call configure_logging() once at startup.
"""
import logging
from pathlib import Path
from typing import Optional

from habit_engine.config import EngineSettings, load_settings
from habit_engine.constants import DEFAULT_LOG_DIRECTORY_DEV, LOG_FORMAT


def configure_logging(settings: Optional[EngineSettings] = None) -> Path:
    """
    Configure file and console logging.

    Falls back to a local directory when the configured one is not writable.

    Args:
        settings: Engine settings (loaded from the environment when omitted)

    Returns:
        Path of the log file in use
    """
    settings = settings or load_settings()

    log_dir = settings.log_dir
    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / settings.log_file
        file_handler = logging.FileHandler(log_path)
    except PermissionError:
        log_dir = DEFAULT_LOG_DIRECTORY_DEV
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / settings.log_file
        file_handler = logging.FileHandler(log_path)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            file_handler,
            logging.StreamHandler()
        ]
    )

    logging.getLogger("habit_engine").info(f"Habit engine logging to: {log_path}")
    return log_path
