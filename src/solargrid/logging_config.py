"""
Logging Configuration
Attaches handlers to the ``solargrid`` package logger once, at startup.
Modules only ever call ``logging.getLogger(__name__)``.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route every ``solargrid.*`` record to stdout, and to a file if asked.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Where to mirror the log. Overwritten on each run.
    """
    package_logger = logging.getLogger("solargrid")
    package_logger.setLevel(level)

    # A second call (e.g. session restart) replaces the handlers
    if package_logger.hasHandlers():
        package_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.info(f"Logging initialized at {logging.getLevelName(level)}.")


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Resolve 'DEBUG', 'info', ... to a logging level, falling back to ``default``."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default
