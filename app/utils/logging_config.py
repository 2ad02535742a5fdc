"""
Logging configuration for the cinema catalog.

The API server and the maintenance scripts share one format. Console output
is always on; a rotating file under logs/ is added when a file name is given.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers kept at WARNING unless the app runs at DEBUG
QUIET_LOGGERS = ('urllib3', 'sqlalchemy.engine', 'multipart')


def _handlers(log_path: Optional[Path], max_bytes: int, backup_count: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        handlers.append(RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count))
    return handlers


def setup_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    log_dir: str = "logs",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> None:
    """
    Replace the root logger's handlers with console (and optional file) output.

    Args:
        log_file: Name of the log file inside log_dir; None logs to console only
        level: Logging level name ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        log_dir: Directory for log files
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files kept
    """
    numeric_level = getattr(logging, level.upper())

    log_path = None
    if log_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / log_file

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    for handler in _handlers(log_path, max_bytes, backup_count):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    if log_path is not None:
        root_logger.info("Logging to file: %s", log_path)


def configure_api_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Configure logging for the API server (level and file come from the environment)."""
    setup_logging(log_file=log_file, level=level)


def configure_maintenance_logging(debug: bool = False):
    """
    Configure logging for the maintenance scripts (schema init, cleanup, export).

    Args:
        debug: Enable debug logging, including per-table cascade counts
    """
    setup_logging(log_file="maintenance.log", level="DEBUG" if debug else "INFO")
