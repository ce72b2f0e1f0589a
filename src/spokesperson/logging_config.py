"""Structured logging configuration for the Spokesperson dashboard."""

import logging
import sys
from pathlib import Path
from typing import Optional


DEFAULT_LOG_DIR = Path("logs")
DEFAULT_LOG_FILE = "spokesperson.log"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER_NAME = "spokesperson"


def setup_logging(
    log_file: Optional[Path] = None,
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    console: bool = True,
    file_output: bool = True,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """Configure logging for the dashboard package.

    Args:
        log_file: Path to log file (default: logs/spokesperson.log)
        log_dir: Directory for log files (default: logs/)
        level: Logging level (default: INFO)
        console: Whether to log to stderr (default: True)
        file_output: Whether to write a log file at all (default: True)
        format_string: Custom log format string

    Returns:
        The configured package logger
    """
    fmt = format_string or DEFAULT_FORMAT
    formatter = logging.Formatter(fmt, datefmt=DEFAULT_DATE_FORMAT)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if file_output:
        if log_dir is None:
            log_dir = DEFAULT_LOG_DIR
        if log_file is None:
            log_file = log_dir / DEFAULT_LOG_FILE
        elif not log_file.is_absolute():
            log_file = log_dir / log_file
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # stderr keeps stdout free for rendered reports
    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.propagate = False

    if file_output:
        logger.info(f"Logging initialized: {log_file}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance under the spokesperson namespace
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
