"""
Centralized logging configuration for the scene bundler.

Log levels follow the module's "Log Level" setting:
    0 / debug: Batch boundaries, relay requests, per-tile draw offsets
    1 / info: Operation progress (walls created, tiles drawn, files saved)
    2 / warn: Non-fatal issues (tiles that failed to load, skipped batches)
    3 / error: Operation failures caught at the API boundary

Usage:
    from logging_config import setup_logging, parse_log_level

    logger = setup_logging(__name__, level=parse_log_level("1"))
    logger.info("Export started")
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

# Setting value -> logging level
LOG_LEVEL_CHOICES = {
    0: logging.DEBUG,
    1: logging.INFO,
    2: logging.WARNING,
    3: logging.ERROR,
}

_LEVEL_NAMES = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_log_level(value: Union[str, int]) -> int:
    """
    Convert a "Log Level" setting into a logging level.

    Accepts the numeric setting (0-3) or a level name.

    Raises:
        ValueError: If the value is not a known level
    """
    if isinstance(value, int):
        if value in LOG_LEVEL_CHOICES:
            return LOG_LEVEL_CHOICES[value]
        raise ValueError(f"Unknown log level: {value}")

    text = str(value).strip().lower()
    if text.isdigit() and int(text) in LOG_LEVEL_CHOICES:
        return LOG_LEVEL_CHOICES[int(text)]
    if text in _LEVEL_NAMES:
        return _LEVEL_NAMES[text]
    raise ValueError(f"Unknown log level: {value}")


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (typically __name__ from calling module)
        level: Logging level (default: INFO)
        log_file: Optional path to write logs to file
        console_output: Whether to output to console (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
