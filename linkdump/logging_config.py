"""
Logging configuration for linkdump.
"""
import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FILE = Path("linkdump.log")
ROOT_LOGGER = "linkdump"


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = LOG_FILE) -> logging.Logger:
    """Configure and return the root application logger.

    Logs go to stderr at the given level and, unless log_file is None,
    to a log file at DEBUG.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(fmt)
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the application root."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
