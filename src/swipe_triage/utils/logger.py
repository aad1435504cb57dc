"""Logging configuration and utilities."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .config import settings

DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Google client and HTTP chatter that would otherwise flood the review screen
QUIET_LOGGERS = (
    "httpx",
    "httpcore",
    "googleapiclient",
    "google.auth",
    "google_auth_oauthlib",
    "uvicorn.access",
)


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
) -> None:
    """Route all records to stderr, plus ``log_file`` when given.

    stdout belongs to the terminal review screen, so nothing logs there.
    """
    numeric_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    formatter = logging.Formatter(format_string or (DEBUG_FORMAT if settings.debug else DEFAULT_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
