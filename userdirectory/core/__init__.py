"""Core utilities package."""

from .exceptions import (DirectoryError, InvalidArgumentError, NotFoundError,
                         UnavailableError)
from .logging import get_logger, log_event, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_event",
    "DirectoryError",
    "InvalidArgumentError",
    "NotFoundError",
    "UnavailableError",
]
