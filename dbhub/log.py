"""
Logging utilities for the DBHub client.
Provides per-component loggers for tracing requests to the service.
"""

import logging
import sys
from enum import IntEnum
from typing import Iterable, Union

from dbhub.config import settings


class LogLevel(IntEnum):
    """Log levels for client operations."""
    CRITICAL = 50
    ERROR = 40
    WARNING = 30
    INFO = 20
    DEBUG = 10
    TRACE = 5


logging.addLevelName(LogLevel.TRACE, "TRACE")


def parse_level(level: Union[int, str]) -> int:
    """
    Convert a level name or number into a numeric logging level.

    Args:
        level: A number, a numeric string, or a name such as 'debug' or 'TRACE'

    Returns:
        Numeric level

    Raises:
        ValueError: If the name is not a known level
    """
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    try:
        return LogLevel[text.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


class ClientLogger:
    """
    Logger for client operations with support for different components.
    """

    def __init__(self, name: str = "dbhub", level: Union[int, str] = LogLevel.WARNING):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(parse_level(level))

        # Only add handler if none exists
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def set_level(self, level: Union[int, str]) -> None:
        """Set the logging level."""
        self.logger.setLevel(parse_level(level))

    def critical(self, msg: str, **kwargs) -> None:
        """Log critical error message."""
        self.logger.critical(msg, **kwargs)

    def error(self, msg: str, **kwargs) -> None:
        """Log error message."""
        self.logger.error(msg, **kwargs)

    def warning(self, msg: str, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(msg, **kwargs)

    def info(self, msg: str, **kwargs) -> None:
        """Log info message."""
        self.logger.info(msg, **kwargs)

    def debug(self, msg: str, **kwargs) -> None:
        """Log debug message."""
        self.logger.debug(msg, **kwargs)

    def trace(self, msg: str, **kwargs) -> None:
        """Log trace message (very verbose)."""
        if self.logger.isEnabledFor(LogLevel.TRACE):
            self.logger.log(LogLevel.TRACE, msg, **kwargs)


# Logger instances for different components
_loggers = {}


def get_logger(component: str = "http") -> ClientLogger:
    """
    Get or create a logger for a specific component.

    Args:
        component: Name of the component (e.g., 'http', 'client')

    Returns:
        ClientLogger instance for the component
    """
    if component not in _loggers:
        try:
            level = parse_level(settings.LOG_LEVEL)
        except ValueError:
            # Unknown DBHUB_LOG_LEVEL must not break client construction
            level = LogLevel.WARNING
        _loggers[component] = ClientLogger(f"dbhub.{component}", level)
    return _loggers[component]


def set_global_level(level: Union[int, str]) -> None:
    """Set logging level for all components."""
    for logger in _loggers.values():
        logger.set_level(level)


def log_request(url: str, fields: Iterable[str], component: str = "http") -> None:
    """Log an outgoing request. Only field names are logged, never values."""
    logger = get_logger(component)
    names = ", ".join(sorted(name for name in fields if name != "apikey"))
    logger.debug(f"POST {url} fields=[{names}]")


def log_response(url: str, status_code: int, component: str = "http") -> None:
    """Log the status of a completed request."""
    logger = get_logger(component)
    logger.debug(f"{url} -> HTTP {status_code}")


def log_api_error(url: str, status_code: int, message, component: str = "http") -> None:
    """Log an error response from the service."""
    logger = get_logger(component)
    logger.warning(f"{url} rejected with HTTP {status_code}: {message}")


def log_transport_error(url: str, exc: BaseException, component: str = "http") -> None:
    """Log a request that never got a response."""
    logger = get_logger(component)
    logger.error(f"Request to {url} failed: {exc.__class__.__name__}: {exc}")
