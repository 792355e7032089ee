"""
Logging configuration for the webcommon API.

- One console handler on the root logger, level taken from LOG_LEVEL
- Colored output in development (ENV=dev), JSON lines everywhere else
- Handlers that SQLAlchemy attaches to its own loggers are removed so
  statements are not printed twice
- A timing decorator active in dev/qa only
"""

import json
import logging
import os
import sys
import time
from datetime import datetime, timezone
from functools import wraps
from typing import Optional, Dict, Any, Callable


class ColoredFormatter(logging.Formatter):
    """Formatter coloring level names and logger names for terminals."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[1;31m", # Bold Red
    }
    GREY = "\033[90m"
    RESET = "\033[0m"

    def formatTime(self, record, datefmt=None):
        """Timestamp with milliseconds."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s},{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        levelname, name = record.levelname, record.name

        color = self.COLORS.get(levelname, "")
        if color:
            record.levelname = f"{color}{levelname}{self.RESET}"
        record.name = f"{self.GREY}{name}{self.RESET}"

        try:
            return super().format(record)
        finally:
            # other handlers must see the plain values
            record.levelname, record.name = levelname, name


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for production log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "request_path"):
            log_data["request_path"] = record.request_path

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


def _get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def _get_environment() -> str:
    """Current environment name from ENV (dev, qa, prod, ...)."""
    return os.getenv("ENV", "prod").lower()


def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Calling it again replaces the console handler instead of stacking a
    second one, so it is safe to call from both main.py and tests.
    """
    if _get_environment() == "dev":
        formatter: logging.Formatter = ColoredFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = JSONFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(_get_log_level())

    # Keep file handlers, replace every console handler with ours
    kept = [
        h for h in root_logger.handlers
        if not isinstance(h, logging.StreamHandler) or isinstance(h, logging.FileHandler)
    ]
    root_logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root_logger.addHandler(console)
    for handler in kept:
        root_logger.addHandler(handler)

    # SQLAlchemy adds its own StreamHandler when echo is on; let it propagate instead
    for logger_name in list(logging.Logger.manager.loggerDict):
        if logger_name.startswith("sqlalchemy"):
            logger = logging.getLogger(logger_name)
            if logger.handlers:
                logger.handlers.clear()
            logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the specified name.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Application started")
    """
    return logging.getLogger(name)


def log_execution_time(func: Optional[Callable] = None, *, level: str = "DEBUG") -> Callable:
    """
    Log how long the decorated function took.

    Only measures in dev and qa; elsewhere the wrapped function is called
    straight through.

    Example:
        >>> @log_execution_time
        ... def fetch_data():
        ...     pass

        >>> @log_execution_time(level="INFO")
        ... def critical_operation():
        ...     pass
    """
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if _get_environment() not in ("dev", "qa"):
                return f(*args, **kwargs)

            logger = get_logger(f.__module__)
            start_time = time.perf_counter()
            try:
                return f(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - start_time
                log_method = getattr(logger, level.lower(), logger.debug)
                log_method(f"Function '{f.__name__}' executed in {elapsed:.4f}s")

        return wrapper

    # Allow usage with or without parentheses
    if func is None:
        return decorator
    return decorator(func)
