"""Logging setup for perf-charts.

Records go to the console and, optionally, to a log file. The CLI sets up
the root logger once; later steps (--verbose, the logging section of a
report config) adjust the level or attach a file through the helpers
below. Pipeline code logs through get_logger(), passing a context such as
{"chart": name} so every line names the chart being processed.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ContextLogger(logging.LoggerAdapter):
    """Prefixes every message with its context, e.g. "[chart=Throughput] ..."."""

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        if not self.extra:
            return msg, kwargs
        prefix = " ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"[{prefix}] {msg}", kwargs


def resolve_level(level: Union[str, int]) -> int:
    """Map a level name to its logging constant, INFO when unknown."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def _formatter() -> logging.Formatter:
    return logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def add_file_handler(log_file: Union[str, Path], level: Optional[Union[str, int]] = None) -> logging.FileHandler:
    """Attach a file handler to the root logger, creating parent directories.

    Args:
        log_file: Path of the log file.
        level: Handler level; defaults to the root logger's level.

    Returns:
        The new handler.
    """
    root_logger = logging.getLogger()
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(root_logger.level if level is None else resolve_level(level))
    handler.setFormatter(_formatter())
    root_logger.addHandler(handler)
    return handler


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """Replace the root logger's handlers with console and file output.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for log output.
        log_to_console: If True, log to stdout.

    Returns:
        Configured root logger.
    """
    log_level = resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(_formatter())
        root_logger.addHandler(console_handler)

    if log_file:
        add_file_handler(log_file, log_level)

    return root_logger


def get_logger(name: str, context: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Logger for a module, wrapped in a ContextLogger when a context is given."""
    logger = logging.getLogger(name)
    if context:
        return ContextLogger(logger, context)
    return logger


def set_log_level(level: Union[str, int]) -> None:
    """Change the level of the root logger and all of its handlers."""
    log_level = resolve_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers:
        handler.setLevel(log_level)


def enable_debug_logging() -> None:
    set_log_level(logging.DEBUG)
