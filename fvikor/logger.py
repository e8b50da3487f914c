# -*- coding: utf-8 -*-
"""
Logging for the Fuzzy VIKOR package.

All package loggers live under one root logger (``fuzzy_vikor``), so a
single ``setup_logger`` call controls the whole package:

- console output on stdout, plain text, one line per record
- optional rotating text file, always at DEBUG
- optional rotating JSON-lines file for machine parsing

Helpers: ``log_exceptions`` (decorator), ``timed_operation`` (context
manager) and ``PipelineLogger`` for reporting a calculation run.
"""

import logging
import logging.handlers
import json
import sys
import time
from pathlib import Path
from datetime import datetime
from typing import Optional, Dict, Any, List, Union, Callable
from contextlib import contextmanager
from functools import wraps


LOG_NAME = "fuzzy_vikor"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3


# =============================================================================
# Formatters
# =============================================================================

class CleanFormatter(logging.Formatter):
    """Text formatter that keeps each record on a single line."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        # Tracebacks keep their line breaks
        if record.exc_info:
            return text
        return text.replace("\n", " ")


class JSONFormatter(logging.Formatter):
    """One JSON object per record; extra attributes are copied across."""

    _STANDARD_ATTRS = set(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if self.include_extra:
            for key, value in record.__dict__.items():
                if key in self._STANDARD_ATTRS:
                    continue
                entry[key] = value if isinstance(value, (int, float, str, bool)) else repr(value)
        return json.dumps(entry, ensure_ascii=False)


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter,
                      max_bytes: int, backup_count: int) -> logging.Handler:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _level_number(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


# =============================================================================
# Logger Factory
# =============================================================================

class LoggerFactory:
    """
    Configures the package root logger and hands out child loggers.

    Module loggers are created lazily as ``<root>.<module>``; they carry no
    handlers of their own and propagate to the root.
    """

    _loggers: Dict[str, logging.Logger] = {}
    _root_logger: Optional[logging.Logger] = None

    @classmethod
    def setup(
        cls,
        name: str = LOG_NAME,
        level: Union[int, str] = logging.INFO,
        log_file: Optional[Path] = None,
        json_file: Optional[Path] = None,
        console: bool = True,
        max_bytes: int = MAX_LOG_SIZE,
        backup_count: int = BACKUP_COUNT,
    ) -> logging.Logger:
        """
        (Re)configure the root logger ``name``.

        Parameters
        ----------
        level : int or str
            Threshold for console and JSON output ("DEBUG", "INFO", ...)
        log_file : Path, optional
            Rotating text log; records everything from DEBUG up
        json_file : Path, optional
            Rotating JSON-lines log at ``level``
        console : bool
            Write to stdout

        Handlers from an earlier call are closed and replaced.
        """
        level = _level_number(level)

        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG if log_file else level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = False

        if console:
            stream = logging.StreamHandler(sys.stdout)
            stream.setLevel(level)
            stream.setFormatter(CleanFormatter(
                fmt='%(asctime)s | %(levelname)-8s | %(message)s',
                datefmt=CONSOLE_DATE_FORMAT
            ))
            logger.addHandler(stream)

        if log_file:
            logger.addHandler(_rotating_handler(
                log_file, logging.DEBUG,
                CleanFormatter(
                    fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
                    datefmt=FILE_DATE_FORMAT
                ),
                max_bytes, backup_count,
            ))

        if json_file:
            logger.addHandler(_rotating_handler(json_file, level, JSONFormatter(), max_bytes, backup_count))

        cls._root_logger = logger
        cls._loggers[name] = logger
        return logger

    @classmethod
    def get_logger(cls, name: str = LOG_NAME) -> logging.Logger:
        """Cached logger; names outside the root namespace are nested under it."""
        if name in cls._loggers:
            return cls._loggers[name]

        root = cls._root_name()
        full_name = name if name.startswith(root) else f"{root}.{name}"
        logger = logging.getLogger(full_name)
        cls._loggers[name] = logger
        return logger

    @classmethod
    def get_module_logger(cls, module_name: str) -> logging.Logger:
        """Logger for a package module, e.g. ``'mcdm.fuzzy_vikor'``."""
        return cls.get_logger(f"{cls._root_name()}.{module_name}")

    @classmethod
    def reset(cls) -> None:
        """Forget cached loggers; attached handlers are left alone."""
        cls._loggers.clear()
        cls._root_logger = None

    @classmethod
    def _root_name(cls) -> str:
        return cls._root_logger.name if cls._root_logger else LOG_NAME


def setup_logger(
    name: str = LOG_NAME,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    json_file: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    return LoggerFactory.setup(
        name=name,
        level=level,
        log_file=log_file,
        json_file=json_file,
        console=console,
    )


def setup_from_config(config) -> logging.Logger:
    """Configure logging from a ``LoggingConfig``."""
    return setup_logger(
        level=config.level,
        log_file=config.log_file,
        json_file=config.json_file,
        console=config.console,
    )


def get_logger(name: str = LOG_NAME) -> logging.Logger:
    return LoggerFactory.get_logger(name)


def get_module_logger(module_name: str) -> logging.Logger:
    return LoggerFactory.get_module_logger(module_name)


# =============================================================================
# Decorators and Context Managers
# =============================================================================

def log_exceptions(
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
    reraise: bool = True
) -> Callable:
    """
    Log any exception escaping the wrapped function, with traceback.

    With ``reraise=False`` the exception is swallowed and None returned.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or get_logger()
            try:
                return func(*args, **kwargs)
            except Exception as e:
                log.log(level, f"{func.__qualname__} failed: {e}", exc_info=True)
                if reraise:
                    raise
                return None

        return wrapper
    return decorator


@contextmanager
def timed_operation(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG
):
    """
    Log start and elapsed time of a block.

    Example:
        with timed_operation(logger, "fuzzy VIKOR calculation"):
            run()
    """
    start = time.perf_counter()
    logger.log(level, f"Starting: {operation}")
    try:
        yield
    finally:
        logger.log(level, f"Finished: {operation} ({time.perf_counter() - start:.4f}s)")


# =============================================================================
# Run Reporting
# =============================================================================

class PipelineLogger:
    """Writes a calculation run as banners, metric lines, rankings and steps."""

    STEP_ICONS = {
        "info": "*",
        "done": "+",
        "warn": "!",
        "error": "x",
    }

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def banner(self, title: str, char: str = "=", width: int = 60) -> None:
        rule = char * width
        self.logger.info(rule)
        self.logger.info(title.center(width))
        self.logger.info(rule)

    def metric(self, name: str, value: Any, unit: str = "") -> None:
        text = f"{value:.4f}" if isinstance(value, float) else str(value)
        suffix = f" {unit}" if unit else ""
        self.logger.info(f"  * {name}: {text}{suffix}")

    def metrics(self, values: Dict[str, Any]) -> None:
        for name, value in values.items():
            self.metric(name, value)

    def ranking(self, rankings: List[tuple], title: str = "Rankings", top_n: int = 5) -> None:
        self.logger.info(f"  {title} (Top {top_n}):")
        for position, (label, score) in enumerate(rankings[:top_n], 1):
            self.logger.info(f"    {position}. {label}: {score:.4f}")

    def step(self, message: str, status: str = "info") -> None:
        self.logger.info(f"  {self.STEP_ICONS.get(status, '*')} {message}")


__all__ = [
    'setup_logger',
    'setup_from_config',
    'get_logger',
    'get_module_logger',
    'LoggerFactory',
    'PipelineLogger',
    'CleanFormatter',
    'JSONFormatter',
    'log_exceptions',
    'timed_operation',
    'LOG_NAME',
]
