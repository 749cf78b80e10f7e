#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Log files for diary conversions and CLI commands.

Every TimelessLogger owns two rotating files in its directory:

    <component>.log   completed operations, skipped days, warnings
    errors.log        failures with their context and traceback

Warnings are echoed to the console as well, so a CLI user sees a
non-canonical diary or dropped days without opening the log.

Library functions take an optional logger and wrap it with
safe_logger(), which substitutes a NullLogger when none is given.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(funcName)s:%(lineno)d] %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _rotating_handler(
    path: Path, level: int, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    """Append details to a log message as compact JSON."""
    if not details:
        return message
    return f"{message} {json.dumps(details, default=str, ensure_ascii=False)}"


def format_cli_error(error: Exception) -> str:
    """
    One-line error message shown to CLI users.

    Examples:
        >>> format_cli_error(ValueError("bad date"))
        '❌ ValueError: bad date'
    """
    return f"❌ {type(error).__name__}: {error}"


class TimelessLogger:
    """
    Rotating file logger for one component (e.g. 'diary').

    Attributes:
        log_dir: Directory holding the log files
        component_name: Prefix of the logger names and of the main log file
        main_logger: '<component>.operations', DEBUG and up
        error_logger: '<component>.errors', ERROR only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "timeless",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._claim_logger("operations", logging.DEBUG)
        self.main_logger.addHandler(
            _rotating_handler(
                self.log_dir / f"{component_name}.log", logging.DEBUG, max_bytes, backup_count
            )
        )
        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self.main_logger.addHandler(console)

        self.error_logger = self._claim_logger("errors", logging.ERROR)
        self.error_logger.addHandler(
            _rotating_handler(self.log_dir / "errors.log", logging.ERROR, max_bytes, backup_count)
        )

    def _claim_logger(self, suffix: str, level: int) -> logging.Logger:
        logger = logging.getLogger(f"{self.component_name}.{suffix}")
        logger.setLevel(level)
        # Logger objects are process-wide; release handlers of an earlier instance
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        return logger

    def close(self) -> None:
        """Flush and detach all handlers."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    # ---- Operations ----
    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a completed operation, e.g. 'write_diary' with its stats."""
        self.main_logger.info(_with_details(f"[{operation}] done", details))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_with_details(message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.warning(_with_details(message, details))

    # ---- Failures ----
    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Record a failure in errors.log.

        The traceback attached to the exception is written with it, so
        this can be called outside the except block that caught it.
        """
        self.error_logger.error(
            _with_details(f"{type(error).__name__}: {error}", context),
            exc_info=(type(error), error, error.__traceback__),
        )

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log a command failure and return the message to print.

        Args:
            error: Exception raised by the command
            context: Where it happened (operation, file paths)
            show_traceback: Append the traceback to the returned message

        Returns:
            Message for stderr, e.g. '❌ DiaryFileError: Diary file not found: x.md'
        """
        self.log_error(error, context or {"source": "cli"})
        return _cli_message(error, show_traceback)


def _cli_message(error: Exception, show_traceback: bool) -> str:
    message = format_cli_error(error)
    if not show_traceback:
        return message
    trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return f"{message}\n\n{trace}"


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    The full error goes to errors.log of the logger in ctx.obj (if any);
    stderr gets one line, plus the traceback when --verbose is set.
    Never returns.
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}

    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Stand-in for TimelessLogger when a caller passes no logger."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return _cli_message(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[TimelessLogger]) -> TimelessLogger:
    """
    Return the logger, or the shared NullLogger when it is None.

        safe_logger(logger).log_warning("Skipped 2 day(s)")
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
