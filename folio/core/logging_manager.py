#!/usr/bin/env python3
"""
logging_manager.py
------------------
Run logs for the folio pipeline.

Every run of a component (``build``, ``check``...) writes one line per
event to ``<component>.log``. Events are tagged by what happened:

    START publish {"jobs": 1, "output_dir": "_site", "posts": 3}
    SKIP load {"kind": "MissingFieldError", "reason": "...", "source": "a.md"}
    DONE publish {"errors": 0, "pages_created": 5, ...}

Errors raised to the command line are also written, with traceback,
to ``errors.log``. Skips and warnings are echoed to the console.

Library code takes an optional logger and wraps it with ``safe_logger``,
which substitutes a ``NullLogger`` when none is given.
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
from typing import TYPE_CHECKING, Any, Dict, Optional

# --- Third party imports ---
import click

if TYPE_CHECKING:
    from folio.core.cli import OperationStats

LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 3

FILE_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
CONSOLE_FORMAT = "folio: %(message)s"


def _fields(details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return ""
    return " " + json.dumps(details, default=str, sort_keys=True)


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """
    One-line description of an error for the terminal.

    Examples:
        >>> format_cli_error(NotFoundError("intro"))
        "❌ NotFoundError: no post with slug 'intro'"
    """
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback and error.__traceback__ is not None:
        tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        message = f"{message}\n\n{tb}"
    return message


class FolioLogger:
    """
    Event log for one pipeline component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component whose run this is; names the run log
        run_log: Logger for run events (``<component>.log``)
        error_log: Logger for command failures (``errors.log``)
    """

    def __init__(self, log_dir: Path, component_name: str = "folio") -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.run_log = self._open(
            "run", self.log_dir / f"{component_name}.log", logging.DEBUG
        )
        self.error_log = self._open("errors", self.log_dir / "errors.log", logging.ERROR)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self.run_log.addHandler(console)

    def _open(self, channel: str, path: Path, level: int) -> logging.Logger:
        """Return a fresh, non-propagating logger writing to ``path``."""
        logger = logging.getLogger(f"folio.{self.component_name}.{channel}")
        logger.setLevel(level)
        logger.propagate = False
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        handler = RotatingFileHandler(
            path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        for logger in (self.run_log, self.error_log):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    # ---- Run events ----
    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record the start of a load or publish run and its inputs."""
        self.run_log.info(f"START {operation}{_fields(details)}")

    def log_summary(self, operation: str, stats: OperationStats) -> None:
        """Record the end of a run with its statistics."""
        self.run_log.info(f"DONE {operation}{_fields(stats.to_dict())}")

    def log_skip(
        self,
        stage: str,
        error: Exception,
        source: Optional[str] = None,
        slug: Optional[str] = None,
    ) -> None:
        """
        Record a post left out of a run.

        Args:
            stage: Pipeline stage that rejected it ('load' or 'render')
            error: The load or render error
            source: Source file name, when known
            slug: Post slug, when known
        """
        details: Dict[str, Any] = {
            "kind": type(error).__name__,
            "reason": getattr(error, "message", str(error)),
        }
        if source is not None:
            details["source"] = source
        if slug is not None:
            details["slug"] = slug
        self.run_log.warning(f"SKIP {stage}{_fields(details)}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.run_log.debug(f"{message}{_fields(details)}")

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.run_log.info(f"{message}{_fields(details)}")

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.run_log.warning(f"{message}{_fields(details)}")

    # ---- Failures ----
    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Write an error, its context and its traceback to errors.log.

        Args:
            error: The exception
            context: What was being done (operation, slug, paths...)
        """
        exc_info = (type(error), error, error.__traceback__) if error.__traceback__ else None
        self.error_log.error(
            f"{type(error).__name__}: {error}{_fields(context)}", exc_info=exc_info
        )

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """Log an error that ends a command and return its terminal message."""
        self.log_error(error, context)
        return format_cli_error(error, show_traceback)


def handle_cli_error(
    ctx: click.Context,
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    The error is logged through ``ctx.obj["logger"]`` (when set), echoed to
    stderr (with traceback under ``--verbose``), and the process exits with
    ``exit_code``. Never returns.
    """
    context: Dict[str, Any] = {"operation": operation, **(additional_context or {})}
    message = safe_logger(ctx.obj.get("logger")).log_cli_error(
        error, context, show_traceback=ctx.obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Stands in for FolioLogger when no logger was given; records nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_summary(self, operation: str, stats: OperationStats) -> None:
        pass

    def log_skip(
        self,
        stage: str,
        error: Exception,
        source: Optional[str] = None,
        slug: Optional[str] = None,
    ) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
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
        return format_cli_error(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[FolioLogger]) -> FolioLogger:
    """
    Return ``logger``, or the shared NullLogger when it is None.

    Lets library code write ``safe_logger(logger).log_info(...)`` without
    checking for a logger first.
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
