#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Rotating log files for refdocs validation runs.

Each component ('references', 'tdd') gets one logger that writes every
record to `<component>.log`. Read failures and CLI aborts also go to the
shared `errors.log`, which is the file to look at after a red CI run.

Record kinds:
    OPERATION  start/complete markers with JSON details
    DOCUMENT   per-document error and warning counts
    SKIPPED    documents or categories that were not validated
    FAILURE    an exception, the path it concerns, and its traceback
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click


LOG_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RefdocsLogger:
    """
    File logger for one validation component.

    Attributes:
        log_dir: Directory holding the component log and errors.log
        component_name: Component identifier, also the log file stem
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "refdocs",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self._logger = logging.getLogger(f"refdocs.{component_name}")
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        # A previous instance for the same component may still hold handlers
        self.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        targets = ((f"{component_name}.log", logging.DEBUG), ("errors.log", logging.ERROR))
        for filename, level in targets:
            handler = RotatingFileHandler(
                self.log_dir / filename,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            handler.setLevel(level)
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def close(self) -> None:
        """Flush and detach the file handlers."""
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a start/complete marker such as 'validate_all_start'."""
        self._logger.info("OPERATION %s %s", operation, json.dumps(details or {}, default=str))

    def log_document(self, path: str, errors: int, warnings: int) -> None:
        """Record the outcome of validating one document."""
        self._logger.debug("DOCUMENT %s errors=%d warnings=%d", path, errors, warnings)

    def log_skipped(self, path: str, reason: str) -> None:
        """Record a document or category that was deliberately not validated."""
        self._logger.info("SKIPPED %s (%s)", path, reason)

    def log_failure(
        self,
        error: BaseException,
        path: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        """
        Record an exception in both the component log and errors.log.

        Args:
            error: The exception that stopped a document or command
            path: Document, directory or skill the failure concerns
            operation: CLI operation that was running, if any
        """
        where = "".join(
            f" {key}={value}"
            for key, value in (("path", path), ("operation", operation))
            if value is not None
        )
        self._logger.error(
            "FAILURE %s: %s%s", type(error).__name__, error, where, exc_info=error
        )


class NullLogger:
    """Stand-in with the RefdocsLogger interface that records nothing."""

    def close(self) -> None:
        pass

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_document(self, path: str, errors: int, warnings: int) -> None:
        pass

    def log_skipped(self, path: str, reason: str) -> None:
        pass

    def log_failure(
        self,
        error: BaseException,
        path: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        pass


_null_logger = NullLogger()


def safe_logger(logger: Optional[RefdocsLogger]) -> RefdocsLogger:
    """Return the logger, or a shared NullLogger when there is none."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def format_cli_error(error: BaseException, verbose: bool = False) -> str:
    """
    One-line error message for the terminal.

    Examples:
        >>> format_cli_error(ReferenceRootError("Skill 'x' has no references/ directory"))
        "❌ ReferenceRootError: Skill 'x' has no references/ directory"
    """
    message = f"❌ {type(error).__name__}: {error}"
    if verbose:
        trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return f"{message}\n\n{trace}"
    return message


def handle_cli_error(
    ctx: click.Context,
    error: BaseException,
    operation: str,
    path: Optional[str] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a command failure, print it to stderr and exit.

    The logger and verbose flag are taken from `ctx.obj` as set by the
    command group. Never returns.

    Args:
        ctx: Click context of the failing command
        error: Exception that stopped the command
        operation: Operation name for the log (e.g. 'check_references')
        path: Skill directory or file the failure concerns
        exit_code: Process exit code
    """
    obj = ctx.obj or {}
    safe_logger(obj.get("logger")).log_failure(error, path=path, operation=operation)
    click.echo(format_cli_error(error, obj.get("verbose", False)), err=True)
    ctx.exit(exit_code)
