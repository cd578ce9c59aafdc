#!/usr/bin/env python3
"""
cli.py
------
Shared CLI helpers for refdocs commands.

Functions:
    setup_logger: Initialize RefdocsLogger for CLI operations

Classes:
    ValidationStats: Counters summarising one validation run

Usage:
    from refdocs.core.cli import setup_logger, ValidationStats

    logger = setup_logger(log_dir, "references")
    stats = ValidationStats()
    stats.record(valid=True)
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from refdocs.core.logging_manager import RefdocsLogger


def setup_logger(log_dir: Path, component_name: str) -> RefdocsLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if needed and initializes a
    RefdocsLogger for the component.

    Args:
        log_dir: Base log directory (see paths.resolve_log_dir)
        component_name: Component identifier for logging (e.g., 'references', 'tdd')

    Returns:
        Configured RefdocsLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return RefdocsLogger(operations_log_dir, component_name=component_name)


@dataclass
class ValidationStats:
    """
    Counters for a validation run.

    Attributes:
        files_checked: Number of files validated
        files_valid: Number of files without errors
        warnings: Number of warnings emitted
        errors: Number of errors emitted
        start_time: Run start timestamp
    """
    files_checked: int = 0
    files_valid: int = 0
    warnings: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def record(self, valid: bool, errors: int = 0, warnings: int = 0) -> None:
        """Add one checked file to the counters."""
        self.files_checked += 1
        if valid:
            self.files_valid += 1
        self.errors += errors
        self.warnings += warnings

    @property
    def all_valid(self) -> bool:
        return self.files_valid == self.files_checked

    def duration(self) -> float:
        """Elapsed seconds since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        return (
            f"{self.files_valid}/{self.files_checked} files valid, "
            f"{self.errors} errors, {self.warnings} warnings"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_checked": self.files_checked,
            "files_valid": self.files_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "duration": self.duration(),
        }
