#!/usr/bin/env python3
"""
tdd.py
------
Co-located test checker for service modules.

Every service module `foo.py` must have a `test_foo.py` beside it, and that
test file must declare at least one test function.

Skipped:
- Test files themselves (test_*.py)
- Package markers and pytest plumbing (__init__.py, conftest.py)

Usage (programmatic):
    from refdocs.validators.tdd import TddValidator

    missing = TddValidator(Path("src/services")).find_missing_tests()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

# --- Local imports ---
from refdocs.core.exceptions import SourceLayoutError
from refdocs.core.logging_manager import RefdocsLogger, safe_logger


EXCLUDED_FILES = frozenset({"__init__.py", "conftest.py"})
TEST_PREFIX = "test_"
TEST_DECLARATION = re.compile(r"^\s*(?:async\s+)?def\s+test\w*\s*\(", re.MULTILINE)


@dataclass(frozen=True)
class TddResult:
    """Co-located test status for one service module."""

    path: str
    test_path: Optional[str] = None
    issues: Tuple[str, ...] = ()

    @property
    def has_test(self) -> bool:
        return self.test_path is not None

    @property
    def ok(self) -> bool:
        return self.has_test and not self.issues


def expected_test_path(relative_path: Path) -> Path:
    """Map `pkg/foo.py` to `pkg/test_foo.py`."""
    return relative_path.with_name(f"{TEST_PREFIX}{relative_path.name}")


def is_service_file(path: Path) -> bool:
    return (
        path.suffix == ".py"
        and not path.name.startswith(TEST_PREFIX)
        and path.name not in EXCLUDED_FILES
    )


def find_service_files(directory: Path) -> List[Path]:
    """Recursively find service modules, depth-first in name order."""
    files = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            files.extend(find_service_files(entry))
        elif entry.is_file() and is_service_file(entry):
            files.append(entry)
    return files


class TddValidator:
    """Validates that service modules have co-located tests."""

    def __init__(self, source_dir: Path, logger: Optional[RefdocsLogger] = None):
        self.source_dir = Path(source_dir)
        self.logger = safe_logger(logger)

    def validate_all(self) -> List[TddResult]:
        """
        Check every service module under the source directory.

        Returns:
            One result per service module, in discovery order

        Raises:
            SourceLayoutError: If the source directory does not exist
        """
        if not self.source_dir.is_dir():
            raise SourceLayoutError(f"Source directory not found: {self.source_dir}")

        self.logger.log_operation("validate_tdd_start", {"source_dir": str(self.source_dir)})

        results = [
            self._validate_service_file(service.relative_to(self.source_dir))
            for service in find_service_files(self.source_dir)
        ]

        self.logger.log_operation(
            "validate_tdd_complete",
            {
                "services": len(results),
                "missing_tests": sum(1 for r in results if not r.has_test),
            },
        )
        return results

    def find_missing_tests(self) -> List[str]:
        """Paths of service modules that have no test file."""
        return [r.path for r in self.validate_all() if not r.has_test]

    def _validate_service_file(self, relative_path: Path) -> TddResult:
        test_relative = expected_test_path(relative_path)
        test_file = self.source_dir / test_relative

        if not test_file.is_file():
            return TddResult(
                path=relative_path.as_posix(),
                issues=(f"Test file missing: {test_relative.as_posix()}",),
            )

        issues = []
        try:
            source = test_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.log_failure(e, path=test_relative.as_posix())
            issues.append(f"Could not read test file: {e}")
        else:
            if not TEST_DECLARATION.search(source):
                issues.append("Test file appears to have no tests (no test functions)")

        return TddResult(
            path=relative_path.as_posix(),
            test_path=test_relative.as_posix(),
            issues=tuple(issues),
        )


def format_tdd_report(results: List[TddResult]) -> str:
    """
    Format co-located test results as readable text.

    Args:
        results: Results to report

    Returns:
        Formatted report string
    """
    if not results:
        return "No service files found"

    lines = []
    for result in results:
        icon = "✓" if result.ok else "✗"
        lines.append(f"{icon} {result.path}")
        for issue in result.issues:
            lines.append(f"    {issue}")

    ok_count = sum(1 for r in results if r.ok)
    lines.append("")
    lines.append(f"Summary: {ok_count}/{len(results)} services have valid tests")

    return "\n".join(lines)
