#!/usr/bin/env python3
"""
references.py
-------------
Structural validation for progressive disclosure reference files.

Reference files are short, single-topic markdown documents that an
assistant reads on demand. Each one is checked for:
- Size (warn above 2KB, error above 3KB)
- Table-first layout (at least one markdown table)
- Exactly one h1 heading (ignoring fenced code blocks)
- Internal links that resolve to existing files

README.md, index.md and releases.md are navigational or generated and are
exempt from all rules.

Usage (programmatic):
    from refdocs.validators.references import ReferenceValidator

    validator = ReferenceValidator(Path("skills/hooks/references"))
    for result in validator.validate_all():
        print(result.path, result.valid)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

# --- Local imports ---
from refdocs.core.logging_manager import RefdocsLogger, safe_logger


RULE_SIZE = "size"
RULE_TABLE_FIRST = "table-first"
RULE_SINGLE_H1 = "single-h1"
RULE_VALID_LINKS = "valid-links"
RULE_UNREADABLE = "unreadable"

SIZE_WARN_THRESHOLD = 2 * 1024
SIZE_ERROR_THRESHOLD = 3 * 1024
EXCLUDED_FILES = frozenset({"README.md", "index.md", "releases.md"})

# Header row, optional blank lines, then a separator row of - : | only
TABLE_PATTERN = re.compile(r"\|[^\n]+\|\s+\|[-:|\s]+\|")
H1_PATTERN = re.compile(r"^# .+$", re.MULTILINE)
CODE_BLOCK_PATTERN = re.compile(r"```[\s\S]*?```")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
EXTERNAL_PREFIXES = ("http://", "https://")


@dataclass(frozen=True)
class Finding:
    """A single rule violation or caution."""

    rule: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"rule": self.rule, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """
    Verdict for one reference file.

    Attributes:
        path: Path relative to the reference root, with forward slashes
        errors: Findings that make the file invalid
        warnings: Findings that never affect validity
    """

    path: str
    errors: Tuple[Finding, ...] = ()
    warnings: Tuple[Finding, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "valid": self.valid,
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
        }


@dataclass(frozen=True)
class ValidatorConfig:
    """Thresholds and exclusions owned by one validator instance."""

    warn_bytes: int = SIZE_WARN_THRESHOLD
    error_bytes: int = SIZE_ERROR_THRESHOLD
    excluded_names: FrozenSet[str] = field(default=EXCLUDED_FILES)
    extension: str = ".md"


# ===== Rules =====


def _kb_label(num_bytes: int) -> str:
    """Render a threshold as '3KB', or '2.4KB' when it is not a whole KB."""
    if num_bytes % 1024 == 0:
        return f"{num_bytes // 1024}KB"
    return f"{num_bytes / 1024:.1f}KB"


def strip_code_blocks(text: str) -> str:
    """Remove fenced code blocks, fences included."""
    return CODE_BLOCK_PATTERN.sub("", text)


def check_size(
    size_bytes: int, config: Optional[ValidatorConfig] = None
) -> Tuple[List[Finding], List[Finding]]:
    """
    Check a file's byte size against the warn and error thresholds.

    Args:
        size_bytes: Size of the file in bytes
        config: Thresholds to apply (defaults to 2KB/3KB)

    Returns:
        (errors, warnings); at most one finding overall
    """
    config = config or ValidatorConfig()
    size_kb = f"{size_bytes / 1024:.1f}KB"

    if size_bytes > config.error_bytes:
        return [
            Finding(RULE_SIZE, f"File exceeds {_kb_label(config.error_bytes)} ({size_kb})")
        ], []
    if size_bytes > config.warn_bytes:
        return [], [
            Finding(
                RULE_SIZE,
                f"File exceeds {_kb_label(config.warn_bytes)} ({size_kb}), consider splitting",
            )
        ]
    return [], []


def check_table_first(text: str) -> List[Finding]:
    """Require at least one markdown table header/separator pair."""
    if TABLE_PATTERN.search(text):
        return []
    return [Finding(RULE_TABLE_FIRST, "File must contain at least one markdown table")]


def check_single_h1(text: str) -> List[Finding]:
    """
    Require exactly one top-level heading outside fenced code blocks.

    Lines such as '# comment' inside ```bash blocks are not headings.
    """
    count = len(H1_PATTERN.findall(strip_code_blocks(text)))

    if count == 0:
        return [Finding(RULE_SINGLE_H1, "File has no h1 heading (must have exactly one)")]
    if count > 1:
        return [
            Finding(
                RULE_SINGLE_H1,
                f"File has multiple h1 headings ({count}), must have exactly one",
            )
        ]
    return []


def check_links(text: str, document_dir: Path) -> List[Finding]:
    """
    Check that internal links resolve to existing files.

    Scans the raw text, so links inside code blocks are checked too.
    External (http/https) and same-document anchor links are skipped.
    A leading slash still means the document's own directory, never the
    filesystem root.

    Args:
        text: Raw document text
        document_dir: Directory containing the document on disk

    Returns:
        One finding per broken link, in the order links appear
    """
    findings = []

    for match in LINK_PATTERN.finditer(text):
        target = match.group(2)

        if target.startswith(EXTERNAL_PREFIXES) or target.startswith("#"):
            continue

        try:
            exists = (document_dir / target.lstrip("/")).exists()
        except (OSError, ValueError):
            exists = False

        if not exists:
            findings.append(Finding(RULE_VALID_LINKS, f"Broken internal link: {target}"))

    return findings


# ===== Discovery =====


def find_documents(directory: Path, extension: str = ".md") -> List[Path]:
    """
    Recursively find documents under a directory.

    Entries are visited depth-first in name order so results are the same
    on every platform.

    Args:
        directory: Directory to search
        extension: File suffix to collect

    Returns:
        List of document paths (empty if directory is missing)
    """
    if not directory.is_dir():
        return []

    documents = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            documents.extend(find_documents(entry, extension))
        elif entry.is_file() and entry.name.endswith(extension):
            documents.append(entry)

    return documents


# ===== Validator =====


def is_category_name(name: str) -> bool:
    """True if name is a single path component that stays under the root."""
    return bool(name) and name not in (".", "..") and "\\" not in name and Path(name).name == name


class ReferenceValidator:
    """Validates progressive disclosure reference files under one root."""

    def __init__(
        self,
        references_dir: Path,
        config: Optional[ValidatorConfig] = None,
        logger: Optional[RefdocsLogger] = None,
    ):
        """
        Initialize reference validator.

        Args:
            references_dir: Reference root directory
            config: Thresholds and exclusions (defaults apply if omitted)
            logger: Optional logger instance
        """
        self.references_dir = Path(references_dir)
        self.config = config or ValidatorConfig()
        self.logger = safe_logger(logger)

    def validate_file(self, relative_path: Union[str, Path]) -> ValidationResult:
        """
        Validate a single reference file.

        Args:
            relative_path: Path relative to the reference root

        Returns:
            ValidationResult for the file

        Raises:
            OSError: If the file is missing or unreadable
            UnicodeDecodeError: If the file is not UTF-8
        """
        relative = Path(relative_path)
        full_path = self.references_dir / relative

        raw = full_path.read_bytes()
        text = raw.decode("utf-8")

        errors, warnings = check_size(len(raw), self.config)
        errors.extend(check_table_first(text))
        errors.extend(check_single_h1(text))
        errors.extend(check_links(text, full_path.parent))

        result = ValidationResult(
            path=relative.as_posix(),
            errors=tuple(errors),
            warnings=tuple(warnings),
        )
        self.logger.log_document(result.path, len(errors), len(warnings))
        return result

    def validate_all(self) -> List[ValidationResult]:
        """
        Validate every non-excluded file under the reference root.

        Returns:
            One result per file, in discovery order
        """
        self.logger.log_operation(
            "validate_all_start", {"references_dir": str(self.references_dir)}
        )
        results = self._validate_documents(
            find_documents(self.references_dir, self.config.extension)
        )
        self._log_complete("validate_all_complete", results)
        return results

    def validate_category(self, category: str) -> List[ValidationResult]:
        """
        Validate only files in one category subdirectory.

        A category that does not exist has nothing to validate, so the
        result is an empty list rather than an error. The same holds for
        names that would leave the reference root (absolute paths, `..`,
        nested paths).

        Args:
            category: Subdirectory name directly under the reference root

        Returns:
            One result per file in the category, in discovery order
        """
        category_dir = self.references_dir / category
        if not is_category_name(category) or not category_dir.is_dir():
            self.logger.log_skipped(category, "not a category directory")
            return []

        self.logger.log_operation(
            "validate_category_start",
            {"references_dir": str(self.references_dir), "category": category},
        )
        results = self._validate_documents(
            find_documents(category_dir, self.config.extension)
        )
        self._log_complete("validate_category_complete", results)
        return results

    def is_excluded(self, document: Path) -> bool:
        return document.name in self.config.excluded_names

    def _validate_documents(self, documents: Iterable[Path]) -> List[ValidationResult]:
        """Validate documents, recording unreadable files instead of aborting."""
        results = []

        for document in documents:
            relative = document.relative_to(self.references_dir)
            if self.is_excluded(document):
                self.logger.log_skipped(relative.as_posix(), "excluded")
                continue

            try:
                results.append(self.validate_file(relative))
            except (OSError, UnicodeDecodeError) as e:
                self.logger.log_failure(e, path=relative.as_posix())
                results.append(
                    ValidationResult(
                        path=relative.as_posix(),
                        errors=(Finding(RULE_UNREADABLE, f"Could not read file: {e}"),),
                    )
                )

        return results

    def _log_complete(self, operation: str, results: List[ValidationResult]) -> None:
        self.logger.log_operation(
            operation,
            {
                "files_checked": len(results),
                "files_invalid": sum(1 for r in results if not r.valid),
            },
        )


# ===== Reporting =====


def format_reference_report(
    results: List[ValidationResult], title: Optional[str] = None
) -> str:
    """
    Format reference validation results as readable text.

    Args:
        results: Results to report
        title: Optional heading, e.g. the skill name

    Returns:
        Formatted report string
    """
    lines = []
    if title:
        lines.append(f"Validating {title}...")
        lines.append("")

    if not results:
        lines.append("  No reference files found")
        return "\n".join(lines)

    for result in results:
        icon = "✓" if result.valid else "✗"
        lines.append(f"  {icon} {result.path}")
        for error in result.errors:
            lines.append(f"      [ERROR] {error.rule}: {error.message}")
        for warning in result.warnings:
            lines.append(f"      [WARN]  {warning.rule}: {warning.message}")

    valid_count = sum(1 for r in results if r.valid)
    lines.append("")
    lines.append(f"  Summary: {valid_count}/{len(results)} files valid")

    return "\n".join(lines)
