#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for refdocs.

Validation findings are never raised: they are returned as data on a
ValidationResult. The exceptions here cover operational failures, where
the requested scope could not be checked at all.

Exception Hierarchy:
    Exception (built-in)
    └── RefdocsError - Base for all refdocs operational errors
        ├── ReferenceRootError - Reference root or skill directory missing
        └── SourceLayoutError - Source directory for test checks missing

Usage:
    from refdocs.core.exceptions import RefdocsError, ReferenceRootError

    try:
        root = skill_references_dir(plugin_root, skill)
    except ReferenceRootError as e:
        logger.log_failure(e, operation="check_references")
"""


class RefdocsError(Exception):
    """
    Base exception for refdocs operational errors.

    Catch this to handle any refdocs failure, or catch specific
    subclasses for more granular error handling.
    """

    pass


class ReferenceRootError(RefdocsError):
    """
    Raised when a reference root cannot be located.

    Examples:
        >>> raise ReferenceRootError("Skill 'hooks' has no references/ directory")
    """

    pass


class SourceLayoutError(RefdocsError):
    """Raised when the source directory for co-located test checks is missing."""

    pass
