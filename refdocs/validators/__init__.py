#!/usr/bin/env python3
"""
validators
----------
Validation tools for refdocs.

- references: Size, table-first, single-h1 and link rules for reference files
- tdd: Co-located test presence for service modules

Each validator module contains its validation logic, result dataclasses
and a text report formatter. The cli package provides the unified
`refdocs-validate` entry point.

Usage:
    from refdocs.validators.references import ReferenceValidator
    from refdocs.validators.tdd import TddValidator
"""

from refdocs.validators.references import (
    Finding,
    ReferenceValidator,
    ValidationResult,
    ValidatorConfig,
)
from refdocs.validators.tdd import TddResult, TddValidator

__all__ = [
    "Finding",
    "ReferenceValidator",
    "ValidationResult",
    "ValidatorConfig",
    "TddResult",
    "TddValidator",
]
