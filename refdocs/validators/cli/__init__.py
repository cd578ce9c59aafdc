"""
Validators CLI Package
----------------------

Unified CLI for refdocs validators.

Available validators:
    - references: Progressive disclosure reference file rules
    - tdd: Co-located test presence for service modules

Usage:
    refdocs-validate references check hooks-reference
    refdocs-validate references check --all
    refdocs-validate references check hooks-reference --category events
    refdocs-validate references file events/hooks.md --root skills/x/references
    refdocs-validate tdd check
"""
import click

from .references import references
from .tdd import tdd


@click.group()
def cli():
    """
    refdocs Validation Suite.

    Check reference documents and co-located tests before they ship.
    """
    pass


cli.add_command(references)
cli.add_command(tdd)


if __name__ == "__main__":
    cli()
