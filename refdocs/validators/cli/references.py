"""
Reference Validation Commands
-----------------------------

Commands for validating progressive disclosure reference files.

Commands:
    - check: Validate the references/ directory of one skill, or all skills
    - file: Validate a single reference file
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from pathlib import Path
from typing import Dict, List, Optional

# --- Third party imports ---
import click
import yaml

# --- Local imports ---
from refdocs.core.exceptions import ReferenceRootError, RefdocsError
from refdocs.core.paths import (
    LOG_DIR_ENV,
    references_dir,
    resolve_log_dir,
    resolve_plugin_root,
    skills_dir,
)


def find_skills_with_references(plugin_root: Path) -> List[str]:
    """
    Find skills that ship a references/ directory.

    Args:
        plugin_root: Plugin root directory

    Returns:
        Skill names in name order (empty if there is no skills/ directory)
    """
    root = skills_dir(plugin_root)
    if not root.is_dir():
        return []

    return [
        entry.name
        for entry in sorted(root.iterdir(), key=lambda p: p.name)
        if entry.is_dir() and references_dir(plugin_root, entry.name).is_dir()
    ]


def skill_references_dir(plugin_root: Path, skill: str) -> Path:
    """
    Locate a skill's reference root.

    Raises:
        ReferenceRootError: If the skill has no references/ directory
    """
    path = references_dir(plugin_root, skill)
    if not path.is_dir():
        raise ReferenceRootError(f"Skill '{skill}' has no references/ directory")
    return path


def render_structured(report: Dict[str, list], output_format: str) -> str:
    """Render {skill: [ValidationResult, ...]} as JSON or YAML."""
    data = {skill: [r.to_dict() for r in results] for skill, results in report.items()}
    if output_format == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


@click.group()
@click.option(
    "--plugin-root",
    type=click.Path(file_okay=False),
    default=None,
    help="Plugin root directory (defaults to $PLUGIN_ROOT or the current directory)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    envvar=LOG_DIR_ENV,
    default=None,
    help="Directory for log files (defaults to the user app directory)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show tracebacks on errors")
@click.pass_context
def references(
    ctx: click.Context, plugin_root: Optional[str], log_dir: Optional[str], verbose: bool
) -> None:
    """
    Validate progressive disclosure reference files.

    Checks size limits, table-first layout, a single h1 heading and
    internal link integrity.
    """
    from refdocs.core.cli import setup_logger

    ctx.ensure_object(dict)
    ctx.obj["plugin_root"] = resolve_plugin_root(plugin_root)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(resolve_log_dir(log_dir), "references")


@references.command()
@click.argument("skill", required=False)
@click.option("--all", "check_all", is_flag=True, help="Validate every skill with references/")
@click.option("--category", default=None, help="Only validate this category subdirectory")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "yaml"]),
    default="text",
    show_default=True,
    help="Report format",
)
@click.pass_context
def check(
    ctx: click.Context,
    skill: Optional[str],
    check_all: bool,
    category: Optional[str],
    output_format: str,
) -> None:
    """
    Validate the reference files of SKILL (or of every skill with --all).

    Exits non-zero if any file has errors. Warnings are reported but do
    not fail the run.
    """
    from refdocs.core.cli import ValidationStats
    from refdocs.core.logging_manager import handle_cli_error
    from refdocs.validators.references import ReferenceValidator, format_reference_report

    if not skill and not check_all:
        raise click.UsageError("Provide a SKILL name or use --all")

    plugin_root: Path = ctx.obj["plugin_root"]
    logger = ctx.obj["logger"]

    if check_all:
        skills = find_skills_with_references(plugin_root)
        if not skills:
            click.echo("No skills with references/ directories found.")
            return
        if output_format == "text":
            click.echo(f"Found {len(skills)} skill(s) with references\n")
    else:
        skills = [skill]

    report: Dict[str, list] = {}
    stats = ValidationStats()
    for name in skills:
        try:
            root = skill_references_dir(plugin_root, name)
        except RefdocsError as e:
            handle_cli_error(
                ctx, e, "check_references", path=str(references_dir(plugin_root, name))
            )

        validator = ReferenceValidator(root, logger=logger)
        results = validator.validate_category(category) if category else validator.validate_all()
        report[name] = results

        for result in results:
            stats.record(result.valid, len(result.errors), len(result.warnings))

        if output_format == "text":
            click.echo(format_reference_report(results, f"{name}/references/"))
            click.echo()

    logger.log_operation("check_references_complete", stats.to_dict())

    if output_format == "text":
        click.echo(f"Total: {stats.summary()}")
    else:
        click.echo(render_structured(report, output_format))

    if not stats.all_valid:
        raise click.ClickException(
            f"{stats.files_checked - stats.files_valid} reference file(s) have errors"
        )

    if output_format == "text":
        click.echo("All reference files are valid.")


@references.command(name="file")
@click.argument("path")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False),
    required=True,
    help="Reference root the path is relative to",
)
@click.pass_context
def check_file(ctx: click.Context, path: str, root: str) -> None:
    """Validate a single reference file at PATH (relative to --root)."""
    from refdocs.core.logging_manager import handle_cli_error
    from refdocs.validators.references import ReferenceValidator, format_reference_report

    validator = ReferenceValidator(Path(root), logger=ctx.obj["logger"])

    try:
        result = validator.validate_file(path)
    except (OSError, UnicodeDecodeError) as e:
        handle_cli_error(ctx, e, "check_file", path=str(Path(root) / path))

    click.echo(format_reference_report([result]))

    if not result.valid:
        raise click.ClickException(f"{path} has {len(result.errors)} error(s)")
