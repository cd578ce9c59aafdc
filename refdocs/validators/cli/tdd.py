"""
TDD Validation Commands
-----------------------

Commands for checking that service modules have co-located tests.

Commands:
    - check: Report service modules with missing or empty test files
"""
import click
from pathlib import Path
from typing import Optional

from refdocs.core.paths import LOG_DIR_ENV, SERVICES_DIR, resolve_log_dir, resolve_plugin_root


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
def tdd(
    ctx: click.Context, plugin_root: Optional[str], log_dir: Optional[str], verbose: bool
) -> None:
    """Validate that every service module has a co-located test file."""
    from refdocs.core.cli import setup_logger

    ctx.ensure_object(dict)
    ctx.obj["plugin_root"] = resolve_plugin_root(plugin_root)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(resolve_log_dir(log_dir), "tdd")


@tdd.command()
@click.option(
    "--source-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Service directory (defaults to <plugin-root>/src/services)",
)
@click.pass_context
def check(ctx: click.Context, source_dir: Optional[str]) -> None:
    """
    Check service modules for co-located tests.

    Every `foo.py` needs a `test_foo.py` beside it containing at least
    one test function.
    """
    from refdocs.core.exceptions import RefdocsError
    from refdocs.core.logging_manager import handle_cli_error
    from refdocs.validators.tdd import TddValidator, format_tdd_report

    directory = Path(source_dir) if source_dir else ctx.obj["plugin_root"] / SERVICES_DIR

    click.echo("Validating TDD compliance...\n")

    try:
        results = TddValidator(directory, ctx.obj["logger"]).validate_all()
    except RefdocsError as e:
        handle_cli_error(ctx, e, "check_tdd", path=str(directory))

    click.echo(format_tdd_report(results))

    failing = [r for r in results if not r.ok]
    if failing:
        raise click.ClickException(
            f"{len(failing)} service(s) are missing tests or have empty test files"
        )

    if results:
        click.echo("\nAll services have co-located tests.")
