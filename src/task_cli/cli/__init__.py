"""
task-cli - Main application entry point.

A single Typer command takes the global options, then hands the verb and
its raw arguments to dispatch(), which routes them to a handler.
"""

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import typer
from pydantic import ValidationError

from task_cli import __version__
from task_cli.cli.commands import (
    COMMANDS,
    CommandContext,
    CommandOutcome,
    show_help,
)
from task_cli.cli.errors import ExitCode, print_error, print_lines
from task_cli.core.config import load_config, load_layered_env
from task_cli.core.tasks.store import TaskStore

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="task-cli",
    help="Track short tasks in a local JSON file",
    add_completion=False,
)


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for task-cli.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def dispatch(argv: Sequence[str], ctx: CommandContext) -> CommandOutcome:
    """
    Route a raw argument vector to its handler.

    The verb is matched case-insensitively; the remaining arguments are
    passed through untouched. No arguments shows help.

    Args:
        argv: Arguments after the program name and global options
        ctx: Store and clock for the handler

    Returns:
        The handler's outcome, or a failure for an unknown verb
    """
    if not argv:
        return show_help()

    verb = argv[0].lower()
    handler = COMMANDS.get(verb)
    if handler is None:
        logger.debug("Unknown command %r", argv[0])
        return CommandOutcome.failure(
            f'Unknown command "{argv[0]}". Use \'help\' to see the available commands.',
            lines=show_help().lines,
        )

    logger.debug("Dispatching %s with %d argument(s)", verb, len(argv) - 1)
    return handler(list(argv[1:]), ctx)


def render(outcome: CommandOutcome) -> None:
    """Print an outcome: errors to stderr, regular output to stdout."""
    if outcome.error:
        print_error(outcome.error, usage=outcome.usage)
    print_lines(outcome.lines)


def _version_callback(value: bool) -> None:
    if value:
        print_lines([f"task-cli version {__version__}"])
        raise typer.Exit(ExitCode.SUCCESS)


@app.command(
    context_settings={
        "allow_interspersed_args": False,
        "ignore_unknown_options": True,
        "help_option_names": ["--help", "-h"],
    },
)
def main(
    args: list[str] | None = typer.Argument(
        None,
        metavar="COMMAND [ARGS]...",
        help="add, list, update, delete, mark-in-progress, mark-done or help",
        show_default=False,
    ),
    tasks_file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        help="Tasks file to use (overrides config and TASK_CLI_FILE)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Track short tasks in a local JSON file.

    Examples:
        task-cli add "Buy groceries"
        task-cli list in-progress
        task-cli update 1 "Buy groceries and cook dinner"
        task-cli mark-done 1
        task-cli delete 1
    """
    project_dir = Path.cwd()
    load_layered_env(project_dir=project_dir)

    try:
        config = load_config(project_dir)
    except ValidationError as e:
        print_error("Invalid configuration", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    setup_logging(debug or config.debug)

    path = tasks_file if tasks_file is not None else config.resolve_tasks_file(project_dir)
    ctx = CommandContext(store=TaskStore(path))

    outcome = dispatch(args or [], ctx)
    render(outcome)
    raise typer.Exit(outcome.exit_code)


def cli_main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "cli_main", "dispatch", "render", "setup_logging"]
