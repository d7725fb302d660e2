"""
Standardized error output and exit codes for task-cli.

Errors and usage hints go to stderr; regular command output goes to stdout.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


class ExitCode(IntEnum):
    """Standard exit codes for task-cli operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Invalid arguments, unknown task or unknown command."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    usage: str | None = None,
) -> None:
    """
    Print a standardized error message to stderr.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        usage: Optional usage line for the command that failed

    Example:
        >>> print_error(
        ...     'Invalid task ID "abc"',
        ...     reason="Task IDs are positive integers",
        ...     usage="task-cli delete <id>",
        ... )
    """
    err_console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        err_console.print(f"[dim]{escape(reason)}[/dim]")

    if usage:
        err_console.print(f"[cyan]Usage:[/cyan] {escape(usage)}")


def print_lines(lines: list[str]) -> None:
    """Print plain command output to stdout, without interpreting markup."""
    for line in lines:
        console.print(line, markup=False)


__all__ = [
    "ExitCode",
    "console",
    "err_console",
    "print_error",
    "print_lines",
]
