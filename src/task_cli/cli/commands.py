"""
Command handlers for task-cli.

One handler per verb. Each handler takes the arguments that followed the
verb plus a CommandContext, validates them, loads the collection, applies
the change, saves it, and returns a CommandOutcome describing what to
print and which exit code to use. Handlers never exit the process.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from task_cli.cli.errors import ExitCode
from task_cli.core.tasks.models import Task, TaskStatus
from task_cli.core.tasks.store import TaskStore

logger = logging.getLogger(__name__)

FILTER_ALL = "all"
STATUS_WIDTH = max(len(status.value) for status in TaskStatus)

USAGE = {
    "add": 'task-cli add "<description>"',
    "list": "task-cli list [all|todo|in-progress|done]",
    "update": 'task-cli update <id> "<description>"',
    "delete": "task-cli delete <id>",
    "mark-in-progress": "task-cli mark-in-progress <id>",
    "mark-done": "task-cli mark-done <id>",
    "help": "task-cli help",
}

HELP_TEXT = """\
Usage: task-cli <command> [arguments]

Commands:
  add "<description>"           Add a new task
  list [status]                 List tasks (status: all, todo, in-progress, done)
  update <id> "<description>"   Change a task's description
  delete <id>                   Delete a task
  mark-in-progress <id>         Mark a task as in progress
  mark-done <id>                Mark a task as done
  help                          Show this help

Options (before the command):
  --file, -f PATH               Tasks file to use (env: TASK_CLI_FILE)
  --debug                       Enable debug logging
  --version, -V                 Show version and exit"""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CommandContext:
    """Everything a handler needs besides its arguments."""

    store: TaskStore
    clock: Callable[[], datetime] = utcnow


@dataclass
class CommandOutcome:
    """
    Result of running one command.

    Attributes:
        exit_code: Process exit code the dispatcher should use
        lines: Regular output for stdout
        error: Error message for stderr, if the command failed
        usage: Usage line shown with the error
    """

    exit_code: ExitCode = ExitCode.SUCCESS
    lines: list[str] = field(default_factory=list)
    error: str | None = None
    usage: str | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS

    @classmethod
    def success(cls, *lines: str) -> "CommandOutcome":
        return cls(lines=list(lines))

    @classmethod
    def failure(
        cls, error: str, *, usage: str | None = None, lines: Sequence[str] = ()
    ) -> "CommandOutcome":
        return cls(
            exit_code=ExitCode.GENERAL_ERROR,
            lines=list(lines),
            error=error,
            usage=usage,
        )


def parse_task_id(raw: str) -> int | None:
    """Parse a positive integer task ID, returning None when invalid."""
    token = raw.strip()
    # int() also takes signs, underscores and non-ASCII digits
    if not (token.isascii() and token.isdigit()):
        return None
    value = int(token)
    return value if value > 0 else None


def _invalid_id(raw: str, verb: str) -> CommandOutcome:
    return CommandOutcome.failure(
        f'Invalid task ID "{raw}". The ID must be a positive integer.',
        usage=USAGE[verb],
    )


def _not_found(task_id: int) -> CommandOutcome:
    return CommandOutcome.failure(f"Task with ID {task_id} not found.")


def _touch(task: Task, now: datetime) -> None:
    """Refresh updated_at, keeping it strictly increasing."""
    if now <= task.updated_at:
        now = task.updated_at + timedelta(microseconds=1)
    task.updated_at = now


def add_task(args: Sequence[str], ctx: CommandContext) -> CommandOutcome:
    """Create a task from the joined arguments."""
    if not args:
        return CommandOutcome.failure(
            'The "add" command requires a task description.', usage=USAGE["add"]
        )

    description = " ".join(args).strip()
    if not description:
        return CommandOutcome.failure(
            "Task description must not be empty.", usage=USAGE["add"]
        )

    collection = ctx.store.load()
    now = ctx.clock()
    task = Task(
        id=collection.next_id,
        description=description,
        status=TaskStatus.TODO,
        created_at=now,
        updated_at=now,
    )
    collection.tasks.append(task)
    collection.next_id += 1
    ctx.store.save(collection)

    logger.debug("Added task id=%d", task.id)
    return CommandOutcome.success(f"Task added successfully (ID: {task.id})")


def list_tasks(args: Sequence[str], ctx: CommandContext) -> CommandOutcome:
    """Print tasks, optionally filtered by status. Never writes."""
    if len(args) > 1:
        return CommandOutcome.failure(
            'The "list" command takes at most one status filter.', usage=USAGE["list"]
        )

    filter_value = args[0].strip().lower() if args else FILTER_ALL
    status: TaskStatus | None = None
    if filter_value != FILTER_ALL:
        try:
            status = TaskStatus(filter_value)
        except ValueError:
            return CommandOutcome.failure(
                f'Invalid status filter "{args[0]}". '
                "Use 'all', 'todo', 'in-progress', or 'done'.",
                usage=USAGE["list"],
            )

    collection = ctx.store.load()
    tasks = collection.filter(status)

    if not tasks:
        if status is None:
            return CommandOutcome.success("No tasks found.")
        return CommandOutcome.success(f"No tasks with status '{filter_value}' found.")

    lines = [f"Tasks ({filter_value}):"]
    for task in tasks:
        lines.append(f"{task.id:>4}  {task.status.value:<{STATUS_WIDTH}}  {task.description}")

    if status is None:
        counts = collection.counts()
        summary = ", ".join(f"{counts[s]} {s.value}" for s in TaskStatus)
        lines.append(f"{len(tasks)} task(s): {summary}")

    return CommandOutcome.success(*lines)


def update_task(args: Sequence[str], ctx: CommandContext) -> CommandOutcome:
    """Replace a task's description."""
    if len(args) < 2:
        return CommandOutcome.failure(
            'The "update" command requires a task ID and a new description.',
            usage=USAGE["update"],
        )

    task_id = parse_task_id(args[0])
    if task_id is None:
        return _invalid_id(args[0], "update")

    description = " ".join(args[1:]).strip()
    if not description:
        return CommandOutcome.failure(
            "New task description must not be empty.", usage=USAGE["update"]
        )

    collection = ctx.store.load()
    task = collection.get(task_id)
    if task is None:
        return _not_found(task_id)

    task.description = description
    _touch(task, ctx.clock())
    ctx.store.save(collection)

    logger.debug("Updated task id=%d", task_id)
    return CommandOutcome.success(f"Task with ID {task_id} updated successfully.")


def delete_task(args: Sequence[str], ctx: CommandContext) -> CommandOutcome:
    """Remove a task. The ID is not handed out again."""
    if len(args) != 1:
        return CommandOutcome.failure(
            'The "delete" command requires exactly one task ID.', usage=USAGE["delete"]
        )

    task_id = parse_task_id(args[0])
    if task_id is None:
        return _invalid_id(args[0], "delete")

    collection = ctx.store.load()
    remaining = [task for task in collection.tasks if task.id != task_id]
    if len(remaining) == len(collection.tasks):
        return _not_found(task_id)

    collection.tasks = remaining
    ctx.store.save(collection)

    logger.debug("Deleted task id=%d", task_id)
    return CommandOutcome.success(f"Task with ID {task_id} deleted successfully.")


def mark_status(
    args: Sequence[str], ctx: CommandContext, target: TaskStatus
) -> CommandOutcome:
    """Move a task to ``target``; a task already there is left untouched."""
    verb = f"mark-{target.value}"
    if len(args) != 1:
        return CommandOutcome.failure(
            f'The "{verb}" command requires exactly one task ID.', usage=USAGE[verb]
        )

    task_id = parse_task_id(args[0])
    if task_id is None:
        return _invalid_id(args[0], verb)

    collection = ctx.store.load()
    task = collection.get(task_id)
    if task is None:
        return _not_found(task_id)

    if task.status == target:
        return CommandOutcome.success(
            f"Task with ID {task_id} is already marked as {target.value}."
        )

    task.status = target
    _touch(task, ctx.clock())
    ctx.store.save(collection)

    logger.debug("Marked task id=%d as %s", task_id, target.value)
    return CommandOutcome.success(
        f"Task with ID {task_id} marked as {target.value} successfully."
    )


def mark_in_progress(args: Sequence[str], ctx: CommandContext) -> CommandOutcome:
    return mark_status(args, ctx, TaskStatus.IN_PROGRESS)


def mark_done(args: Sequence[str], ctx: CommandContext) -> CommandOutcome:
    return mark_status(args, ctx, TaskStatus.DONE)


def show_help(args: Sequence[str] = (), ctx: CommandContext | None = None) -> CommandOutcome:
    """Static usage text. Always succeeds."""
    return CommandOutcome.success(*HELP_TEXT.splitlines())


Handler = Callable[[Sequence[str], CommandContext], CommandOutcome]

COMMANDS: dict[str, Handler] = {
    "add": add_task,
    "list": list_tasks,
    "update": update_task,
    "delete": delete_task,
    "mark-in-progress": mark_in_progress,
    "mark-done": mark_done,
    "help": show_help,
}
