"""
Task data models for task-cli.

Defines the Task record, the closed set of status values, and the
TaskCollection aggregate that is persisted to the tasks file.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TaskStatus(str, Enum):
    """Task status values."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class Task(BaseModel):
    """
    A single tracked unit of work.

    Timestamps are serialized under their camelCase aliases so the tasks
    file keeps the ``createdAt`` / ``updatedAt`` field names.

    Example:
        >>> task = Task(
        ...     id=1,
        ...     description="Write release notes",
        ...     created_at=datetime(2026, 1, 16, 14, 32, 0, tzinfo=timezone.utc),
        ...     updated_at=datetime(2026, 1, 16, 14, 32, 0, tzinfo=timezone.utc),
        ... )
        >>> task.status
        <TaskStatus.TODO: 'todo'>
    """

    id: int = Field(..., gt=0, description="Unique, never reused task identifier")
    description: str = Field(..., min_length=1, description="What needs doing")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current status")
    created_at: datetime = Field(
        ..., alias="createdAt", description="Creation timestamp (ISO 8601)"
    )
    updated_at: datetime = Field(
        ..., alias="updatedAt", description="Last mutation timestamp (ISO 8601)"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        strict=True,
        extra="forbid",
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Treat timestamps without an offset as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class TaskCollection(BaseModel):
    """
    The persisted aggregate: tasks in insertion order plus the id counter.

    ``next_id`` is always strictly greater than any id in ``tasks``, so ids
    are never handed out twice even after deletions.
    """

    tasks: list[Task] = Field(..., description="Tasks in insertion order")
    next_id: int = Field(..., ge=1, alias="nextId", description="Id for the next new task")

    model_config = ConfigDict(
        populate_by_name=True,
        strict=True,
        extra="forbid",
    )

    @model_validator(mode="after")
    def check_ids(self) -> "TaskCollection":
        """Reject duplicate ids and a counter that would reuse an id."""
        seen: set[int] = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id}")
            seen.add(task.id)
        if seen and self.next_id <= max(seen):
            raise ValueError(
                f"nextId {self.next_id} must be greater than the highest id {max(seen)}"
            )
        return self

    @classmethod
    def empty(cls) -> "TaskCollection":
        return cls(tasks=[], next_id=1)

    def get(self, task_id: int) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def filter(self, status: TaskStatus | None = None) -> list[Task]:
        """Return tasks with the given status, or all tasks when status is None."""
        if status is None:
            return list(self.tasks)
        return [task for task in self.tasks if task.status == status]

    def counts(self) -> dict[TaskStatus, int]:
        tally = {status: 0 for status in TaskStatus}
        for task in self.tasks:
            tally[task.status] += 1
        return tally
