"""
Pytest configuration and shared fixtures.

Provides fixtures for temp directories, a task store on a temp file,
a deterministic clock, and sample tasks used across the test suite.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from task_cli.cli.commands import CommandContext
from task_cli.core.tasks.models import Task, TaskCollection, TaskStatus
from task_cli.core.tasks.store import TaskStore

# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """
    Provide an isolated project directory and make it the cwd.

    XDG_CONFIG_HOME points inside tmp_path so user config and user .env
    files on the test machine are never read.
    """
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("TASK_CLI_FILE", raising=False)
    monkeypatch.delenv("TASK_CLI_DEBUG", raising=False)
    return project


# ==============================================================================
# Store / Clock Fixtures
# ==============================================================================


class FakeClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 1, 16, 14, 32, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def tasks_file(temp_dir):
    """Path of the tasks file used by the store fixture."""
    return temp_dir / "tasks.json"


@pytest.fixture
def store(tasks_file):
    """Provide a TaskStore on a temporary file."""
    return TaskStore(tasks_file)


@pytest.fixture
def clock():
    """Provide a deterministic clock."""
    return FakeClock()


@pytest.fixture
def ctx(store, clock):
    """Provide a CommandContext wired to the temp store and fake clock."""
    return CommandContext(store=store, clock=clock)


# ==============================================================================
# Sample Data Fixtures
# ==============================================================================


def _make_task(task_id: int, description: str, status: TaskStatus = TaskStatus.TODO) -> Task:
    stamp = datetime(2026, 1, 10, 9, 0, task_id, tzinfo=timezone.utc)
    return Task(
        id=task_id,
        description=description,
        status=status,
        created_at=stamp,
        updated_at=stamp,
    )


@pytest.fixture
def make_task():
    """Provide a factory for Task objects with fixed timestamps."""
    return _make_task


@pytest.fixture
def sample_collection():
    """Provide a collection with one task in each status and a gap at id 3."""
    return TaskCollection(
        tasks=[
            _make_task(1, "Write release notes"),
            _make_task(2, "Review pull request", TaskStatus.IN_PROGRESS),
            _make_task(4, "Publish package", TaskStatus.DONE),
        ],
        next_id=5,
    )


@pytest.fixture
def sample_tasks_json():
    """Provide the on-disk form of a small collection."""
    return json.dumps(
        {
            "tasks": [
                {
                    "id": 1,
                    "description": "Write release notes",
                    "status": "todo",
                    "createdAt": "2026-01-10T09:00:01Z",
                    "updatedAt": "2026-01-10T09:00:01Z",
                },
                {
                    "id": 2,
                    "description": "Review pull request",
                    "status": "in-progress",
                    "createdAt": "2026-01-10T09:00:02Z",
                    "updatedAt": "2026-01-11T10:00:00Z",
                },
            ],
            "nextId": 3,
        },
        indent=2,
    )
