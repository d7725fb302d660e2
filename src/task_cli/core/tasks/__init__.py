"""
Task management models and storage.

This module provides the Task model, the status enum, the persisted
TaskCollection aggregate, and the JSON file store that reads and writes it.
"""

from .models import Task, TaskCollection, TaskStatus
from .store import TaskStore

__all__ = [
    # Models
    "Task",
    "TaskCollection",
    "TaskStatus",
    # Storage
    "TaskStore",
]
