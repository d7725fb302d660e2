"""
task-cli - Local Task Tracker

A command-line tool that tracks short textual tasks in a JSON file.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from task_cli.core.tasks.models import Task, TaskCollection, TaskStatus

__all__ = ["Task", "TaskCollection", "TaskStatus", "__version__"]
