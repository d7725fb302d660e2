"""
Configuration data models for task-cli.

These models define the structure of .task-cli.json and
~/.config/task-cli/config.json files, with validation via Pydantic.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskCliConfig(BaseModel):
    """
    Complete task-cli configuration.

    Produced by merging defaults, user config, project config and
    environment variables (see loader.load_config).
    """

    tasks_file: Path = Field(
        default=Path("tasks.json"),
        description="Where tasks are stored; relative paths resolve against the project dir",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    model_config = ConfigDict(
        extra="ignore",
    )

    @field_validator("tasks_file", mode="before")
    @classmethod
    def validate_tasks_file(cls, v: object) -> object:
        """Reject blank paths, which would point at the project directory itself."""
        if isinstance(v, str) and not v.strip():
            raise ValueError("tasks_file must not be empty")
        return v

    def resolve_tasks_file(self, project_dir: Path) -> Path:
        """Return the absolute tasks file path for the given project directory."""
        path = self.tasks_file.expanduser()
        if not path.is_absolute():
            path = project_dir / path
        return path
