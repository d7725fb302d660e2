"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars

Command-line options are applied on top by the CLI.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any

from .models import TaskCliConfig


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/task-cli/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "task-cli" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .task-cli.json in the project directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".task-cli.json"


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        # Warn and fall back to the remaining layers
        print(f"Warning: Failed to parse config at {path}: {e}", file=sys.stderr)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        TASK_CLI_FILE - overrides tasks_file
        TASK_CLI_DEBUG - overrides debug

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if tasks_file := os.environ.get("TASK_CLI_FILE"):
        result["tasks_file"] = tasks_file

    if debug_str := os.environ.get("TASK_CLI_DEBUG"):
        result["debug"] = debug_str.lower() not in ("false", "0", "no", "off", "")

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "tasks_file": "tasks.json",
        "debug": False,
    }


def load_config(project_dir: Path | None = None) -> TaskCliConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (TASK_CLI_*)
        2. Project config (.task-cli.json)
        3. User config (~/.config/task-cli/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .task-cli.json from (defaults to cwd)

    Returns:
        Validated TaskCliConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation

    Example:
        >>> config = load_config()
        >>> config.tasks_file
        PosixPath('tasks.json')
    """
    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged.update(user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged.update(project_config)

    merged = apply_env_overrides(merged)

    return TaskCliConfig(**merged)
