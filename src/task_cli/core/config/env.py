"""Environment loading helpers.

Settings such as TASK_CLI_FILE can be exported in the shell or kept in
.env files. Precedence, highest first:

  os.environ (pre-existing) > project .env.local > project .env > user .env

A .env file never replaces a variable that was already exported.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def default_user_env_paths() -> list[Path]:
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
    return [xdg_home / "task-cli" / ".env"]


def default_project_env_paths(project_dir: Path) -> list[Path]:
    return [project_dir / ".env", project_dir / ".env.local"]


def read_env_file(path: Path) -> dict[str, str]:
    """Read KEY=value pairs from a .env file; missing or unreadable files yield nothing."""
    if not path.is_file():
        return {}
    try:
        values = dotenv_values(path, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping unreadable env file %s: %s", path, e)
        return {}
    return {str(k): str(v) for k, v in values.items() if k and v is not None}


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> dict[str, str]:
    """Load environment variables from user + project .env files.

    Later files win over earlier ones, but only for keys this call set;
    anything already in os.environ is left alone.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths

    Returns:
        The variables that were set, keyed by name
    """
    if project_dir is None:
        project_dir = Path.cwd()
    if user_env_paths is None:
        user_env_paths = default_user_env_paths()
    if project_env_paths is None:
        project_env_paths = default_project_env_paths(project_dir)

    layered: dict[str, str] = {}
    for path in [*user_env_paths, *project_env_paths]:
        layered.update(read_env_file(Path(path)))

    applied = {k: v for k, v in layered.items() if k not in os.environ}
    os.environ.update(applied)

    if applied:
        logger.debug("Loaded %s from .env files", ", ".join(sorted(applied)))
    return applied
