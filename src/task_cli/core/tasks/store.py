"""
JSON file task store (tasks.json).

Reads and writes the whole task collection as a single JSON document.
The store never raises: unreadable or malformed files are replaced with
an empty collection on read, and failed writes are logged and dropped.

File format:
    {
        "tasks": [
            {
                "id": 1,
                "description": "Write release notes",
                "status": "todo",
                "createdAt": "2026-01-16T14:32:00Z",
                "updatedAt": "2026-01-16T14:32:00Z"
            }
        ],
        "nextId": 2
    }
"""

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from .models import TaskCollection

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Task store backed by one JSON file.

    Corrupt content is reset on read: the empty default collection is
    written back immediately, so the file on disk always matches what the
    running command sees.

    Example:
        >>> store = TaskStore(Path("tasks.json"))
        >>> collection = store.load()
        >>> store.save(collection)
        True
    """

    def __init__(self, path: Path | str):
        """
        Initialize the store.

        Args:
            path: Location of the tasks file
        """
        self.path = Path(path)

    def load(self) -> TaskCollection:
        """
        Load the task collection from disk.

        Returns:
            The stored collection, or an empty one when the file is missing
            or could not be used
        """
        if not self.path.exists():
            logger.debug("Tasks file %s not found, creating it", self.path)
            return self._reset()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read tasks file %s: %s", self.path, e)
            return self._reset()

        if not raw.strip():
            logger.error("Tasks file %s is empty, resetting it", self.path)
            return self._reset()

        try:
            collection = TaskCollection.model_validate_json(raw)
        except ValidationError as e:
            logger.error(
                "Tasks file %s contains invalid data (%s), resetting it",
                self.path,
                _summarize(e),
            )
            return self._reset()

        logger.debug(
            "Loaded %d task(s) from %s (nextId=%d)",
            len(collection.tasks),
            self.path,
            collection.next_id,
        )
        return collection

    def save(self, collection: TaskCollection) -> bool:
        """
        Overwrite the tasks file with the given collection.

        Uses a temporary file and atomic rename. Errors are logged and
        swallowed; the in-memory collection is left as is.

        Args:
            collection: Complete collection to persist

        Returns:
            True if the file was written, False otherwise
        """
        payload = collection.model_dump_json(by_alias=True, indent=2) + "\n"
        temp_path: str | None = None

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=".tasks_", suffix=".json.tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)

            os.replace(temp_path, self.path)
        except OSError as e:
            logger.error("Failed to write tasks file %s: %s", self.path, e)
            if temp_path is not None:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
            return False

        logger.debug("Saved %d task(s) to %s", len(collection.tasks), self.path)
        return True

    def _reset(self) -> TaskCollection:
        """Write and return an empty collection."""
        collection = TaskCollection.empty()
        self.save(collection)
        return collection


def _summarize(error: ValidationError) -> str:
    """Condense a validation error into one line for the log."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid")
    if error.error_count() > 1:
        message += f" (+{error.error_count() - 1} more)"
    return f"{location}: {message}" if location else message
