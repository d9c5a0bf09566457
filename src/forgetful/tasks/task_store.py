# src/forgetful/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from ..core.ports import KeyValueStore
from .task_models import Task, TaskIcon, default_tasks

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
LAST_RESET_KEY = "last_reset_date"


class CorruptSnapshotError(ValueError):
    """Stored task list is present but cannot be decoded."""


def _record_to_task(obj: Any, pos: int) -> Task:
    if not isinstance(obj, dict):
        raise CorruptSnapshotError(f"task #{pos} is not an object")

    try:
        task_id = obj["id"]
        title = obj["title"]
        icon = obj["icon"]
        done = obj["done"]
    except KeyError as e:
        raise CorruptSnapshotError(f"task #{pos} is missing field {e.args[0]!r}") from None

    if not isinstance(task_id, str):
        raise CorruptSnapshotError(f"task #{pos}: id must be a string")
    if not isinstance(title, str):
        raise CorruptSnapshotError(f"task #{pos}: title must be a string")
    # bool is a subclass of int; do not let True/False pass as icon codes.
    if isinstance(icon, bool) or not isinstance(icon, int):
        raise CorruptSnapshotError(f"task #{pos}: icon must be an integer")
    if not isinstance(done, bool):
        raise CorruptSnapshotError(f"task #{pos}: done must be a boolean")

    try:
        icon_enum = TaskIcon(icon)
    except ValueError:
        raise CorruptSnapshotError(f"task #{pos}: unknown icon code {icon}") from None

    return Task(id=task_id, title=title, icon=icon_enum, done=done)


def _task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "icon": int(task.icon),
        "done": bool(task.done),
    }


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps(
        [_task_to_record(t) for t in tasks],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def decode_tasks(raw: str) -> list[Task]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        raise CorruptSnapshotError(f"tasks value is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptSnapshotError("tasks value is not an array")
    return [_record_to_task(obj, i) for i, obj in enumerate(data)]


class TaskStore:
    """
    Durable task list + last-reset marker on top of a key-value store.

    Two entries are used:
    - "tasks": JSON array of {id, title, icon, done}, in display order
    - "last_reset_date": ISO date (YYYY-MM-DD), absent on first run

    Every save rewrites the whole list with one set() call.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    def load(self) -> list[Task]:
        """
        Return the stored list, or the built-in defaults when nothing is stored.

        Raises CorruptSnapshotError if a value is stored but malformed.
        """
        raw = self._kv.get(TASKS_KEY)
        if raw is None:
            logger.info("No stored tasks; using %d defaults.", len(default_tasks()))
            return default_tasks()
        tasks = decode_tasks(raw)
        logger.debug("Loaded %d tasks", len(tasks))
        return tasks

    def load_or_default(self) -> list[Task]:
        """load(), substituting the defaults for a corrupt snapshot."""
        try:
            return self.load()
        except CorruptSnapshotError as e:
            logger.warning("Stored task list is corrupt (%s); falling back to defaults.", e)
            return default_tasks()

    def close(self) -> None:
        close = getattr(self._kv, "close", None)
        if close is not None:
            close()

    def save(self, tasks: Iterable[Task]) -> None:
        tasks = list(tasks)
        self._kv.set(TASKS_KEY, encode_tasks(tasks))
        logger.debug("Saved %d tasks", len(tasks))

    def load_last_reset_date(self) -> date | None:
        raw = self._kv.get(LAST_RESET_KEY)
        if raw is None:
            return None
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            logger.warning("Ignoring unparseable %s=%r", LAST_RESET_KEY, raw)
            return None

    def save_last_reset_date(self, day: date) -> None:
        self._kv.set(LAST_RESET_KEY, day.isoformat())
        logger.debug("Saved %s=%s", LAST_RESET_KEY, day.isoformat())
