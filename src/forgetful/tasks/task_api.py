# src/forgetful/tasks/task_api.py

"""
User actions on the in-session task list.

Each successful mutation rewrites the full list through state.task_store.
Actions that reference a task id which is no longer in the list are no-ops.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..core.state import AppState
from .reset_policy import manual_reset
from .task_models import Task, TaskIcon, new_task_id

logger = logging.getLogger(__name__)


class EmptyTitleError(ValueError):
    """Raised when a task would be created or edited with a blank title."""


def _clean_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise EmptyTitleError("title is required")
    return title


def task_index(state: AppState, task_id: str) -> int:
    for i, t in enumerate(state.tasks):
        if t.id == task_id:
            return i
    return -1


def find_task(state: AppState, task_id: str) -> Task | None:
    idx = task_index(state, task_id)
    return state.tasks[idx] if idx != -1 else None


def _persist(state: AppState) -> None:
    state.task_store.save(state.tasks)


def create_task(state: AppState, title: str, icon: TaskIcon | int) -> Task:
    task = Task(id=new_task_id(), title=_clean_title(title), icon=TaskIcon(icon), done=False)
    state.tasks.append(task)
    _persist(state)
    logger.info("Task created id=%s icon=%s", task.id, task.icon.name)
    return task


def toggle_task(state: AppState, task_id: str, done: bool | None = None) -> bool:
    """Set (or flip when done is None) the done flag. Returns False for unknown ids."""
    idx = task_index(state, task_id)
    if idx == -1:
        logger.debug("toggle_task: unknown id=%s", task_id)
        return False
    cur = state.tasks[idx]
    state.tasks[idx] = cur.with_done(not cur.done if done is None else done)
    _persist(state)
    return True


def edit_task(state: AppState, task_id: str, title: str, icon: TaskIcon | int) -> bool:
    """Change title and icon only; id and done stay as they are."""
    clean = _clean_title(title)
    idx = task_index(state, task_id)
    if idx == -1:
        logger.debug("edit_task: unknown id=%s", task_id)
        return False
    state.tasks[idx] = replace(state.tasks[idx], title=clean, icon=TaskIcon(icon))
    _persist(state)
    logger.info("Task edited id=%s", task_id)
    return True


def delete_task_at(state: AppState, index: int) -> Task | None:
    if not 0 <= index < len(state.tasks):
        return None
    removed = state.tasks.pop(index)
    _persist(state)
    logger.info("Task deleted id=%s", removed.id)
    return removed


def delete_task(state: AppState, task_id: str) -> bool:
    idx = task_index(state, task_id)
    if idx == -1:
        return False
    return delete_task_at(state, idx) is not None


def reset_today(state: AppState) -> None:
    """Manual "reset today": clear every task and stamp today's date."""
    state.tasks, state.last_reset_date = manual_reset(
        state.tasks, state.clock.today(), state.task_store
    )
