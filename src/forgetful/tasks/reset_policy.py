# src/forgetful/tasks/reset_policy.py

"""
Daily reset rules.

The checklist starts fresh every calendar day: on the first launch of a new day
all "done" flags are cleared. The check runs once per process start, so a session
that spans midnight keeps its state until the next launch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from enum import StrEnum

from .task_models import Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def _cleared(tasks: Sequence[Task]) -> list[Task]:
    return [t.with_done(False) for t in tasks]


def apply_daily_reset(
    tasks: Sequence[Task],
    last_reset_date: date | None,
    today: date,
    store: TaskStore,
) -> tuple[list[Task], date]:
    """
    Clear all tasks if the last reset happened on another day (or never).

    Returns (tasks, last_reset_date). When no reset is due the list is returned
    as-is and nothing is written.
    """
    if last_reset_date is not None and last_reset_date == today:
        return list(tasks), last_reset_date

    reset = _cleared(tasks)
    store.save(reset)
    store.save_last_reset_date(today)
    logger.info("Daily reset applied (last=%s today=%s tasks=%d)", last_reset_date, today, len(reset))
    return reset, today


def manual_reset(tasks: Sequence[Task], today: date, store: TaskStore) -> tuple[list[Task], date]:
    """Unconditional reset requested by the user."""
    reset = _cleared(tasks)
    store.save_last_reset_date(today)
    store.save(reset)
    logger.info("Manual reset (today=%s tasks=%d)", today, len(reset))
    return reset, today


class ResetCheck(StrEnum):
    PENDING_CHECK = "pending_check"
    CHECKED = "checked"


class DailyResetGate:
    """
    Runs the load-time reset check exactly once per session.

    PENDING_CHECK -> CHECKED on the first run(); CHECKED is terminal.
    """

    def __init__(self) -> None:
        self.state = ResetCheck.PENDING_CHECK
        self.last_reset_date: date | None = None
        self._tasks: list[Task] = []

    @property
    def checked(self) -> bool:
        return self.state is ResetCheck.CHECKED

    def run(self, store: TaskStore, today: date) -> list[Task]:
        if self.checked:
            return list(self._tasks)

        tasks = store.load_or_default()
        last = store.load_last_reset_date()
        self._tasks, self.last_reset_date = apply_daily_reset(tasks, last, today, store)
        self.state = ResetCheck.CHECKED
        return list(self._tasks)
