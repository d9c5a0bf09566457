# src/forgetful/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete key-value store and clock into AppState,
- runs the once-per-session daily reset check.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock, KeyValueStore, LocalClock
from ..core.state import AppState
from ..storage.kv_store import SQLiteKeyValueStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    kv: KeyValueStore | None = None,
    clock: Clock | None = None,
) -> AppState:
    """
    Create AppState from the provided settings and load today's checklist.

    Keeping settings/kv/clock injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = SQLiteKeyValueStore(settings.store_db_path)

    state = AppState(
        settings=settings,
        task_store=TaskStore(kv),
        clock=clock or LocalClock(),
    )
    state.start_session()
    logger.info(
        "Session started: %d tasks, last reset %s",
        len(state.tasks),
        state.last_reset_date,
    )
    return state
