# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from forgetful.core.state import AppState
from forgetful.tasks.task_store import TaskStore

from .fakes import FixedClock, InMemoryKeyValueStore

TODAY = date(2024, 5, 17)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="forgetful-test",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path,
        store_db_path=tmp_path / "forgetful.sqlite3",
    )


@pytest.fixture()
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def store(kv: InMemoryKeyValueStore) -> TaskStore:
    return TaskStore(kv)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, clock: FixedClock) -> AppState:
    """
    AppState wired with the in-memory store, after the startup reset check.
    """
    st = AppState(settings=settings, task_store=store, clock=clock)
    st.start_session()
    return st
