# tests/test_task_store.py

from __future__ import annotations

import json
from datetime import date

import pytest

from forgetful.tasks.task_models import Task, TaskIcon, default_tasks
from forgetful.tasks.task_store import (
    LAST_RESET_KEY,
    TASKS_KEY,
    CorruptSnapshotError,
    TaskStore,
)

from .fakes import InMemoryKeyValueStore


def test_load_without_stored_value_returns_six_defaults(store: TaskStore) -> None:
    tasks = store.load()
    assert [t.id for t in tasks] == ["iron", "door", "window", "gas", "water", "light"]
    assert all(not t.done for t in tasks)
    assert tasks == default_tasks()


def test_save_overwrites_full_snapshot(store: TaskStore, kv: InMemoryKeyValueStore) -> None:
    store.save([Task("a", "First", TaskIcon.HOME, True), Task("b", "Second", TaskIcon.PETS)])
    store.save([Task("b", "Second", TaskIcon.PETS)])

    assert json.loads(kv.data[TASKS_KEY]) == [
        {"id": "b", "title": "Second", "icon": 6, "done": False}
    ]
    assert [t.id for t in store.load()] == ["b"]


def test_save_load_is_deterministic(store: TaskStore, kv: InMemoryKeyValueStore) -> None:
    store.save(
        [
            Task("x", "Кофеварка", TaskIcon.LIGHT, True),
            Task("y", "Close door", TaskIcon.DOOR),
        ]
    )
    first = kv.data[TASKS_KEY]

    store.save(store.load())
    second = kv.data[TASKS_KEY]
    store.save(store.load())

    assert first == second == kv.data[TASKS_KEY]
    assert [t.title for t in store.load()] == ["Кофеварка", "Close door"]


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"id": "a"}',
        '[{"id": "a", "title": "t", "icon": 1}]',
        '[{"id": 1, "title": "t", "icon": 1, "done": false}]',
        '[{"id": "a", "title": "t", "icon": true, "done": false}]',
        '[{"id": "a", "title": "t", "icon": 1, "done": 0}]',
        '[{"id": "a", "title": "t", "icon": 42, "done": false}]',
        '["a"]',
        "[" * 100000,
    ],
)
def test_malformed_snapshot_raises(raw: str) -> None:
    store = TaskStore(InMemoryKeyValueStore(data={TASKS_KEY: raw}))
    with pytest.raises(CorruptSnapshotError):
        store.load()


def test_load_or_default_recovers_from_corrupt_snapshot() -> None:
    kv = InMemoryKeyValueStore(data={TASKS_KEY: "[{broken"})
    store = TaskStore(kv)

    assert store.load_or_default() == default_tasks()
    # recovery alone does not write
    assert kv.writes == []


def test_empty_array_is_a_valid_snapshot() -> None:
    store = TaskStore(InMemoryKeyValueStore(data={TASKS_KEY: "[]"}))
    assert store.load() == []


def test_last_reset_date_round_trip(store: TaskStore, kv: InMemoryKeyValueStore) -> None:
    assert store.load_last_reset_date() is None

    store.save_last_reset_date(date(2024, 1, 2))
    assert kv.data[LAST_RESET_KEY] == "2024-01-02"
    assert store.load_last_reset_date() == date(2024, 1, 2)


def test_unparseable_last_reset_date_is_treated_as_absent() -> None:
    store = TaskStore(InMemoryKeyValueStore(data={LAST_RESET_KEY: "yesterday"}))
    assert store.load_last_reset_date() is None
