# src/forgetful/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from enum import IntEnum


class TaskIcon(IntEnum):
    """
    Fixed icon set for checklist items.

    The integer value is what gets persisted, so the order must never change.
    """

    IRON = 0
    DOOR = 1
    WINDOW = 2
    GAS = 3
    WATER = 4
    LIGHT = 5
    PETS = 6
    HOME = 7

    @classmethod
    def parse(cls, raw: str | int) -> TaskIcon:
        """Accept a code ("3", 3) or a name ("gas")."""
        if isinstance(raw, int):
            return cls(raw)
        s = raw.strip()
        if s.lstrip("-").isdigit():
            return cls(int(s))
        try:
            return cls[s.upper()]
        except KeyError:
            raise ValueError(f"unknown icon: {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    icon: TaskIcon
    done: bool = False

    def with_done(self, done: bool) -> Task:
        return replace(self, done=done)


def new_task_id() -> str:
    return str(uuid.uuid4())


def default_tasks() -> list[Task]:
    return [
        Task("iron", "Turn off iron", TaskIcon.IRON),
        Task("door", "Close door", TaskIcon.DOOR),
        Task("window", "Close windows", TaskIcon.WINDOW),
        Task("gas", "Check gas", TaskIcon.GAS),
        Task("water", "Check water", TaskIcon.WATER),
        Task("light", "Turn off light", TaskIcon.LIGHT),
    ]
