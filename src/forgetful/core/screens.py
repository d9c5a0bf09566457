# src/forgetful/core/screens.py

"""
Screen navigation for the presentation layer.

A screen is one of three variants; navigation is a pure function of
(current screen, action, current tasks).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from ..tasks.task_models import Task


@dataclass(frozen=True, slots=True)
class ListScreen:
    pass


@dataclass(frozen=True, slots=True)
class CreateScreen:
    pass


@dataclass(frozen=True, slots=True)
class EditScreen:
    task_id: str


Screen = ListScreen | CreateScreen | EditScreen


class NavAction(StrEnum):
    OPEN_CREATE = "open_create"
    OPEN_EDIT = "open_edit"
    BACK = "back"
    SAVED = "saved"


def navigate(
    screen: Screen,
    action: NavAction,
    tasks: Sequence[Task] = (),
    *,
    task_id: str | None = None,
) -> Screen:
    """
    Next screen after `action`.

    OPEN_EDIT needs `task_id`; an id that is not in `tasks` lands on the list.
    BACK and SAVED always return to the list.
    """
    if action in (NavAction.BACK, NavAction.SAVED):
        return ListScreen()

    if action is NavAction.OPEN_CREATE:
        return CreateScreen() if isinstance(screen, ListScreen) else screen

    if action is NavAction.OPEN_EDIT:
        if not isinstance(screen, ListScreen):
            return screen
        if task_id is None or not any(t.id == task_id for t in tasks):
            return ListScreen()
        return EditScreen(task_id=task_id)

    return screen


def resolve(screen: Screen, tasks: Sequence[Task]) -> Screen:
    """Drop an edit screen whose task disappeared."""
    if isinstance(screen, EditScreen) and not any(t.id == screen.task_id for t in tasks):
        return ListScreen()
    return screen
