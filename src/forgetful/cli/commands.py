# src/forgetful/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.screens import CreateScreen, EditScreen, ListScreen, NavAction, navigate, resolve
from ..core.state import AppState
from ..tasks.task_api import (
    EmptyTitleError,
    create_task,
    delete_task_at,
    edit_task,
    find_task,
    reset_today,
    toggle_task,
)
from ..tasks.task_models import Task, TaskIcon

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def render_task(pos: int, task: Task) -> str:
    mark = "x" if task.done else " "
    return f"{pos:>2}. [{mark}] {task.title} ({task.icon.name.lower()})"


def render_tasks(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks. Use /new to add one."
    done = sum(1 for t in tasks if t.done)
    lines = [f"Today: {done}/{len(tasks)} done"]
    lines.extend(render_task(i, t) for i, t in enumerate(tasks, start=1))
    return "\n".join(lines)


def render_icons() -> str:
    return "Icons: " + ", ".join(f"{int(i)}={i.name.lower()}" for i in TaskIcon)


# ---- argument helpers ----


def _parse_position(state: AppState, args: list[str]) -> int | None:
    """1-based position from args -> 0-based index, None if missing/out of range."""
    if not args:
        return None
    try:
        pos = int(args[0])
    except ValueError:
        return None
    if not 1 <= pos <= len(state.tasks):
        return None
    return pos - 1


def _parse_form(args: list[str]) -> tuple[TaskIcon, str]:
    """Split "<icon> <title...>" into (icon, title). Raises ValueError on a bad icon."""
    if not args:
        raise EmptyTitleError("title is required")
    icon = TaskIcon.parse(args[0])
    return icon, " ".join(args[1:])


def submit_form(state: AppState, line: str) -> str:
    """
    Handle a non-command line typed on the create/edit screen.

    Expected form: "<icon> <title>", icon by number or name.
    """
    screen = resolve(state.screen, state.tasks)
    state.screen = screen

    if isinstance(screen, ListScreen):
        return "Nothing to submit. Use /new or /edit N."

    try:
        icon, title = _parse_form(line.split())
        if isinstance(screen, CreateScreen):
            task = create_task(state, title, icon)
            reply = f"Added: {task.title}"
        else:
            if not edit_task(state, screen.task_id, title, icon):
                state.screen = navigate(screen, NavAction.BACK)
                return "Task no longer exists.\n" + render_tasks(state.tasks)
            reply = f"Saved: {title.strip()}"
    except EmptyTitleError:
        return "Title cannot be empty. Type: <icon> <title>  (or /back)"
    except ValueError:
        return "Unknown icon. " + render_icons()

    state.screen = navigate(screen, NavAction.SAVED)
    return reply + "\n" + render_tasks(state.tasks)


# ---- commands ----


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_tasks(state.tasks)


def cmd_icons(state: AppState, args: list[str]) -> str:
    return render_icons()


def cmd_new(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /new                 -> open the create screen
    /new <icon> <title>  -> create right away
    """
    if args:
        state.screen = navigate(ListScreen(), NavAction.OPEN_CREATE)
        return submit_form(state, " ".join(args))

    state.screen = navigate(state.screen, NavAction.OPEN_CREATE)
    if emit:
        with contextlib.suppress(Exception):
            emit(render_icons())
    return "New task. Type: <icon> <title>  (or /back)"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit N                 -> open the edit screen for task N
    /edit N <icon> <title>  -> edit right away
    """
    idx = _parse_position(state, args)
    if idx is None:
        return "Usage: /edit N [<icon> <title>]"

    task = state.tasks[idx]
    state.screen = navigate(ListScreen(), NavAction.OPEN_EDIT, state.tasks, task_id=task.id)
    if len(args) > 1:
        return submit_form(state, " ".join(args[1:]))

    if emit:
        with contextlib.suppress(Exception):
            emit(render_icons())
    return (
        f"Editing: {task.title} ({task.icon.name.lower()}). "
        "Type: <icon> <title>  (or /back)"
    )


def cmd_back(state: AppState, args: list[str]) -> str:
    state.screen = navigate(state.screen, NavAction.BACK)
    return render_tasks(state.tasks)


def _set_done(state: AppState, args: list[str], done: bool | None, usage: str) -> str:
    idx = _parse_position(state, args)
    if idx is None:
        return usage
    task_id = state.tasks[idx].id
    toggle_task(state, task_id, done)
    return render_tasks(state.tasks)


def cmd_toggle(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, None, "Usage: /toggle N")


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, True, "Usage: /done N")


def cmd_undone(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, False, "Usage: /undone N")


def cmd_delete(state: AppState, args: list[str]) -> str:
    idx = _parse_position(state, args)
    if idx is None:
        return "Usage: /delete N"
    removed = delete_task_at(state, idx)
    state.screen = resolve(state.screen, state.tasks)
    if removed is None:
        return "Nothing deleted."
    return f"Deleted: {removed.title}\n" + render_tasks(state.tasks)


def cmd_reset(state: AppState, args: list[str]) -> str:
    reset_today(state)
    return "All tasks reset for today.\n" + render_tasks(state.tasks)


def cmd_status(state: AppState, args: list[str]) -> str:
    done = sum(1 for t in state.tasks if t.done)
    last = state.last_reset_date.isoformat() if state.last_reset_date else "never"
    db = getattr(state.settings, "store_db_path", "?")
    screen = type(state.screen).__name__
    if isinstance(state.screen, EditScreen):
        task = find_task(state, state.screen.task_id)
        screen += f" ({task.title if task else state.screen.task_id})"
    return (
        "Status:\n"
        f"  Tasks: {done}/{len(state.tasks)} done\n"
        f"  Last reset: {last}\n"
        f"  Screen: {screen}\n"
        f"  Store: {db}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show today's checklist.", aliases=["ls", "l"])
registry.register("new", cmd_new, help_text="Add a task: /new [<icon> <title>].", aliases=["add"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit N [<icon> <title>].")
registry.register("back", cmd_back, help_text="Leave the create/edit screen.")
registry.register("toggle", cmd_toggle, help_text="Flip task N: /toggle N.", aliases=["t"])
registry.register("done", cmd_done, help_text="Mark task N done: /done N.")
registry.register("undone", cmd_undone, help_text="Mark task N not done: /undone N.")
registry.register("delete", cmd_delete, help_text="Remove task N: /delete N.", aliases=["rm", "del"])
registry.register("reset", cmd_reset, help_text="Reset all tasks for today.")
registry.register("icons", cmd_icons, help_text="List available icons.")
registry.register("status", cmd_status, help_text="Show counters, last reset date and store path.")
