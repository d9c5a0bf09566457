# tests/test_commands.py

from __future__ import annotations

from forgetful.cli.commands import CommandRegistry, registry
from forgetful.connectors.console_connector import handle_line
from forgetful.core.screens import CreateScreen, EditScreen, ListScreen
from forgetful.core.state import AppState
from forgetful.tasks.task_models import TaskIcon


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bb"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BB y", emit=lambda _: None) == "h3"
    assert called == {"h2": 1, "h3": 1}


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_list_shows_numbered_tasks(state: AppState) -> None:
    out = registry.handle(state, "/list") or ""
    assert "0/6 done" in out
    assert " 1. [ ] Turn off iron (iron)" in out


def test_toggle_by_position_and_bare_number(state: AppState) -> None:
    registry.handle(state, "/toggle 2")
    assert state.tasks[1].done is True

    handle_line(state, "2")
    assert state.tasks[1].done is False

    out = registry.handle(state, "/toggle 99") or ""
    assert out.startswith("Usage")


def test_new_with_inline_form(state: AppState) -> None:
    out = registry.handle(state, "/new 3 Check stove") or ""

    assert "Added: Check stove" in out
    assert state.tasks[-1].title == "Check stove"
    assert state.tasks[-1].icon is TaskIcon.GAS
    assert isinstance(state.screen, ListScreen)


def test_create_screen_flow(state: AppState) -> None:
    notes: list[str] = []
    registry.handle(state, "/new", emit=notes.append)
    assert isinstance(state.screen, CreateScreen)
    assert notes and notes[0].startswith("Icons:")

    out = handle_line(state, "pets") or ""
    assert "cannot be empty" in out
    assert isinstance(state.screen, CreateScreen)

    out = handle_line(state, "unicorn Feed cat") or ""
    assert "Unknown icon" in out

    handle_line(state, "pets Feed cat")
    assert state.tasks[-1].title == "Feed cat"
    assert isinstance(state.screen, ListScreen)


def test_edit_screen_flow_and_back(state: AppState) -> None:
    registry.handle(state, "/edit 1")
    assert state.screen == EditScreen(task_id="iron")

    registry.handle(state, "/back")
    assert isinstance(state.screen, ListScreen)

    registry.handle(state, "/edit 1")
    handle_line(state, "7 Unplug iron")
    assert state.tasks[0].id == "iron"
    assert state.tasks[0].title == "Unplug iron"
    assert state.tasks[0].icon is TaskIcon.HOME
    assert isinstance(state.screen, ListScreen)


def test_delete_while_editing_returns_to_list(state: AppState) -> None:
    registry.handle(state, "/edit 1")
    registry.handle(state, "/delete 1")
    assert isinstance(state.screen, ListScreen)
    assert [t.id for t in state.tasks][0] == "door"


def test_reset_command(state: AppState) -> None:
    registry.handle(state, "/done 1")
    registry.handle(state, "/done 2")
    out = registry.handle(state, "/reset") or ""
    assert "0/6 done" in out
    assert not any(t.done for t in state.tasks)


def test_status_mentions_last_reset(state: AppState) -> None:
    out = registry.handle(state, "/status") or ""
    assert "Last reset: 2024-05-17" in out
