# src/forgetful/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_tasks, submit_form
from ..core.screens import ListScreen
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _prompt(state: AppState) -> str:
    if isinstance(state.screen, ListScreen):
        return ">>> "
    return "... "


def handle_line(state: AppState, line: str, emit=None) -> str | None:
    """
    Route one line of input.

    - "/command ..." goes to the command registry
    - a bare number on the list screen toggles that task
    - anything else on the create/edit screen is submitted as "<icon> <title>"
    """
    reply = command_registry.handle(state, line, emit=emit)
    if reply is not None:
        return reply

    if isinstance(state.screen, ListScreen):
        if line.isdigit():
            return command_registry.handle(state, f"/toggle {line}", emit=emit)
        return "Type a task number to toggle it, or /help for commands."

    return submit_form(state, line)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.tasks))
    _print_ts("[CONSOLE] Type a number to toggle a task. Use /help for commands. Use /exit to quit.\n")
    print(render_tasks(state.tasks))

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            print(reply)

    logger.info("Console connector finished.")
