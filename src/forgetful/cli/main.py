# src/forgetful/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (running the daily reset check),
then runs the console checklist in the main thread.
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _handle_signal(signum, _frame) -> None:
    logger.info("Signal %s received, shutting down...", signum)
    raise KeyboardInterrupt


def _console_level(level_name: str) -> int:
    level = getattr(logging, str(level_name).upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.task_store.close()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    # settings.log_level drives the console handler; the file always gets DEBUG.
    console_level = _console_level(settings.log_level)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
    except (AttributeError, ValueError):
        # Some platforms may not support SIGTERM, etc.
        pass

    try:
        run_console_loop(state)
    finally:
        # Every mutation is already persisted; nothing to flush.
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
