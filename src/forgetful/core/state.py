# src/forgetful/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..tasks.reset_policy import DailyResetGate
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from .ports import Clock, LocalClock
from .screens import ListScreen, Screen


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskStore
    clock: Clock = field(default_factory=LocalClock)

    # The session's single source of truth between load and the next save.
    tasks: list[Task] = field(default_factory=list)
    last_reset_date: date | None = None
    screen: Screen = field(default_factory=ListScreen)
    reset_gate: DailyResetGate = field(default_factory=DailyResetGate)

    def start_session(self) -> list[Task]:
        """Load the list and run the once-per-session daily reset check."""
        self.tasks = self.reset_gate.run(self.task_store, self.clock.today())
        self.last_reset_date = self.reset_gate.last_reset_date
        return self.tasks
