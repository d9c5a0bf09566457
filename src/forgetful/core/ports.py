# src/forgetful/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the storage backend and the date source swappable and makes testing easier.
"""

from datetime import date
from typing import Protocol


class KeyValueStore(Protocol):
    """
    Private key-value storage of the app.

    A single set() must be atomic: a reader never observes a half-written value.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class Clock(Protocol):
    """Calendar source: today's date in the local timezone."""
    def today(self) -> date: ...


class LocalClock:
    def today(self) -> date:
        return date.today()
