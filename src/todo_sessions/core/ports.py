# src/todo_sessions/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task operations.

Task operations depend on this Protocol instead of the concrete in-memory store,
so another store (e.g. a persistent one) can be substituted behind it.
"""

from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Any, Protocol


class SessionRepo(Protocol):
    def count_sessions(self) -> int: ...
    def create(self, initial_descriptions: Sequence[str]) -> Any: ...
    def lookup(self, session_id: str) -> Any: ...

    # Atomic access to one live session (lookup -> mutate -> return).
    def session(self, session_id: str) -> AbstractContextManager[Any]: ...

    def mint_task_id(self, session: Any) -> str: ...
