# src/todo_sessions/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.session_store import SessionStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in connectors.
    settings: object

    store: SessionStore

    # Session the console connector is currently working on (/new, /use).
    current_session_id: str | None = None
