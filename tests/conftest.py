# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_sessions.core.state import AppState
from todo_sessions.tasks.session_store import SessionStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        log_to_file=False,
        connector="console",
        server_name="todo-list-server",
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture()
def state(settings: SimpleNamespace, store: SessionStore) -> AppState:
    return AppState(settings=settings, store=store)
