# src/todo_sessions/errors.py

"""
Error types raised by the session store and task operations.

Both kinds are expected, local failures: connectors report them to the caller
as structured errors and keep serving.
"""

from __future__ import annotations

from typing import Any


class TodoError(Exception):
    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class ValidationError(TodoError):
    """Malformed or policy-violating input (e.g. an empty initial task list)."""

    def __init__(
        self, message: str, code: str = "validation_error", details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(code, message, details)


class NotFoundError(TodoError):
    """Reference to a session or task id that does not exist."""

    def __init__(
        self, message: str, code: str = "not_found", details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(code, message, details)
