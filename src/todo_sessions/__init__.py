"""
todo-sessions: session-scoped TODO lists served to agents over MCP.
"""

from .errors import NotFoundError, TodoError, ValidationError
from .tasks.session_store import SessionStore
from .tasks.task_models import Session, Task, TaskStatus

__version__ = "0.1.0"
__all__ = [
    "NotFoundError",
    "Session",
    "SessionStore",
    "Task",
    "TaskStatus",
    "TodoError",
    "ValidationError",
]
