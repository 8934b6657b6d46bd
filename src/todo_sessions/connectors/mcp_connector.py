# src/todo_sessions/connectors/mcp_connector.py

"""
MCP connector.

Registers the task operations as MCP tools and serves them over stdio.
Tool results are JSON objects; TodoError failures become tool errors
(isError: true) carrying the core message, the server keeps running.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Literal, TypeVar

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel

from ..core.state import AppState
from ..errors import TodoError
from ..tasks import task_api
from ..tasks.task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

SERVER_VERSION = "0.1.0"

INSTRUCTIONS = """\
Session-scoped TODO list. Start with create_session (at least one task), keep the \
returned session_id and pass it to every other tool. Work through tasks in order: \
get_next_pending_task returns the earliest pending task, update_task_status marks it \
completed. Use update_tasks to rewrite or extend the whole list in one call.\
"""

T = TypeVar("T")


class TaskPayload(BaseModel):
    """Task as sent by the client to update_tasks."""

    id: str
    description: str
    status: Literal["pending", "completed"]


def _call(tool: str, fn: Callable[[], T]) -> T:
    try:
        return fn()
    except TodoError as e:
        logger.info("Tool %s failed code=%s: %s", tool, e.code, e.message)
        raise ToolError(e.message) from e


def _tasks(tasks: list[Task]) -> list[dict[str, Any]]:
    return [t.to_dict() for t in tasks]


def build_mcp_server(state: AppState) -> FastMCP:
    """Create a FastMCP server bound to state.store."""
    server_name = str(getattr(state.settings, "server_name", "todo-list-server"))
    mcp = FastMCP(server_name, instructions=INSTRUCTIONS)
    # FastMCP has no version argument; the low-level server announces this in serverInfo.
    mcp._mcp_server.version = SERVER_VERSION
    store = state.store

    @mcp.tool()
    def create_session(initial_tasks: list[str]) -> dict[str, Any]:
        """Start a new TODO list session seeded with the given task descriptions.

        Args:
            initial_tasks: Descriptions of the initial tasks (must not be empty)
        """
        session = _call("create_session", lambda: store.create(initial_tasks))
        return {"session_id": session.session_id, "tasks": _tasks(session.tasks)}

    @mcp.tool()
    def add_task(session_id: str, description: str) -> dict[str, Any]:
        """Append a new pending task to an existing session.

        Args:
            session_id: Session returned by create_session
            description: What the task is about
        """
        task = _call("add_task", lambda: task_api.add_task(store, session_id, description))
        return {"added_task": task.to_dict()}

    @mcp.tool()
    def get_tasks(
        session_id: str,
        task_id: str | None = None,
        status: Literal["pending", "completed", "all"] = "all",
    ) -> dict[str, Any]:
        """Get the tasks of a session.

        With task_id, returns only that task (or an empty list). With status,
        returns only pending or completed tasks.

        Args:
            session_id: Session returned by create_session
            task_id: Optional id of a single task
            status: pending, completed or all (default)
        """
        tasks = _call(
            "get_tasks",
            lambda: task_api.list_tasks(store, session_id, task_id=task_id, status=status),
        )
        return {"tasks": _tasks(tasks)}

    @mcp.tool()
    def update_task_status(
        session_id: str, task_id: str, status: Literal["pending", "completed"]
    ) -> dict[str, Any]:
        """Mark a task completed, or move it back to pending.

        Args:
            session_id: Session returned by create_session
            task_id: Id of the task to update
            status: pending or completed
        """
        updated, tasks = _call(
            "update_task_status",
            lambda: task_api.update_task_status(store, session_id, task_id, status),
        )
        return {"updated_task": updated.to_dict(), "tasks": _tasks(tasks)}

    @mcp.tool()
    def update_tasks(session_id: str, tasks: list[TaskPayload]) -> dict[str, Any]:
        """Replace existing tasks and add new ones in a single call.

        Tasks whose id already exists are overwritten (description and status);
        unknown ids are added. The full list is returned sorted by id.

        Args:
            session_id: Session returned by create_session
            tasks: Tasks with id, description and status
        """
        items = [
            Task(id=t.id, description=t.description, status=TaskStatus(t.status)) for t in tasks
        ]
        result = _call("update_tasks", lambda: task_api.update_tasks(store, session_id, items))
        return {"tasks": _tasks(result)}

    @mcp.tool()
    def get_next_pending_task(session_id: str) -> dict[str, Any]:
        """Get the next pending task to work on (earliest added first), or null.

        Args:
            session_id: Session returned by create_session
        """
        task = _call(
            "get_next_pending_task", lambda: task_api.get_next_pending_task(store, session_id)
        )
        return {"next_task": task.to_dict() if task else None}

    return mcp


def run_mcp_stdio(state: AppState) -> None:
    mcp = build_mcp_server(state)
    logger.info("MCP connector started name=%s version=%s (stdio).", mcp.name, SERVER_VERSION)
    mcp.run(transport="stdio")
    logger.info("MCP connector finished.")
