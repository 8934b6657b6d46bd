# src/todo_sessions/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..errors import TodoError
from ..tasks import task_api
from ..tasks.task_models import Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        TodoError from the task operations is turned into a reply; anything
        else propagates to the connector.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except TodoError as e:
            logger.debug("Command /%s failed code=%s: %s", name, e.code, e.message)
            return f"Error: {e.message}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _format_task(task: Task) -> str:
    mark = "x" if task.status == TaskStatus.COMPLETED else " "
    return f"[{mark}] {task.id}. {task.description}"


def _format_tasks(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks."
    return "\n".join(_format_task(t) for t in tasks)


NO_SESSION = "No current session. Use /new <task>; <task> ... or /use <session_id>."


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    return (
        "Status:\n"
        f"  Sessions: {state.store.count_sessions()}\n"
        f"  Current session: {state.current_session_id or '-'}"
    )


def cmd_new(state: AppState, args: list[str]) -> str:
    """
    /new Buy milk; Call mom   -> new session with two tasks
    """
    descriptions = [d.strip() for d in " ".join(args).split(";") if d.strip()]
    session = state.store.create(descriptions)
    state.current_session_id = session.session_id
    return f"Session {session.session_id}\n{_format_tasks(session.tasks)}"


def cmd_use(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /use <session_id>"
    session = state.store.lookup(args[0])
    state.current_session_id = session.session_id
    return f"Using session {session.session_id}."


def cmd_add(state: AppState, args: list[str]) -> str:
    session_id = state.current_session_id
    if not session_id:
        return NO_SESSION
    description = " ".join(args).strip()
    if not description:
        return "Usage: /add <description>"
    task = task_api.add_task(state.store, session_id, description)
    return f"Added {_format_task(task)}"


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list              -> all tasks
    /list pending      -> pending only
    /list completed    -> completed only
    """
    session_id = state.current_session_id
    if not session_id:
        return NO_SESSION
    status = args[0].lower() if args else task_api.STATUS_FILTER_ALL
    return _format_tasks(task_api.list_tasks(state.store, session_id, status=status))


def _set_status(state: AppState, args: list[str], status: TaskStatus) -> str:
    session_id = state.current_session_id
    if not session_id:
        return NO_SESSION
    if not args:
        return "Usage: /done <task_id> or /undo <task_id>"
    updated, _tasks = task_api.update_task_status(state.store, session_id, args[0], status)
    return _format_task(updated)


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_status(state, args, TaskStatus.COMPLETED)


def cmd_undo(state: AppState, args: list[str]) -> str:
    return _set_status(state, args, TaskStatus.PENDING)


def cmd_next(state: AppState, args: list[str]) -> str:
    session_id = state.current_session_id
    if not session_id:
        return NO_SESSION
    task = task_api.get_next_pending_task(state.store, session_id)
    return _format_task(task) if task else "Nothing pending."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session count and current session.")
registry.register("new", cmd_new, help_text="Start a session: /new <task>; <task> ...")
registry.register("use", cmd_use, help_text="Switch to an existing session: /use <session_id>.")
registry.register("add", cmd_add, help_text="Add a task: /add <description>.")
registry.register("list", cmd_list, help_text="List tasks: /list [pending|completed|all].", aliases=["ls"])
registry.register("done", cmd_done, help_text="Mark a task completed: /done <task_id>.")
registry.register("undo", cmd_undo, help_text="Mark a task pending again: /undo <task_id>.")
registry.register("next", cmd_next, help_text="Show the next pending task.")
