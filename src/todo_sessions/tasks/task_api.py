# src/todo_sessions/tasks/task_api.py

"""
Task operations on a single session.

Every function resolves the session first (NotFoundError propagates unchanged)
and returns snapshots, never the stored Task objects.

Ordering:
- list_tasks / add_task / update_task_status keep stored (insertion) order
- update_tasks re-sorts the stored list by numeric id before returning
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.ports import SessionRepo
from ..errors import NotFoundError, ValidationError
from .task_models import Task, TaskStatus, parse_task_id, task_order_key

logger = logging.getLogger(__name__)

STATUS_FILTER_ALL = "all"


def list_tasks(
    store: SessionRepo,
    session_id: str,
    *,
    task_id: str | None = None,
    status: str = STATUS_FILTER_ALL,
) -> list[Task]:
    """
    Tasks of a session in stored order.

    task_id -> at most one task (empty list if unknown, not an error).
    status  -> "pending" | "completed" | "all".
    """
    with store.session(session_id) as session:
        wanted: TaskStatus | None = None
        if status != STATUS_FILTER_ALL:
            wanted = TaskStatus.parse(status)

        if task_id:
            task = session.find_task(task_id)
            return [task.snapshot()] if task else []
        return [t.snapshot() for t in session.tasks if wanted is None or t.status == wanted]


def add_task(store: SessionRepo, session_id: str, description: str) -> Task:
    with store.session(session_id) as session:
        task = Task(id=store.mint_task_id(session), description=description)
        session.tasks.append(task)
        logger.debug("Task added session=%s id=%s", session_id, task.id)
        return task.snapshot()


def update_task_status(
    store: SessionRepo, session_id: str, task_id: str, status: str | TaskStatus
) -> tuple[Task, list[Task]]:
    with store.session(session_id) as session:
        new_status = TaskStatus.parse(status)
        task = session.find_task(task_id)
        if task is None:
            raise NotFoundError(
                f"Task not found: {task_id}",
                details={"session_id": session_id, "task_id": task_id},
            )
        task.status = new_status
        logger.debug("Task status session=%s id=%s status=%s", session_id, task_id, new_status)
        return task.snapshot(), [t.snapshot() for t in session.tasks]


def update_tasks(store: SessionRepo, session_id: str, tasks: Iterable[Task]) -> list[Task]:
    """
    Batch upsert.

    Known id  -> full replace of description and status.
    New id    -> appended; a numeric id >= next_task_id_counter advances the
                 counter past it. Non-numeric ids are stored but never move
                 the counter.
    """
    incoming = list(tasks)

    with store.session(session_id) as session:
        # Validate the whole batch before touching the session.
        statuses: list[TaskStatus] = []
        for item in incoming:
            if not item.id:
                raise ValidationError("Task id must be a non-empty string")
            statuses.append(TaskStatus.parse(item.status))

        for item, status in zip(incoming, statuses):
            existing = session.find_task(item.id)
            if existing is not None:
                existing.description = item.description
                existing.status = status
                continue

            session.tasks.append(Task(id=item.id, description=item.description, status=status))
            n = parse_task_id(item.id)
            if n is None:
                logger.warning(
                    "Non-numeric task id stored without advancing counter session=%s id=%r",
                    session_id,
                    item.id,
                )
            elif n >= session.next_task_id_counter:
                session.next_task_id_counter = n + 1

        session.tasks.sort(key=task_order_key)
        logger.debug("Tasks upserted session=%s count=%d", session_id, len(incoming))
        return [t.snapshot() for t in session.tasks]


def get_next_pending_task(store: SessionRepo, session_id: str) -> Task | None:
    """Pending task with the numerically smallest id, or None."""
    with store.session(session_id) as session:
        pending = [t for t in session.tasks if t.status == TaskStatus.PENDING]
        if not pending:
            return None
        return min(pending, key=task_order_key).snapshot()
