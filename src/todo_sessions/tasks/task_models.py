# src/todo_sessions/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from ..errors import ValidationError


class TaskStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | TaskStatus) -> TaskStatus:
        """Strict conversion: unknown values are rejected, never defaulted."""
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Invalid task status: {raw!r} (expected one of: {allowed})",
                details={"status": raw},
            ) from None


@dataclass(slots=True)
class Task:
    id: str
    description: str
    status: TaskStatus = TaskStatus.PENDING

    def snapshot(self) -> Task:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "description": self.description, "status": self.status.value}


@dataclass(slots=True)
class Session:
    session_id: str
    tasks: list[Task] = field(default_factory=list)
    next_task_id_counter: int = 1

    def find_task(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


def parse_task_id(task_id: str) -> int | None:
    """
    Numeric value of a task id, or None if the id is not a plain
    non-negative decimal integer ("12" -> 12; " 1", "+1", "1.0", "a" -> None).
    """
    if task_id and task_id.isascii() and task_id.isdigit():
        return int(task_id)
    return None


def task_order_key(task: Task) -> tuple[bool, int]:
    # Numeric ids ascending; non-numeric ids after them (stable sort keeps stored order).
    n = parse_task_id(task.id)
    return (n is None, n if n is not None else 0)
