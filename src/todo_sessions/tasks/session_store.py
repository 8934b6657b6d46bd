# src/todo_sessions/tasks/session_store.py

from __future__ import annotations

import contextlib
import logging
import threading
import uuid
from collections.abc import Iterator, Sequence

from ..errors import NotFoundError, ValidationError
from .task_models import Session, Task, TaskStatus

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory session store.

    - sessions live for the lifetime of the store (no deletion, no persistence)
    - task ids are minted per session from next_task_id_counter ("1", "2", ...)

    Thread-safety:
    - one re-entrant lock guards the whole store; task operations hold it
      for the full lookup -> mutate -> return sequence via session()
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.RLock()
        logger.info("SessionStore ready")

    @staticmethod
    def _new_session_id() -> str:
        return uuid.uuid4().hex

    # ---- public API ----

    def count_sessions(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, initial_descriptions: Sequence[str]) -> Session:
        """
        Create a session seeded with one pending task per description.

        Returns a snapshot of the new session; ids are "1".."n" in input order.
        """
        if not initial_descriptions:
            raise ValidationError("initial_tasks must not be empty")

        with self._lock:
            session_id = self._new_session_id()
            while session_id in self._sessions:
                session_id = self._new_session_id()

            session = Session(session_id=session_id)
            for description in initial_descriptions:
                session.tasks.append(
                    Task(id=self.mint_task_id(session), description=description, status=TaskStatus.PENDING)
                )
            self._sessions[session_id] = session

            logger.info("Session created id=%s tasks=%d", session_id, len(session.tasks))
            return _snapshot(session)

    def lookup(self, session_id: str) -> Session:
        """Snapshot of a session, or NotFoundError. Mutate through session() instead."""
        with self._lock:
            return _snapshot(self._live(session_id))

    @contextlib.contextmanager
    def session(self, session_id: str) -> Iterator[Session]:
        """Hold the store lock while the caller works on the live session."""
        with self._lock:
            yield self._live(session_id)

    def _live(self, session_id: str) -> Session:
        # caller holds self._lock
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError(
                f"Session not found: {session_id}", details={"session_id": session_id}
            )
        return session

    @staticmethod
    def mint_task_id(session: Session) -> str:
        task_id = str(session.next_task_id_counter)
        session.next_task_id_counter += 1
        return task_id


def _snapshot(session: Session) -> Session:
    return Session(
        session_id=session.session_id,
        tasks=[t.snapshot() for t in session.tasks],
        next_task_id_counter=session.next_task_id_counter,
    )
