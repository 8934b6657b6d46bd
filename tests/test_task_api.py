# tests/test_task_api.py

from __future__ import annotations

import threading

import pytest

from todo_sessions.errors import NotFoundError, ValidationError
from todo_sessions.tasks import task_api
from todo_sessions.tasks.session_store import SessionStore
from todo_sessions.tasks.task_models import Task, TaskStatus, parse_task_id, task_order_key


@pytest.fixture()
def session_id(store: SessionStore) -> str:
    return store.create(["Create a weather app", "Write tests for the app"]).session_id


def _ids(tasks: list[Task]) -> list[str]:
    return [t.id for t in tasks]


# ---- id parsing ----


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", 1), ("010", 10), ("0", 0), ("", None), ("a", None), ("-1", None), ("+1", None), (" 1", None), ("1.0", None), ("١", None)],
)
def test_parse_task_id(raw: str, expected: int | None) -> None:
    assert parse_task_id(raw) == expected


def test_order_key_puts_non_numeric_last() -> None:
    tasks = [Task(id="x", description=""), Task(id="10", description=""), Task(id="2", description="")]
    assert _ids(sorted(tasks, key=task_order_key)) == ["2", "10", "x"]


# ---- list_tasks ----


def test_list_tasks_in_stored_order(store: SessionStore, session_id: str) -> None:
    tasks = task_api.list_tasks(store, session_id)
    assert [t.to_dict() for t in tasks] == [
        {"id": "1", "description": "Create a weather app", "status": "pending"},
        {"id": "2", "description": "Write tests for the app", "status": "pending"},
    ]


def test_list_tasks_by_id_and_status(store: SessionStore, session_id: str) -> None:
    task_api.update_task_status(store, session_id, "2", "completed")

    assert _ids(task_api.list_tasks(store, session_id, task_id="2")) == ["2"]
    assert task_api.list_tasks(store, session_id, task_id="99") == []
    assert _ids(task_api.list_tasks(store, session_id, status="pending")) == ["1"]
    assert _ids(task_api.list_tasks(store, session_id, status="completed")) == ["2"]
    assert _ids(task_api.list_tasks(store, session_id, status="all")) == ["1", "2"]


def test_list_tasks_rejects_unknown_status(store: SessionStore, session_id: str) -> None:
    with pytest.raises(ValidationError):
        task_api.list_tasks(store, session_id, status="done")


def test_returned_tasks_are_snapshots(store: SessionStore, session_id: str) -> None:
    task_api.list_tasks(store, session_id)[0].description = "changed"
    assert task_api.list_tasks(store, session_id)[0].description == "Create a weather app"


# ---- add_task ----


def test_add_task_appends_pending_with_next_id(store: SessionStore, session_id: str) -> None:
    added = task_api.add_task(store, session_id, "Deploy")

    assert added == Task(id="3", description="Deploy", status=TaskStatus.PENDING)
    assert task_api.list_tasks(store, session_id)[-1] == added


# ---- update_task_status ----


def test_update_task_status_returns_task_and_full_list(store: SessionStore, session_id: str) -> None:
    updated, tasks = task_api.update_task_status(store, session_id, "1", "completed")

    assert updated.to_dict() == {"id": "1", "description": "Create a weather app", "status": "completed"}
    assert [t.status for t in tasks] == [TaskStatus.COMPLETED, TaskStatus.PENDING]


def test_update_task_status_is_idempotent(store: SessionStore, session_id: str) -> None:
    first, _ = task_api.update_task_status(store, session_id, "1", TaskStatus.COMPLETED)
    second, tasks = task_api.update_task_status(store, session_id, "1", TaskStatus.COMPLETED)

    assert first == second
    assert [t.status for t in tasks] == [TaskStatus.COMPLETED, TaskStatus.PENDING]


def test_update_task_status_unknown_task_leaves_list_unchanged(
    store: SessionStore, session_id: str
) -> None:
    before = task_api.list_tasks(store, session_id)
    with pytest.raises(NotFoundError, match="Task not found: 42"):
        task_api.update_task_status(store, session_id, "42", "completed")
    assert task_api.list_tasks(store, session_id) == before


# ---- update_tasks ----


def test_update_tasks_replaces_existing_fully(store: SessionStore, session_id: str) -> None:
    tasks = task_api.update_tasks(
        store,
        session_id,
        [
            Task(id="1", description="Create a weather app", status=TaskStatus.COMPLETED),
            Task(id="2", description="Write more tests for the app", status=TaskStatus.PENDING),
        ],
    )
    assert [t.to_dict() for t in tasks] == [
        {"id": "1", "description": "Create a weather app", "status": "completed"},
        {"id": "2", "description": "Write more tests for the app", "status": "pending"},
    ]


def test_update_tasks_appends_new_and_sorts_by_numeric_id(
    store: SessionStore, session_id: str
) -> None:
    tasks = task_api.update_tasks(
        store,
        session_id,
        [
            Task(id="10", description="ten"),
            Task(id="3", description="three"),
        ],
    )
    assert _ids(tasks) == ["1", "2", "3", "10"]
    assert _ids(task_api.list_tasks(store, session_id)) == ["1", "2", "3", "10"]


def test_update_tasks_advances_counter_past_new_ids(store: SessionStore, session_id: str) -> None:
    task_api.update_tasks(store, session_id, [Task(id="7", description="seven")])
    assert task_api.add_task(store, session_id, "next").id == "8"


def test_update_tasks_lower_new_id_does_not_move_counter_back(
    store: SessionStore, session_id: str
) -> None:
    task_api.add_task(store, session_id, "three")
    task_api.add_task(store, session_id, "four")
    task_api.update_tasks(store, session_id, [Task(id="0", description="zero")])
    assert task_api.add_task(store, session_id, "five").id == "5"


def test_update_tasks_non_numeric_id_stored_without_counter_change(
    store: SessionStore, session_id: str
) -> None:
    tasks = task_api.update_tasks(
        store, session_id, [Task(id="abc", description="odd"), Task(id="5", description="five")]
    )
    assert _ids(tasks) == ["1", "2", "5", "abc"]
    assert task_api.add_task(store, session_id, "six").id == "6"


def test_update_tasks_rejects_invalid_entries_before_mutating(
    store: SessionStore, session_id: str
) -> None:
    before = task_api.list_tasks(store, session_id)
    with pytest.raises(ValidationError):
        task_api.update_tasks(
            store,
            session_id,
            [Task(id="9", description="ok"), Task(id="", description="no id")],
        )
    assert task_api.list_tasks(store, session_id) == before


def test_update_tasks_rejects_raw_unknown_status_before_mutating(
    store: SessionStore, session_id: str
) -> None:
    before = task_api.list_tasks(store, session_id)
    with pytest.raises(ValidationError, match="Invalid task status: 'done'"):
        task_api.update_tasks(
            store,
            session_id,
            [Task(id="2", description="changed"), Task(id="9", description="x", status="done")],
        )
    assert task_api.list_tasks(store, session_id) == before
    assert task_api.add_task(store, session_id, "next").id == "3"


# ---- get_next_pending_task ----


def test_next_pending_task_progression(store: SessionStore, session_id: str) -> None:
    assert task_api.get_next_pending_task(store, session_id).id == "1"

    task_api.update_task_status(store, session_id, "1", "completed")
    assert task_api.get_next_pending_task(store, session_id).id == "2"

    task_api.update_task_status(store, session_id, "2", "completed")
    assert task_api.get_next_pending_task(store, session_id) is None


def test_next_pending_task_uses_numeric_not_lexical_order(store: SessionStore) -> None:
    sid = store.create([f"t{i}" for i in range(1, 12)]).session_id
    for i in range(1, 9):
        task_api.update_task_status(store, sid, str(i), "completed")
    # pending: "9", "10", "11"; as strings "10" would sort first
    assert task_api.get_next_pending_task(store, sid).id == "9"


def test_next_pending_task_prefers_numeric_ids(store: SessionStore, session_id: str) -> None:
    task_api.update_tasks(store, session_id, [Task(id="zzz", description="odd")])
    assert task_api.get_next_pending_task(store, session_id).id == "1"

    task_api.update_task_status(store, session_id, "1", "completed")
    task_api.update_task_status(store, session_id, "2", "completed")
    assert task_api.get_next_pending_task(store, session_id).id == "zzz"


# ---- unknown session ----


@pytest.mark.parametrize(
    "call",
    [
        lambda s: task_api.list_tasks(s, "missing"),
        lambda s: task_api.list_tasks(s, "missing", status="bogus"),
        lambda s: task_api.add_task(s, "missing", "x"),
        lambda s: task_api.update_task_status(s, "missing", "1", "completed"),
        lambda s: task_api.update_task_status(s, "missing", "1", "done"),
        lambda s: task_api.update_tasks(s, "missing", [Task(id="1", description="x")]),
        lambda s: task_api.update_tasks(s, "missing", [Task(id="", description="x")]),
        lambda s: task_api.update_tasks(
            s, "missing", [Task(id="1", description="x", status="done")]
        ),
        lambda s: task_api.get_next_pending_task(s, "missing"),
    ],
)
def test_unknown_session_fails_without_mutation(store: SessionStore, call) -> None:
    with pytest.raises(NotFoundError, match="Session not found: missing"):
        call(store)
    assert store.count_sessions() == 0


# ---- concurrency ----


def test_concurrent_add_task_mints_unique_ids(store: SessionStore) -> None:
    sid = store.create(["seed"]).session_id

    def worker() -> None:
        for _ in range(50):
            task_api.add_task(store, sid, "x")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = _ids(task_api.list_tasks(store, sid))
    assert len(ids) == 401
    assert len(set(ids)) == 401
