# tests/test_store.py

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from taskapp.errors import StoreError
from taskapp.schema import LogEntry, Task, TaskStatus, User
from taskapp.store import LogStore, TaskStore, UserStore


def test_missing_file_reads_as_empty(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "nowhere")
    assert store.find_all() == []
    assert store.find_by_code(1) is None


def test_init_creates_file_once(tmp_path: Path) -> None:
    store = UserStore(tmp_path)
    assert store.init() is True
    assert store.init() is False
    assert json.loads(store.path.read_text()) == {"records": []}


def test_task_crud_persists_to_file(tmp_path: Path) -> None:
    store = TaskStore(tmp_path)
    store.save(Task(code=2, name="B", assignee_code=5))
    store.save(Task(code=1, name="A", assignee_code=9))

    # a fresh store reads the same file
    reopened = TaskStore(tmp_path)
    assert [t.code for t in reopened.find_all()] == [1, 2]

    updated = reopened.find_by_code(2).model_copy(update={"status": TaskStatus.IN_PROGRESS})
    assert reopened.update(updated) is True
    assert store.find_by_code(2).status is TaskStatus.IN_PROGRESS

    assert store.delete(1) is True
    assert store.delete(1) is False
    assert [t.code for t in store.find_all()] == [2]


def test_update_of_unknown_code_writes_nothing(tmp_path: Path) -> None:
    store = TaskStore(tmp_path)
    assert store.update(Task(code=7, name="ghost", assignee_code=5)) is False
    assert not store.path.exists()


def test_duplicate_code_is_rejected(tmp_path: Path) -> None:
    store = TaskStore(tmp_path)
    store.save(Task(code=1, name="A", assignee_code=5))
    with pytest.raises(ValueError):
        store.save(Task(code=1, name="again", assignee_code=5))
    assert len(store.find_all()) == 1


def test_find_by_credentials_is_exact(tmp_path: Path) -> None:
    store = UserStore(tmp_path)
    store.save(User(code=5, name="Alice", email="alice@example.com", password="pw"))

    assert store.find_by_credentials("alice@example.com", "pw").code == 5
    assert store.find_by_credentials("alice@example.com", "PW") is None
    assert store.find_by_credentials("Alice@example.com", "pw") is None
    assert store.find_by_credentials("", "") is None


def test_log_store_appends_and_bulk_deletes(tmp_path: Path) -> None:
    store = LogStore(tmp_path)
    day = date(2026, 1, 15)
    store.save(LogEntry(task_code=1, changed_by_user_code=5, status=0, change_date=day))
    store.save(LogEntry(task_code=2, changed_by_user_code=5, status=0, change_date=day))
    store.save(LogEntry(task_code=1, changed_by_user_code=9, status=1, change_date=day))

    assert [e.status for e in store.find_by_task_code(1)] == [TaskStatus.NOT_STARTED, TaskStatus.IN_PROGRESS]
    assert store.find_by_task_code(1)[0].change_date == day

    assert store.delete_by_task_code(1) == 2
    assert store.delete_by_task_code(1) == 0
    assert [e.task_code for e in store.find_all()] == [2]

    assert store.delete_orphans(live_task_codes=[]) == 1
    assert store.find_all() == []


def test_no_temp_files_left_behind(tmp_path: Path) -> None:
    store = TaskStore(tmp_path)
    store.save(Task(code=1, name="A", assignee_code=5))
    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.json"]


@pytest.mark.parametrize("content", [
    b"{not json",
    b"[1, 2]",
    b'{"records": [{"code": "x"}]}',
    b'{"records": [\xff\xfe]}',
    b"\xff\xfe",
])
def test_corrupt_file_raises_store_error(tmp_path: Path, content: bytes) -> None:
    (tmp_path / "tasks.json").write_bytes(content)
    with pytest.raises(StoreError) as exc:
        TaskStore(tmp_path).find_all()
    assert "tasks.json" in str(exc.value)
