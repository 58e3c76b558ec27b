# tests/test_schema.py

from __future__ import annotations

from datetime import date

import pydantic
import pytest

from taskapp.schema import LogEntry, Task, TaskStatus, User, status_label


def test_status_labels_cover_every_state() -> None:
    assert [s.label for s in TaskStatus] == ["not started", "in progress", "done"]
    assert status_label(1) == "in progress"


def test_single_forward_path() -> None:
    assert TaskStatus.NOT_STARTED.next_status() is TaskStatus.IN_PROGRESS
    assert TaskStatus.IN_PROGRESS.next_status() is TaskStatus.DONE
    assert TaskStatus.DONE.next_status() is None
    assert TaskStatus.DONE.is_terminal
    assert not TaskStatus.NOT_STARTED.is_terminal


@pytest.mark.parametrize("current,new,allowed", [
    (TaskStatus.NOT_STARTED, TaskStatus.IN_PROGRESS, True),
    (TaskStatus.IN_PROGRESS, TaskStatus.DONE, True),
    (TaskStatus.NOT_STARTED, TaskStatus.DONE, False),
    (TaskStatus.NOT_STARTED, TaskStatus.NOT_STARTED, False),
    (TaskStatus.IN_PROGRESS, TaskStatus.IN_PROGRESS, False),
    (TaskStatus.IN_PROGRESS, TaskStatus.NOT_STARTED, False),
    (TaskStatus.DONE, TaskStatus.DONE, False),
    (TaskStatus.DONE, TaskStatus.NOT_STARTED, False),
])
def test_can_advance_to(current, new, allowed) -> None:
    assert current.can_advance_to(new) is allowed


def test_task_defaults_to_not_started_and_dumps_status_as_int() -> None:
    task = Task(code=1, name="Write spec", assignee_code=5)
    assert task.status is TaskStatus.NOT_STARTED
    assert task.model_dump(mode="json")["status"] == 0


def test_task_name_is_limited_to_ten_characters() -> None:
    with pytest.raises(pydantic.ValidationError):
        Task(code=1, name="x" * 11, assignee_code=5)


def test_user_and_log_entry_are_immutable() -> None:
    user = User(code=5, name="Alice", email="a@example.com", password="pw")
    entry = LogEntry(task_code=1, changed_by_user_code=5, status=0, change_date=date(2026, 1, 1))

    with pytest.raises(pydantic.ValidationError):
        user.name = "Eve"
    with pytest.raises(pydantic.ValidationError):
        entry.status = TaskStatus.DONE
