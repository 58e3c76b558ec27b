"""
TASKAPP - Record Schema Definition
==================================
Users, tasks and the audit log entries that mirror every task change.

Task status only moves forward one step at a time:

    NOT_STARTED (0) -> IN_PROGRESS (1) -> DONE (2)
"""

from enum import Enum
from typing import Optional
from datetime import date
from pydantic import BaseModel, ConfigDict, Field


TASK_NAME_MAX_LENGTH = 10


class TaskStatus(int, Enum):
    """Task lifecycle states"""
    NOT_STARTED = 0   # Initial state
    IN_PROGRESS = 1   # Being worked on
    DONE = 2          # Terminal, task may be deleted

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def is_terminal(self) -> bool:
        return self.next_status() is None

    def next_status(self) -> Optional["TaskStatus"]:
        """The only status this one may advance to, or None from DONE"""
        return NEXT_STATUS[self]

    def can_advance_to(self, new_status: "TaskStatus") -> bool:
        return self.next_status() == new_status


STATUS_LABELS = {
    TaskStatus.NOT_STARTED: "not started",
    TaskStatus.IN_PROGRESS: "in progress",
    TaskStatus.DONE: "done",
}

NEXT_STATUS = {
    TaskStatus.NOT_STARTED: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.DONE,
    TaskStatus.DONE: None,
}


def status_label(status: TaskStatus) -> str:
    """Human label for a status, e.g. 'in progress'"""
    return STATUS_LABELS[TaskStatus(status)]


class User(BaseModel):
    """Registered user. Immutable once loaded."""
    model_config = ConfigDict(frozen=True)

    code: int
    name: str
    email: str
    password: str       # Stored and compared as plaintext


class Task(BaseModel):
    """Individual task. Only `status` changes after creation."""
    code: int
    name: str = Field(max_length=TASK_NAME_MAX_LENGTH)
    status: TaskStatus = TaskStatus.NOT_STARTED
    assignee_code: int  # User.code of the person responsible

    @property
    def label(self) -> str:
        return f"{self.name} ({self.code})"


class LogEntry(BaseModel):
    """Audit record of a task creation or status change. Never mutated."""
    model_config = ConfigDict(frozen=True)

    task_code: int
    changed_by_user_code: int
    status: TaskStatus
    change_date: date
