"""
TASKAPP - Task Tracking with an Audit Log
=========================================

Users log in, create tasks, advance them one step at a time
(not started -> in progress -> done) and delete finished ones.
Every creation and status change is written to an append-only log.

Usage:
    from taskapp import TaskManager, TaskStatus

    manager = TaskManager(".taskapp")
    me = manager.login("alice@example.com", "secret")

    manager.create_task(1, "Write spec", assignee_code=me.code, login_user=me)
    manager.change_status(1, TaskStatus.IN_PROGRESS, me)
    manager.change_status(1, TaskStatus.DONE, me)
    manager.delete_task(1)   # also removes the task's log entries
"""

from .schema import (
    User,
    Task,
    TaskStatus,
    LogEntry,
    status_label
)

from .errors import (
    AppError,
    ValidationError,
    NotFoundError,
    InvalidTransitionError,
    InvalidStateError,
    AuthError,
    StoreError
)

from .manager import TaskManager

__version__ = "1.0.0"
__all__ = [
    "TaskManager",
    "User",
    "Task",
    "TaskStatus",
    "LogEntry",
    "status_label",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InvalidTransitionError",
    "InvalidStateError",
    "AuthError",
    "StoreError"
]
