"""
TASKAPP - Task Manager
======================
Task rules over the user, task and log stores: login, listing, creation,
status transitions and deletion. Every task creation and status change is
mirrored into the log store; deleting a task removes its log entries too.

The logged-in user is passed into each call; the manager holds no session.
"""

from datetime import date
from pathlib import Path
from typing import Callable, Iterator, List, Optional
import logging

import pydantic

from .config import DEFAULT_DATA_DIR
from .errors import (
    AuthError, InvalidStateError, InvalidTransitionError, NotFoundError,
    ValidationError
)
from .schema import TASK_NAME_MAX_LENGTH, LogEntry, Task, TaskStatus, User
from .store import LogStore, TaskStore, UserStore

logger = logging.getLogger("taskapp")


class TaskManager:
    """
    Task rules engine

    Storage: one JSON record file per entity under `data_dir`
    (see taskapp.store). Stores may also be injected directly.
    """

    def __init__(
        self,
        data_dir: str = DEFAULT_DATA_DIR,
        user_store: Optional[UserStore] = None,
        task_store: Optional[TaskStore] = None,
        log_store: Optional[LogStore] = None,
        today: Callable[[], date] = date.today
    ):
        self.data_dir = Path(data_dir)
        self.users = user_store or UserStore(self.data_dir)
        self.tasks = task_store or TaskStore(self.data_dir)
        self.logs = log_store or LogStore(self.data_dir)
        self._today = today

    # ========================================
    # AUTHENTICATION
    # ========================================

    def login(self, email: str, password: str) -> User:
        """Return the user whose email and password both match exactly"""
        user = self.users.find_by_credentials(email, password)
        if user is None:
            logger.warning(f"🔒 Login failed for {email!r}")
            raise AuthError()

        logger.info(f"🔓 Logged in: {user.name} ({user.code})")
        return user

    def add_user(self, code: int, name: str, email: str, password: str) -> User:
        """Register a user record (seeds the user store)"""
        if self.users.find_by_code(code) is not None:
            logger.warning(f"⛔ User code {code} already registered")
            raise ValidationError("enter a user code that is not already registered")

        user = User(code=code, name=name, email=email, password=password)
        self.users.save(user)

        logger.info(f"👤 Registered user: {user.name} ({user.code})")
        return user

    # ========================================
    # TASK OPERATIONS
    # ========================================

    def list_tasks(self, login_user: User) -> Iterator[str]:
        """
        Yield one display row per task, ordered by task code:

            1. name: Write spec, assignee: you are responsible, status: not started
        """
        users = {u.code: u for u in self.users.find_all()}
        for task in self.tasks.find_all():
            yield (
                f"{task.code}. name: {task.name}, "
                f"assignee: {self._assignee_label(task, login_user, users)}, "
                f"status: {task.status.label}"
            )

    def create_task(
        self,
        code: int,
        name: str,
        assignee_code: int,
        login_user: User
    ) -> Task:
        """
        Create a NOT_STARTED task and log its creation.

        Every check runs before the first write, so a failure creates nothing.
        """
        if self.users.find_by_code(assignee_code) is None:
            logger.warning(f"⛔ Unknown assignee {assignee_code} for task {code}")
            raise ValidationError()

        if self.tasks.find_by_code(code) is not None:
            logger.warning(f"⛔ Task code {code} already in use")
            raise ValidationError("enter a task code that is not already in use")

        try:
            task = Task(code=code, name=name, assignee_code=assignee_code)
        except pydantic.ValidationError:
            logger.warning(f"⛔ Task name too long: {name!r}")
            raise ValidationError(
                f"task name must be {TASK_NAME_MAX_LENGTH} characters or fewer"
            ) from None

        self.tasks.save(task)
        self._append_log(task, login_user)

        logger.info(f"✅ Created task: {task.label}")
        return task

    def change_status(
        self,
        code: int,
        new_status: TaskStatus,
        login_user: User
    ) -> Task:
        """Advance a task exactly one step and log the change"""
        task = self.tasks.find_by_code(code)
        if task is None:
            logger.warning(f"⛔ Status change on unknown task {code}")
            raise NotFoundError()

        try:
            new_status = TaskStatus(new_status)
        except ValueError:
            logger.warning(f"⛔ Task {code}: unknown status {new_status!r}")
            raise InvalidTransitionError() from None

        if not task.status.can_advance_to(new_status):
            logger.warning(
                f"⛔ Task {code}: {task.status.label} -> {new_status.label} not allowed"
            )
            raise InvalidTransitionError()

        task = task.model_copy(update={"status": new_status})
        self.tasks.update(task)
        self._append_log(task, login_user)

        logger.info(f"▶️ Task {task.label} is now {new_status.label}")
        return task

    def delete_task(self, code: int) -> Task:
        """
        Delete a DONE task, then every log entry for it.

        The two writes are not atomic together: if removing the log entries
        fails, the error propagates with the task already gone and its
        entries left as orphans. purge_orphaned_logs() cleans those up.
        """
        task = self.tasks.find_by_code(code)
        if task is None:
            logger.warning(f"⛔ Delete of unknown task {code}")
            raise NotFoundError()

        if task.status != TaskStatus.DONE:
            logger.warning(f"⛔ Task {task.label} is {task.status.label}, not done")
            raise InvalidStateError()

        self.tasks.delete(code)
        removed = self.logs.delete_by_task_code(code)

        logger.info(f"🗑️ Deleted task: {task.label} ({removed} log entries)")
        return task

    # ========================================
    # AUDIT LOG
    # ========================================

    def task_log(self, code: int) -> List[LogEntry]:
        """Log entries for a task code, oldest first"""
        return self.logs.find_by_task_code(code)

    def purge_orphaned_logs(self) -> int:
        """Remove log entries whose task no longer exists"""
        live = [t.code for t in self.tasks.find_all()]
        removed = self.logs.delete_orphans(live)
        if removed:
            logger.info(f"🧹 Purged {removed} orphaned log entries")
        return removed

    # ========================================
    # HELPER METHODS
    # ========================================

    def _append_log(self, task: Task, login_user: User) -> LogEntry:
        entry = LogEntry(
            task_code=task.code,
            changed_by_user_code=login_user.code,
            status=task.status,
            change_date=self._today()
        )
        self.logs.save(entry)
        return entry

    def _assignee_label(self, task: Task, login_user: User, users: dict) -> str:
        if task.assignee_code == login_user.code:
            return "you are responsible"

        assignee = users.get(task.assignee_code)
        if assignee is None:
            return f"user {task.assignee_code} (unknown) is responsible"
        return f"{assignee.name} is responsible"
