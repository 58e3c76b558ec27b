"""
TASKAPP - Interactive Shell
===========================
Menu-driven session: log in, then list / create tasks, and from the task
list change a task's status or delete it. Engine failures are printed and
the same input is asked for again. End of input logs out.
"""

import sys
from typing import Optional, TextIO

from .errors import AppError
from .manager import TaskManager
from .schema import TASK_NAME_MAX_LENGTH, TaskStatus, User

MAIN_MENU = "1. list tasks, 2. create task, 3. log out"
SUB_MENU = "1. change task status, 2. delete task, 3. back to main menu"
STATUS_MENU = "1. in progress, 2. done"


def is_numeric(text: str) -> bool:
    """Non-empty ASCII digits only; negative numbers are rejected"""
    return text.isascii() and text.isdigit()


class TaskShell:

    def __init__(
        self,
        manager: TaskManager,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None
    ):
        self.manager = manager
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def run(self) -> int:
        self._say("Welcome to taskapp!")
        try:
            login_user = self._login()
            self._main_menu(login_user)
        except EOFError:
            self._say()
            self._say("Logged out.")
        return 0

    # ========================================
    # MENUS
    # ========================================

    def _login(self) -> User:
        while True:
            email = self._ask("email: ")
            password = self._ask("password: ")
            try:
                user = self.manager.login(email, password)
            except AppError as e:
                self._say(e.text)
                self._say()
                continue
            self._say()
            return user

    def _main_menu(self, login_user: User) -> None:
        while True:
            self._say("Choose one of the options 1-3.")
            self._say(MAIN_MENU)
            choice = self._ask("choice: ")
            self._say()

            if choice == "1":
                rows = list(self.manager.list_tasks(login_user))
                for row in rows:
                    self._say(row)
                if not rows:
                    self._say("No tasks found.")
                self._say()
                self._sub_menu(login_user)
            elif choice == "2":
                self._create_task(login_user)
            elif choice == "3":
                self._say("Logged out.")
                return
            else:
                self._say("choose one of 1-3")
            self._say()

    def _sub_menu(self, login_user: User) -> None:
        while True:
            self._say("Choose one of the options 1-3.")
            self._say(SUB_MENU)
            choice = self._ask("choice: ")
            self._say()

            if choice == "1":
                self._change_status(login_user)
            elif choice == "2":
                self._delete_task()
            elif choice == "3":
                self._say("Back to main menu.")
                return
            else:
                self._say("choose one of 1-3")

    # ========================================
    # OPERATIONS
    # ========================================

    def _create_task(self, login_user: User) -> None:
        while True:
            code = self._ask("task code: ")
            if not is_numeric(code):
                self._retry("codes must be entered as digits")
                continue

            name = self._ask("task name: ")
            if len(name) > TASK_NAME_MAX_LENGTH:
                self._retry(f"task name must be {TASK_NAME_MAX_LENGTH} characters or fewer")
                continue

            assignee = self._ask("assignee user code: ")
            if not is_numeric(assignee):
                self._retry("codes must be entered as digits")
                continue

            try:
                task = self.manager.create_task(int(code), name, int(assignee), login_user)
            except AppError as e:
                self._retry(e.text)
                continue

            self._say(f"{task.name} has been registered.")
            return

    def _change_status(self, login_user: User) -> None:
        while True:
            code = self._ask("task code to change: ")
            if not is_numeric(code):
                self._retry("codes must be entered as digits")
                continue

            self._say("Choose the new status.")
            self._say(STATUS_MENU)
            status = self._ask("choice: ")
            if not is_numeric(status):
                self._retry("status must be entered as digits")
                continue
            if status not in ("1", "2"):
                self._retry("choose status 1 or 2")
                continue

            try:
                self.manager.change_status(int(code), TaskStatus(int(status)), login_user)
            except AppError as e:
                self._retry(e.text)
                continue

            self._say("Status change complete.")
            self._say()
            return

    def _delete_task(self) -> None:
        while True:
            code = self._ask("task code to delete: ")
            if not is_numeric(code):
                self._retry("codes must be entered as digits")
                continue

            try:
                task = self.manager.delete_task(int(code))
            except AppError as e:
                self._retry(e.text)
                continue

            self._say(f"{task.name} has been deleted.")
            self._say()
            return

    # ========================================
    # I/O
    # ========================================

    def _ask(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def _say(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def _retry(self, message: str) -> None:
        self._say(message)
        self._say()
