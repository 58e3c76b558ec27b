#!/usr/bin/env python3
"""
TASKAPP - CLI Interface
=======================
Command-line tool for tracking tasks through
not started -> in progress -> done.

Usage:
    taskapp init
    taskapp add-user 5 Alice alice@example.com secret
    taskapp list --email alice@example.com --password secret
    taskapp create 1 "Write spec" 5
    taskapp status 1 in_progress
    taskapp delete 1
    taskapp shell
"""

import argparse
import sys
import json
import logging
from typing import List, Optional

from .config import resolve_credentials, resolve_data_dir
from .errors import AppError
from .manager import TaskManager
from .schema import TASK_NAME_MAX_LENGTH, TaskStatus
from .shell import TaskShell, is_numeric

STATUS_NAMES = {
    "1": TaskStatus.IN_PROGRESS,
    "2": TaskStatus.DONE,
    "in_progress": TaskStatus.IN_PROGRESS,
    "done": TaskStatus.DONE,
}


def _code(text: str) -> int:
    if not is_numeric(text):
        raise argparse.ArgumentTypeError("codes must be entered as digits")
    return int(text)


def _task_name(text: str) -> str:
    if len(text) > TASK_NAME_MAX_LENGTH:
        raise argparse.ArgumentTypeError(
            f"task name must be {TASK_NAME_MAX_LENGTH} characters or fewer"
        )
    return text


def _status(text: str) -> TaskStatus:
    try:
        return STATUS_NAMES[text.lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(
            "status must be 1/in_progress or 2/done"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--dir", help="Data directory (default: $TASKAPP_DATA_DIR or .taskapp)")

    auth = argparse.ArgumentParser(add_help=False, parents=[common])
    auth.add_argument("--email", help="Login email (default: $TASKAPP_EMAIL)")
    auth.add_argument("--password", help="Login password (default: $TASKAPP_PASSWORD)")

    parser = argparse.ArgumentParser(
        prog="taskapp",
        description="taskapp - task tracking with an audit log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  taskapp init                                   Create empty record files
  taskapp add-user 5 Alice alice@example.com pw  Register a user
  taskapp list --email alice@example.com --password pw
                                                 Show all tasks
  taskapp create 1 "Write spec" 5                Create task 1 for user 5
  taskapp status 1 in_progress                   Advance task 1 one step
  taskapp delete 1                               Delete a done task
  taskapp history 1                              Show the audit log of task 1
  taskapp shell                                  Interactive menus
        """
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # INIT command
    subparsers.add_parser("init", parents=[common], help="Create the data directory and record files")

    # ADD-USER command
    add_user_parser = subparsers.add_parser("add-user", parents=[common], help="Register a user")
    add_user_parser.add_argument("code", type=_code, help="User code")
    add_user_parser.add_argument("name", help="Display name")
    add_user_parser.add_argument("email", help="Login email")
    add_user_parser.add_argument("password", help="Login password")

    # USERS command
    users_parser = subparsers.add_parser("users", parents=[common], help="List registered users")
    users_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # LIST command
    subparsers.add_parser("list", parents=[auth], help="List all tasks")

    # CREATE command
    create_parser = subparsers.add_parser("create", parents=[auth], help="Create a task")
    create_parser.add_argument("code", type=_code, help="Task code")
    create_parser.add_argument("name", type=_task_name, help=f"Task name (max {TASK_NAME_MAX_LENGTH} chars)")
    create_parser.add_argument("assignee", type=_code, help="Code of the responsible user")

    # STATUS command
    status_parser = subparsers.add_parser("status", parents=[auth], help="Advance a task's status")
    status_parser.add_argument("code", type=_code, help="Task code")
    status_parser.add_argument("new_status", type=_status, help="1/in_progress or 2/done")

    # DELETE command
    delete_parser = subparsers.add_parser("delete", parents=[auth], help="Delete a done task")
    delete_parser.add_argument("code", type=_code, help="Task code")

    # HISTORY command
    history_parser = subparsers.add_parser("history", parents=[common], help="Show a task's audit log")
    history_parser.add_argument("code", type=_code, help="Task code")
    history_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # PURGE-LOGS command
    subparsers.add_parser("purge-logs", parents=[common], help="Remove log entries of deleted tasks")

    # SHELL command
    subparsers.add_parser("shell", parents=[common], help="Start the interactive shell")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _login(manager: TaskManager, args: argparse.Namespace):
    email, password = resolve_credentials(args.email, args.password)
    return manager.login(email, password)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args.verbose)

    # Initialize manager
    data_dir = resolve_data_dir(getattr(args, "dir", None))
    manager = TaskManager(data_dir=data_dir)

    try:
        return _run(manager, args)
    except AppError as e:
        print(f"❌ {e.text}", file=sys.stderr)
        return 1


def _run(manager: TaskManager, args: argparse.Namespace) -> int:
    # Execute command
    if args.command == "init":
        for store in (manager.users, manager.tasks, manager.logs):
            created = store.init()
            print(f"{'✅ Created' if created else '   Exists '}: {store.path}")

    elif args.command == "add-user":
        user = manager.add_user(args.code, args.name, args.email, args.password)
        print(f"👤 Registered: {user.name} ({user.code})")

    elif args.command == "users":
        users = manager.users.find_all()
        rows = [u.model_dump(mode='json', exclude={"password"}) for u in users]

        if args.json:
            print(json.dumps(rows, indent=2))
        elif not users:
            print("No users found")
        else:
            for row in rows:
                print(f"  [{row['code']}] {row['name']} <{row['email']}>")

    elif args.command == "list":
        login_user = _login(manager, args)
        found = False
        for row in manager.list_tasks(login_user):
            print(row)
            found = True
        if not found:
            print("No tasks found.")

    elif args.command == "create":
        login_user = _login(manager, args)
        task = manager.create_task(args.code, args.name, args.assignee, login_user)
        print(f"✅ {task.name} has been registered.")

    elif args.command == "status":
        login_user = _login(manager, args)
        task = manager.change_status(args.code, args.new_status, login_user)
        print(f"▶️ {task.name} is now {task.status.label}.")

    elif args.command == "delete":
        _login(manager, args)
        task = manager.delete_task(args.code)
        print(f"🗑️ {task.name} has been deleted.")

    elif args.command == "history":
        entries = manager.task_log(args.code)

        if args.json:
            print(json.dumps([e.model_dump(mode='json') for e in entries], indent=2))
        elif not entries:
            print(f"No log entries for task {args.code}")
        else:
            for entry in entries:
                print(
                    f"  {entry.change_date.isoformat()}  {entry.status.label:<12} "
                    f"by user {entry.changed_by_user_code}"
                )

    elif args.command == "purge-logs":
        removed = manager.purge_orphaned_logs()
        print(f"🧹 Removed {removed} orphaned log entries")

    elif args.command == "shell":
        return TaskShell(manager).run()

    return 0


if __name__ == "__main__":
    sys.exit(main())
