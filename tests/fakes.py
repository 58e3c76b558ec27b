# tests/fakes.py

from __future__ import annotations

from datetime import date

from taskapp.store import LogStore

TODAY = date(2026, 1, 15)


class FailingLogStore(LogStore):
    """
    LogStore whose bulk delete fails, as a full disk or a permissions
    problem would. Reads and appends still work.
    """

    def delete_by_task_code(self, task_code: int) -> int:
        raise OSError(f"cannot rewrite {self.path}")
