# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskapp.manager import TaskManager
from taskapp.schema import User

from .fakes import TODAY


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture()
def manager(data_dir: Path) -> TaskManager:
    """
    TaskManager over real JSON stores in a tmp dir, with a fixed clock.

    Seeded users:
      5 Alice alice@example.com / a-pass
      9 Bob   bob@example.com   / b-pass
    """
    m = TaskManager(data_dir=data_dir, today=lambda: TODAY)
    m.add_user(5, "Alice", "alice@example.com", "a-pass")
    m.add_user(9, "Bob", "bob@example.com", "b-pass")
    return m


@pytest.fixture()
def alice(manager: TaskManager) -> User:
    return manager.users.find_by_code(5)


@pytest.fixture()
def bob(manager: TaskManager) -> User:
    return manager.users.find_by_code(9)
