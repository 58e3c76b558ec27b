"""
TASKAPP - Record Stores
=======================
Flat JSON record files, one per entity:

    {data_dir}/users.json
    {data_dir}/tasks.json
    {data_dir}/logs.json

Every write rewrites the whole file through a temp file + rename, so a
single write either lands completely or not at all.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Type
import logging

import pydantic

from .errors import StoreError
from .schema import LogEntry, Task, User

logger = logging.getLogger("taskapp.store")


class RecordStore:
    """Base store: the whole file is the list of records, in insertion order"""

    filename: ClassVar[str] = ""
    model: ClassVar[Type[pydantic.BaseModel]] = pydantic.BaseModel

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / self.filename

    # ========================================
    # FILE I/O
    # ========================================

    def _load(self) -> List[Any]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding="utf-8") as f:
                data = json.load(f)
            records = [self.model(**item) for item in data.get("records", [])]
        except (json.JSONDecodeError, UnicodeDecodeError, AttributeError, TypeError,
                pydantic.ValidationError) as e:
            logger.error(f"❌ Cannot read {self.path}: {e}")
            raise StoreError(f"record store is unreadable: {self.path}") from e

        logger.debug(f"📂 Loaded {len(records)} records from {self.path.name}")
        return records

    def _write(self, records: List[Any]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        payload: Dict[str, Any] = {
            "records": [r.model_dump(mode='json') for r in records]
        }

        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{self.filename}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding="utf-8") as f:
                json.dump(payload, f, indent=2, default=str)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug(f"💾 Saved {len(records)} records to {self.path.name}")

    # ========================================
    # RECORD OPERATIONS
    # ========================================

    def init(self) -> bool:
        """Create an empty store file. Returns False if one already exists."""
        if self.path.exists():
            return False
        self._write([])
        return True

    def find_all(self) -> List[Any]:
        return self._load()

    def save(self, record: Any) -> None:
        """Append a record"""
        records = self._load()
        records.append(record)
        self._write(records)


class KeyedStore(RecordStore):
    """Store whose records are unique by their `code` field"""

    def find_by_code(self, code: int) -> Optional[Any]:
        for record in self._load():
            if record.code == code:
                return record
        return None

    def find_all(self) -> List[Any]:
        return sorted(self._load(), key=lambda r: r.code)

    def save(self, record: Any) -> None:
        records = self._load()
        if any(r.code == record.code for r in records):
            raise ValueError(f"{self.filename}: code {record.code} already exists")
        records.append(record)
        self._write(records)

    def update(self, record: Any) -> bool:
        """Replace the record with the same code. False if there is none."""
        records = self._load()
        for i, existing in enumerate(records):
            if existing.code == record.code:
                records[i] = record
                self._write(records)
                return True
        return False

    def delete(self, code: int) -> bool:
        records = self._load()
        kept = [r for r in records if r.code != code]
        if len(kept) == len(records):
            return False
        self._write(kept)
        return True


class UserStore(KeyedStore):
    filename = "users.json"
    model = User

    def find_by_credentials(self, email: str, password: str) -> Optional[User]:
        """Exact match on both fields"""
        for user in self._load():
            if user.email == email and user.password == password:
                return user
        return None


class TaskStore(KeyedStore):
    filename = "tasks.json"
    model = Task


class LogStore(RecordStore):
    """Append-only audit entries, keyed by task code"""

    filename = "logs.json"
    model = LogEntry

    def find_by_task_code(self, task_code: int) -> List[LogEntry]:
        return [e for e in self._load() if e.task_code == task_code]

    def delete_by_task_code(self, task_code: int) -> int:
        """Remove every entry for a task. Returns how many were removed."""
        entries = self._load()
        kept = [e for e in entries if e.task_code != task_code]
        removed = len(entries) - len(kept)
        if removed:
            self._write(kept)
        return removed

    def delete_orphans(self, live_task_codes) -> int:
        """Remove entries whose task code is not in `live_task_codes`"""
        live = set(live_task_codes)
        entries = self._load()
        kept = [e for e in entries if e.task_code in live]
        removed = len(entries) - len(kept)
        if removed:
            self._write(kept)
        return removed
