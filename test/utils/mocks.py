"""
Mock utilities for testing persistence without a database

Provides:
- FakeRecordStore: in-memory RecordStore that records every write
"""

from itertools import count
from typing import Any

from translatable.fields import column_names


class FakeRecordStore:
    """RecordStore that keeps a snapshot of each persisted record.

    Dirty fields are the columns whose value differs from the last snapshot
    (or, for records never persisted, every column that is set).
    """

    def __init__(self, fail_on: tuple[type, ...] = ()):
        self.fail_on = fail_on
        self.attempts: list[Any] = []
        self.writes: list[Any] = []
        self.attached: list[Any] = []
        self._snapshots: dict[int, dict[str, Any]] = {}
        self._ids = count(1)

    @staticmethod
    def _values(record: Any) -> dict[str, Any]:
        return {name: getattr(record, name) for name in column_names(type(record))}

    def mark_persisted(self, record: Any) -> Any:
        """Pretend ``record`` was loaded from storage."""
        if record.id is None:
            record.id = next(self._ids)
        self._snapshots[id(record)] = self._values(record)
        return record

    def writes_of(self, model: type) -> list[Any]:
        return [record for record in self.writes if isinstance(record, model)]

    def is_persisted(self, record: Any) -> bool:
        return id(record) in self._snapshots

    def dirty_fields(self, record: Any) -> dict[str, Any]:
        snapshot = self._snapshots.get(id(record))
        values = self._values(record)
        if snapshot is None:
            return {key: value for key, value in values.items() if value is not None}
        return {key: value for key, value in values.items() if snapshot.get(key) != value}

    def identity(self, record: Any) -> Any:
        return record.id

    async def persist(self, record: Any) -> bool:
        self.attempts.append(record)
        if isinstance(record, self.fail_on):
            return False
        self.writes.append(record)
        self.mark_persisted(record)
        return True

    def attach(self, owner: Any, relationship: str, record: Any) -> None:
        self.attached.append(record)
        getattr(owner, relationship).append(record)
