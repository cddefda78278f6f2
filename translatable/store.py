"""
Record storage backends

The resolver never talks to SQLAlchemy directly. It asks a RecordStore whether
a record is persisted, which of its fields are dirty, what its identity is,
to persist it, and to attach a persisted child to its owner.
SQLAlchemyRecordStore implements that on an AsyncSession.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from sqlalchemy.orm.attributes import set_committed_value

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def is_persisted(self, record: Any) -> bool: ...

    def dirty_fields(self, record: Any) -> dict[str, Any]: ...

    def identity(self, record: Any) -> Any: ...

    async def persist(self, record: Any) -> bool: ...

    def attach(self, owner: Any, relationship: str, record: Any) -> None: ...


class SQLAlchemyRecordStore:
    """RecordStore backed by an AsyncSession.

    ``persist`` flushes but does not commit; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def is_persisted(self, record: Any) -> bool:
        return inspect(record).has_identity

    def dirty_fields(self, record: Any) -> dict[str, Any]:
        state = inspect(record)
        dirty: dict[str, Any] = {}
        for attr in state.mapper.column_attrs:
            history = state.attrs[attr.key].history
            if history.has_changes():
                dirty[attr.key] = history.added[0] if history.added else None
        return dirty

    def identity(self, record: Any) -> Any:
        mapper = inspect(record).mapper
        return getattr(record, mapper.get_property_by_column(mapper.primary_key[0]).key)

    async def persist(self, record: Any) -> bool:
        """Flush ``record`` alone inside a savepoint.

        Only ``record`` is flushed, not the rest of the session. A failed
        flush rolls back to the savepoint, so earlier work in the caller's
        transaction and the loaded state of other records survive.
        """
        try:
            async with self.db.begin_nested():
                self.db.add(record)
                await self.db.flush([record])
        except SQLAlchemyError as e:
            logger.error("Failed to persist %s: %s", type(record).__name__, e)
            return False
        logger.debug("Persisted %s id=%s", type(record).__name__, self.identity(record))
        return True

    def attach(self, owner: Any, relationship: str, record: Any) -> None:
        # Loaded value, no history: the owner stays clean
        set_committed_value(owner, relationship, [*getattr(owner, relationship), record])
