"""Key-Value Storage Adapters — implementations of the KeyValueStorage protocol.

Invariants:
    - Every adapter is scoped to a (name, store_name) namespace; keys never collide
      across namespaces
    - get() returns None for a missing key, never raises for "no data yet"
    - set() replaces the whole value in one statement (or one dict assignment);
      overlapping set() calls on the same key never fail, the last one wins
    - Each get()/set() is exactly one suspension point, no retries

Design Decisions:
    - SqlKeyValueStorage goes through DatabaseSessionManager so SQLAlchemy failures
      arrive as DatabaseError (same mapping as every other DB call)
    - set() is INSERT ... ON CONFLICT DO UPDATE, built with the dialect's own
      insert(); only sqlite and postgresql are supported
    - InMemoryKeyValueStorage stores JSON text, not live objects: callers get fresh
      copies and non-JSON values fail at set() like they would in a real store
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.dialects import postgresql, sqlite

from translator.infrastructure.database import DatabaseSessionManager
from translator.models.storage_item import StorageItem

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

_SLOT_COLUMNS = ["name", "store_name", "key"]


class SqlKeyValueStorage:
    """KeyValueStorage backed by the key_value_items table."""

    def __init__(
        self, db: DatabaseSessionManager, name: str, store_name: str,
    ):
        insert = _DIALECT_INSERTS.get(db.dialect_name)
        if insert is None:
            raise ValueError(f"Unsupported database dialect: {db.dialect_name}")
        self._db = db
        self._insert = insert
        self.name = name
        self.store_name = store_name

    async def get(self, key: str) -> Any | None:
        async with self._db.session() as db:
            item = await db.get(StorageItem, (self.name, self.store_name, key))
            return item.value if item is not None else None

    async def set(self, key: str, value: Any) -> None:
        stmt = self._insert(StorageItem).values(
            name=self.name, store_name=self.store_name, key=key,
            value=value, updated_at=datetime.now(timezone.utc),
        )
        # onupdate defaults do not fire for ON CONFLICT, so updated_at is set here
        stmt = stmt.on_conflict_do_update(
            index_elements=_SLOT_COLUMNS,
            set_={
                "value": stmt.excluded.value,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        async with self._db.session() as db:
            await db.execute(stmt)
            await db.commit()
        logger.debug(
            "Storage slot written",
            extra={"collection": f"{self.name}/{self.store_name}"},
        )


class InMemoryKeyValueStorage:
    """KeyValueStorage held in process memory. Lost on restart."""

    def __init__(self, name: str = "default", store_name: str = "default"):
        self.name = name
        self.store_name = store_name
        self._items: dict[tuple[str, str, str], str] = {}

    async def get(self, key: str) -> Any | None:
        await asyncio.sleep(0)
        raw = self._items.get((self.name, self.store_name, key))
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any) -> None:
        encoded = json.dumps(value, ensure_ascii=False)
        await asyncio.sleep(0)
        self._items[(self.name, self.store_name, key)] = encoded
