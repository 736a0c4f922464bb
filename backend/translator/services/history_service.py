"""History Store — translation history persisted as one serialized collection.

Invariants:
    - The whole collection lives under ONE storage key; every mutation is a full
      read-modify-write of that slot (one read and/or one write, no retries)
    - load_history returns entries newest first; equal timestamps keep read order
    - Reads are fail-open: a failed read or a non-list value is logged and yields [];
      a malformed record is logged and skipped, the rest of the collection survives
    - Writes are fail-closed: any write failure is logged and raised as StorageWriteError
    - save_entry prepends without dedup; delete_entry removes every id match
    - clear_all writes [] without reading

Design Decisions:
    - No lock by default: two overlapping operations can lose an update. This is the
      documented single-tab behaviour; serialize_writes=True opts into a per-store
      asyncio.Lock held from the read until the write completes
    - save/delete read through load_history, so a failed read followed by a write
      replaces the collection with only the new state (accepted trade-off)
    - Entries are serialized here, not in the adapter: adapters only move JSON values
"""

import asyncio
import logging
from contextlib import nullcontext

from translator.core.domain_types import TranslationEntry
from translator.core.errors import ErrorContext, StorageReadError, StorageWriteError
from translator.core.history_order import (
    find_by_id, prepend_entry, sort_newest_first, without_id,
)
from translator.core.repository_protocols import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "kanadojo-translation-history"


class HistoryStore:
    """Facade over a single storage slot holding the translation history."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_HISTORY_KEY,
        *,
        serialize_writes: bool = False,
    ):
        self._storage = storage
        self._key = key
        self._lock = asyncio.Lock() if serialize_writes else None

    @property
    def key(self) -> str:
        return self._key

    @property
    def serialize_writes(self) -> bool:
        return self._lock is not None

    async def load_history(self) -> list[TranslationEntry]:
        """Load all entries, most recent first. Never raises."""
        try:
            raw = await self._storage.get(self._key)
            if not raw:
                return []
            if not isinstance(raw, list):
                raise StorageReadError(
                    f"expected a list, got {type(raw).__name__}",
                    context=ErrorContext(collection=self._key, operation="load"),
                )
            entries = self._decode_records(raw)
        except Exception as e:
            logger.error(
                f"Failed to load translation history: {e}",
                exc_info=True,
                extra={"collection": self._key, "operation": "load"},
            )
            return []
        return sort_newest_first(entries)

    def _decode_records(self, raw: list) -> list[TranslationEntry]:
        entries = []
        for position, item in enumerate(raw):
            try:
                entries.append(TranslationEntry.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    f"Skipping malformed history record at {position}: {e!r}",
                    extra={"collection": self._key, "operation": "load"},
                )
        return entries

    async def get_entry(self, entry_id: str) -> TranslationEntry | None:
        """Exact-id lookup over a full load. Fail-open like load_history."""
        return find_by_id(await self.load_history(), entry_id)

    async def save_entry(self, entry: TranslationEntry) -> list[TranslationEntry]:
        """Prepend entry to the collection and persist it.

        Returns:
            The collection as written (new entry first).

        Raises:
            StorageWriteError: the write failed; the stored collection is unchanged.
        """
        async with self._guard():
            history = await self.load_history()
            updated = prepend_entry(entry, history)
            await self._write(updated, "save", entry.id)
        logger.info(
            "Translation entry saved",
            extra={
                "collection": self._key, "entry_id": entry.id,
                "entry_count": len(updated),
            },
        )
        return updated

    async def delete_entry(self, entry_id: str) -> list[TranslationEntry]:
        """Remove every entry with entry_id. A missing id still rewrites the slot."""
        async with self._guard():
            history = await self.load_history()
            updated = without_id(history, entry_id)
            await self._write(updated, "delete", entry_id)
        logger.info(
            "Translation entry deleted",
            extra={
                "collection": self._key, "entry_id": entry_id,
                "entry_count": len(updated),
            },
        )
        return updated

    async def clear_all(self) -> None:
        """Overwrite the collection with an empty list. Idempotent."""
        async with self._guard():
            await self._write([], "clear")
        logger.info("Translation history cleared", extra={"collection": self._key})

    def _guard(self):
        return self._lock if self._lock is not None else nullcontext()

    async def _write(
        self,
        entries: list[TranslationEntry],
        operation: str,
        entry_id: str | None = None,
    ) -> None:
        try:
            await self._storage.set(self._key, [e.to_dict() for e in entries])
        except Exception as e:
            logger.error(
                f"Failed to {operation} translation history: {e}",
                exc_info=True,
                extra={
                    "collection": self._key, "entry_id": entry_id,
                    "operation": operation,
                },
            )
            raise StorageWriteError(
                str(e),
                context=ErrorContext(
                    collection=self._key, entry_id=entry_id, operation=operation,
                ),
            ) from e
