"""Key-Value Storage — SQL and in-memory adapters.

Invariants:
    - Missing key reads as None
    - set replaces the whole value; namespaces never see each other's keys
    - SQL failures surface as DatabaseError
    - Overlapping writes to the same key never fail; the last one wins
"""

import asyncio

import pytest

from translator.core.errors import DatabaseError
from translator.infrastructure.database import DatabaseSessionManager
from translator.infrastructure.kv_storage import (
    InMemoryKeyValueStorage, SqlKeyValueStorage,
)
from translator.services.history_service import HistoryStore

VALUE = [{"id": "a", "sourceText": "cat", "translatedText": "猫"}]


@pytest.fixture
def sql_storage(test_db_manager):
    return SqlKeyValueStorage(test_db_manager, "kanadojo", "translation_history")


# -- SQL -----------------------------------------------------------------------

async def test_sql_missing_key_is_none(sql_storage):
    assert await sql_storage.get("nothing") is None


async def test_sql_set_then_get(sql_storage):
    await sql_storage.set("k", VALUE)
    assert await sql_storage.get("k") == VALUE


async def test_sql_set_replaces_value(sql_storage):
    await sql_storage.set("k", VALUE)
    await sql_storage.set("k", [])
    assert await sql_storage.get("k") == []


async def test_sql_value_survives_new_adapter(test_db_manager, sql_storage):
    await sql_storage.set("k", VALUE)
    again = SqlKeyValueStorage(test_db_manager, "kanadojo", "translation_history")
    assert await again.get("k") == VALUE


async def test_sql_namespaces_are_isolated(test_db_manager, sql_storage):
    other = SqlKeyValueStorage(test_db_manager, "kanadojo", "settings")
    await sql_storage.set("k", VALUE)
    assert await other.get("k") is None


async def test_sql_overlapping_first_writes_both_succeed(sql_storage):
    await asyncio.gather(
        sql_storage.set("k", [{"id": "first"}]),
        sql_storage.set("k", [{"id": "second"}]),
    )
    assert await sql_storage.get("k") in ([{"id": "first"}], [{"id": "second"}])


class ReadBarrierStorage(SqlKeyValueStorage):
    """Holds every get() until all callers have read, so writes overlap."""

    def __init__(self, *args, parties):
        super().__init__(*args)
        self._barrier = asyncio.Barrier(parties)

    async def get(self, key):
        value = await super().get(key)
        await self._barrier.wait()
        return value


async def test_overlapping_saves_over_sqlite_file_lose_an_update_quietly(
    tmp_path, make_entry,
):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'history.db'}",
    )
    await manager.create_schema()
    try:
        store = HistoryStore(ReadBarrierStorage(
            manager, "kanadojo", "translation_history", parties=2,
        ))
        results = await asyncio.gather(
            store.save_entry(make_entry("a", 1)),
            store.save_entry(make_entry("b", 2)),
            return_exceptions=True,
        )
        assert not [r for r in results if isinstance(r, BaseException)]
        reader = HistoryStore(
            SqlKeyValueStorage(manager, "kanadojo", "translation_history"),
        )
        assert [e.id for e in await reader.load_history()] in (["a"], ["b"])
    finally:
        await manager.dispose()


async def test_sql_rejects_unsupported_dialect(monkeypatch, test_db_manager):
    monkeypatch.setattr(
        DatabaseSessionManager, "dialect_name", property(lambda self: "mysql"),
    )
    with pytest.raises(ValueError, match="mysql"):
        SqlKeyValueStorage(test_db_manager, "kanadojo", "translation_history")


async def test_sql_failure_maps_to_database_error():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    storage = SqlKeyValueStorage(manager, "kanadojo", "translation_history")
    try:
        # schema never created: "no such table"
        with pytest.raises(DatabaseError) as exc_info:
            await storage.get("k")
        assert exc_info.value.operation == "connect"
    finally:
        await manager.dispose()


async def test_history_scenario_over_sql(sql_storage, make_entry):
    store = HistoryStore(sql_storage)
    await store.save_entry(make_entry("a", 100))
    await store.save_entry(make_entry("b", 200, romanization="inu"))
    loaded = await store.load_history()
    assert [e.id for e in loaded] == ["b", "a"]
    assert loaded[0].romanization == "inu"
    assert loaded[1].romanization is None

    await store.delete_entry("a")
    assert [e.id for e in await store.load_history()] == ["b"]

    await store.clear_all()
    assert await store.load_history() == []


# -- In-memory -----------------------------------------------------------------

async def test_memory_missing_key_is_none():
    assert await InMemoryKeyValueStorage().get("k") is None


async def test_memory_returns_copies():
    storage = InMemoryKeyValueStorage()
    await storage.set("k", VALUE)
    first = await storage.get("k")
    first.append({"id": "mutated"})
    assert await storage.get("k") == VALUE


async def test_memory_rejects_non_json_values():
    storage = InMemoryKeyValueStorage()
    with pytest.raises(TypeError):
        await storage.set("k", object())
    assert await storage.get("k") is None
