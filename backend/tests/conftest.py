"""Root conftest — shared test configuration and database fixture."""

import os

import pytest

# Never touch a developer database from tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from translator.infrastructure.database import DatabaseSessionManager  # noqa: E402


@pytest.fixture
async def test_db_manager():
    """Fresh in-memory SQLite database with the schema created."""
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await manager.dispose()


class FlakyStorage:
    """In-memory KeyValueStorage that counts calls and fails on demand."""

    def __init__(self):
        from translator.infrastructure.kv_storage import InMemoryKeyValueStorage

        self._inner = InMemoryKeyValueStorage("kanadojo", "translation_history")
        self.fail_get = False
        self.fail_set = False
        self.gets = 0
        self.sets = 0

    async def get(self, key):
        self.gets += 1
        if self.fail_get:
            raise ConnectionError("storage unavailable")
        return await self._inner.get(key)

    async def set(self, key, value):
        self.sets += 1
        if self.fail_set:
            raise OSError("quota exceeded")
        await self._inner.set(key, value)

    async def peek(self, key):
        """Read the stored value without counting or failing."""
        return await self._inner.get(key)


@pytest.fixture
def flaky_storage():
    return FlakyStorage()


@pytest.fixture
def make_entry():
    """Factory for TranslationEntry with sensible defaults."""
    from translator.core.domain_types import Language, TranslationEntry

    def _make(entry_id: str = "a", timestamp: int = 100, **overrides):
        fields = {
            "id": entry_id,
            "source_text": "cat",
            "translated_text": "猫",
            "source_language": Language.EN,
            "target_language": Language.JA,
            "timestamp": timestamp,
        }
        fields.update(overrides)
        return TranslationEntry(**fields)

    return _make
