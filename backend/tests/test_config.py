"""Settings — defaults and URL normalization."""

from translator.config import Settings


def test_postgres_url_gets_asyncpg_driver():
    s = Settings(database_url="postgresql://u:p@db:5432/kanadojo")
    assert s.database_url == "postgresql+asyncpg://u:p@db:5432/kanadojo"


def test_sqlite_url_unchanged():
    s = Settings(database_url="sqlite+aiosqlite:///./x.db")
    assert s.database_url == "sqlite+aiosqlite:///./x.db"


def test_history_defaults():
    s = Settings()
    assert s.storage_name == "kanadojo"
    assert s.storage_store_name == "translation_history"
    assert s.history_storage_key == "kanadojo-translation-history"
    assert s.history_serialize_writes is False


def test_serialize_writes_from_env(monkeypatch):
    monkeypatch.setenv("HISTORY_SERIALIZE_WRITES", "true")
    assert Settings().history_serialize_writes is True
