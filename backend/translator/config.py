"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache); single instance per process
    - Storage namespace is (storage_name, storage_store_name) + history_storage_key

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SQLite by default: single-user, client-resident store works out of the box
    - history_serialize_writes defaults to False: concurrent writes keep the
      lost-update behaviour unless locking is switched on explicitly
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_FACTS_PATH = Path(__file__).parent / "data" / "facts.json"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./kanadojo.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # History storage namespace
    storage_name: str = "kanadojo"
    storage_store_name: str = "translation_history"
    history_storage_key: str = "kanadojo-translation-history"
    history_serialize_writes: bool = False

    # Facts
    facts_path: Path = _DEFAULT_FACTS_PATH

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
