"""KanaDojo Translator API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TranslatorError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, History Store and facts cache built once in lifespan, kept on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema created on startup (create_all): one schema version, no migrations
"""

import logging
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from translator.api.error_handlers import register_error_handlers
from translator.api.routes import facts, health, history
from translator.config import Settings, get_settings
from translator.infrastructure.database import DatabaseSessionManager, init_db
from translator.infrastructure.facts_file import load_facts_file
from translator.infrastructure.kv_storage import SqlKeyValueStorage
from translator.infrastructure.observability import setup_logging
from translator.services.facts_cache import SharedFactsCache
from translator.services.history_service import HistoryStore

logger = logging.getLogger(__name__)


def build_history_store(
    db: DatabaseSessionManager, settings: Settings,
) -> HistoryStore:
    storage = SqlKeyValueStorage(
        db, settings.storage_name, settings.storage_store_name,
    )
    return HistoryStore(
        storage,
        settings.history_storage_key,
        serialize_writes=settings.history_serialize_writes,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await db.create_schema()
    app.state.history_store = build_history_store(db, settings)
    app.state.facts_cache = SharedFactsCache(
        partial(load_facts_file, settings.facts_path),
    )
    if settings.history_serialize_writes:
        logger.info("History writes serialized (per-collection lock enabled)")
    logger.info("Translator API started")
    yield
    logger.info("Translator API shutting down")
    await db.dispose()


app = FastAPI(
    title="KanaDojo Translator API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(history.router)
app.include_router(facts.router)

register_error_handlers(app)
