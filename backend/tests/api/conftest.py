"""API test fixtures — FastAPI app over an in-memory SQLite History Store.

Invariants:
    - Every test gets a fresh in-memory database with the schema created
    - app.state is populated directly (httpx ASGITransport does not run lifespan)
    - db_manager patched so the readiness probe sees the test database
"""

from functools import partial

import pytest
from httpx import ASGITransport, AsyncClient

import translator.infrastructure.database as db_module
from translator.config import Settings
from translator.infrastructure.facts_file import load_facts_file
from translator.main import app, build_history_store
from translator.services.facts_cache import SharedFactsCache


@pytest.fixture
async def client(test_db_manager):
    settings = Settings()
    app.state.history_store = build_history_store(test_db_manager, settings)
    app.state.facts_cache = SharedFactsCache(
        partial(load_facts_file, settings.facts_path),
    )
    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager
