"""Facts Routes — trivia facts for the translator page.

Invariants:
    - GET /facts returns the full list or 500 {"error": "Failed to load facts"}
    - GET /facts/random never fails: a load error yields {"fact": null}
    - Both read through the shared cache (one file read per process on success)
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from translator.schemas.translation import RandomFactResponse
from translator.services.facts_cache import SharedFactsCache, pick_random_fact

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/facts", tags=["facts"])


def get_facts_cache(request: Request) -> SharedFactsCache:
    return request.app.state.facts_cache


@router.get("")
async def list_facts(cache: SharedFactsCache = Depends(get_facts_cache)):
    try:
        return await cache.get()
    except Exception as e:
        logger.error(f"Failed to load facts: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to load facts"},
        )


@router.get("/random", response_model=RandomFactResponse)
async def random_fact(cache: SharedFactsCache = Depends(get_facts_cache)):
    """One random fact, or null when none can be loaded."""
    try:
        facts = await cache.get()
    except Exception as e:
        logger.error(f"Failed to load facts: {e}", exc_info=True)
        facts = []
    return RandomFactResponse(fact=pick_random_fact(facts))
