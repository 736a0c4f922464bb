"""History Routes — HTTP surface over the History Store.

Invariants:
    - GET returns the collection newest first; reads never fail (fail-open store)
    - Write failures surface as StorageWriteError → 503 via the global handler
    - Unknown id on GET → 404; unknown id on DELETE → 200 with the unchanged list
    - Routes hold no history logic; every call is one HistoryStore operation

Design Decisions:
    - HistoryStore lives on app.state (built once in lifespan) so its optional
      lock is shared by every request against the collection
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from translator.core.errors import ResourceNotFoundError
from translator.schemas.translation import HistoryResponse, TranslationEntryPayload
from translator.services.history_service import HistoryStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/history", tags=["history"])


def get_history_store(request: Request) -> HistoryStore:
    return request.app.state.history_store


@router.get("", response_model=HistoryResponse)
async def list_history(store: HistoryStore = Depends(get_history_store)):
    """All entries, most recent first."""
    return HistoryResponse.from_entries(await store.load_history())


@router.get("/{entry_id}")
async def get_history_entry(
    entry_id: str, store: HistoryStore = Depends(get_history_store),
):
    entry = await store.get_entry(entry_id)
    if entry is None:
        raise ResourceNotFoundError("TranslationEntry", entry_id)
    return entry.to_dict()


@router.post(
    "", response_model=HistoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_history_entry(
    body: TranslationEntryPayload,
    store: HistoryStore = Depends(get_history_store),
):
    """Prepend an entry. Duplicate ids are accepted as-is."""
    return HistoryResponse.from_entries(await store.save_entry(body.to_entry()))


@router.delete("/{entry_id}", response_model=HistoryResponse)
async def delete_history_entry(
    entry_id: str, store: HistoryStore = Depends(get_history_store),
):
    return HistoryResponse.from_entries(await store.delete_entry(entry_id))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(store: HistoryStore = Depends(get_history_store)):
    await store.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
