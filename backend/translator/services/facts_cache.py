"""Shared Facts Cache — process-wide memoized facts with in-flight de-duplication.

Invariants:
    - At most one load runs at a time; concurrent callers await the same future
    - After a successful load every caller gets the cached list, no further loads
    - A failed load is not cached: the in-flight slot is cleared and the next
      caller starts a fresh load; every waiter of the failed load sees the error
    - An empty list is a valid cached value

Design Decisions:
    - asyncio.shield around the shared future: one cancelled caller must not
      cancel the load for everyone else
"""

import asyncio
import logging
import random

from translator.core.repository_protocols import FactsLoader

logger = logging.getLogger(__name__)


class SharedFactsCache:
    """Lazily populated, shared cell holding the facts list."""

    def __init__(self, loader: FactsLoader):
        self._loader = loader
        self._facts: list[str] | None = None
        self._inflight: asyncio.Future[list[str]] | None = None

    @property
    def cached(self) -> list[str] | None:
        return self._facts

    async def get(self) -> list[str]:
        if self._facts is not None:
            return self._facts
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._populate())
        return await asyncio.shield(self._inflight)

    def reset(self) -> None:
        """Forget the cached list. An in-flight load is left to finish."""
        self._facts = None

    async def _populate(self) -> list[str]:
        try:
            facts = await self._loader()
            self._facts = facts
            logger.info(f"Facts cache populated ({len(facts)} facts)")
            return facts
        finally:
            self._inflight = None


def pick_random_fact(
    facts: list[str], rng: random.Random | None = None,
) -> str | None:
    """Uniformly pick one fact, or None when there are none."""
    if not facts:
        return None
    return (rng or random).choice(facts)  # nosec B311
