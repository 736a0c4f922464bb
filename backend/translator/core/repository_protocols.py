"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Storage is accessed only through KeyValueStorage
    - set() replaces the whole value at a key atomically from the caller's view

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Values are JSON-compatible Python objects; encoding is the adapter's business
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol


class KeyValueStorage(Protocol):
    """Opaque async get/set-by-key store — implemented by infrastructure."""
    async def get(self, key: str) -> Any | None: ...
    async def set(self, key: str, value: Any) -> None: ...


# Zero-arg coroutine factory producing the trivia facts list
FactsLoader = Callable[[], Awaitable[list[str]]]
