"""Facts File — reads the trivia facts list from a JSON file.

Invariants:
    - Returns a list[str] or raises FactsUnavailableError (never a partial list)
    - File read happens off the event loop (asyncio.to_thread)
"""

import asyncio
import json
import logging
from pathlib import Path

from translator.core.errors import ErrorContext, FactsUnavailableError

logger = logging.getLogger(__name__)


async def load_facts_file(path: Path) -> list[str]:
    """Load a JSON array of strings from path."""
    try:
        raw = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        facts = json.loads(raw)
    except (OSError, json.JSONDecodeError) as e:
        raise FactsUnavailableError(
            str(e), context=ErrorContext(debug_info={"path": str(path)}),
        ) from e
    if not isinstance(facts, list) or not all(isinstance(f, str) for f in facts):
        raise FactsUnavailableError(
            "expected a JSON array of strings",
            context=ErrorContext(debug_info={"path": str(path)}),
        )
    logger.debug(f"Loaded {len(facts)} facts from {path}")
    return facts
