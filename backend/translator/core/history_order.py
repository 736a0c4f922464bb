"""History Ordering — pure list transforms behind every History Store operation.

Invariants:
    - sort_newest_first orders by timestamp descending; equal timestamps keep
      their input order (stable sort, no secondary key)
    - prepend_entry never deduplicates; duplicate ids are the caller's concern
    - without_id removes every match, not just the first
    - No function mutates its input

Design Decisions:
    - Kept out of the service so ordering is testable without storage
"""

from collections.abc import Iterable

from translator.core.domain_types import TranslationEntry


def sort_newest_first(
    entries: Iterable[TranslationEntry],
) -> list[TranslationEntry]:
    """Most recent first. Ties preserve read order."""
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)


def prepend_entry(
    entry: TranslationEntry, entries: list[TranslationEntry],
) -> list[TranslationEntry]:
    return [entry, *entries]


def without_id(
    entries: list[TranslationEntry], entry_id: str,
) -> list[TranslationEntry]:
    return [e for e in entries if e.id != entry_id]


def find_by_id(
    entries: list[TranslationEntry], entry_id: str,
) -> TranslationEntry | None:
    """First entry with the given id, or None."""
    return next((e for e in entries if e.id == entry_id), None)
