"""Domain Types — language tags and the persisted translation entry.

Invariants:
    - Language has exactly two members; get_opposite_language is an involution
    - TranslationEntry is immutable; "updating" means delete + save
    - romanization None (absent) is distinct from "" (present, empty)
    - to_dict omits the romanization key when absent; from_dict restores None

Design Decisions:
    - str Enum for Language: serializes to JSON without custom encoders
    - Frozen dataclass over ORM/Pydantic: core stays free of IO and framework types
    - camelCase keys in the serialized form: stored collections written by the
      browser client stay readable (same wire shape)
    - No validation of target == opposite(source): caller-side contract
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

EntryId = NewType("EntryId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Language(str, Enum):
    """The two languages a translation moves between."""
    EN = "en"
    JA = "ja"


_OPPOSITES: dict[Language, Language] = {
    Language.EN: Language.JA,
    Language.JA: Language.EN,
}


def get_opposite_language(lang: Language | str) -> Language:
    """Return the other language of the pair. Raises ValueError on unknown tags."""
    return _OPPOSITES[Language(lang)]


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class TranslationEntry:
    """One persisted translation attempt."""
    id: str
    source_text: str
    translated_text: str
    source_language: Language
    target_language: Language
    timestamp: int
    romanization: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape. Pure, no IO."""
        data: dict[str, Any] = {
            "id": self.id,
            "sourceText": self.source_text,
            "translatedText": self.translated_text,
            "sourceLanguage": Language(self.source_language).value,
            "targetLanguage": Language(self.target_language).value,
            "timestamp": self.timestamp,
        }
        if self.romanization is not None:
            data["romanization"] = self.romanization
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranslationEntry":
        """Rebuild an entry from its stored shape.

        Raises KeyError / TypeError / ValueError on malformed records. The
        read path skips such records.
        """
        return cls(
            id=data["id"],
            source_text=data["sourceText"],
            translated_text=data["translatedText"],
            source_language=Language(data["sourceLanguage"]),
            target_language=Language(data["targetLanguage"]),
            timestamp=int(data["timestamp"]),
            romanization=data.get("romanization"),
        )
