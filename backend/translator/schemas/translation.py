"""Translation Schemas — Pydantic models for the history HTTP boundary.

Invariants:
    - Field aliases match the stored camelCase shape (sourceText, translatedText, ...)
    - romanization omitted/None means absent; "" stays present
    - No cross-field check of target == opposite(source): the store is permissive

Design Decisions:
    - Separate from core TranslationEntry: schemas are API contracts, the dataclass
      is the domain type; to_entry and HistoryResponse.from_entries are the only
      crossing points
"""

from pydantic import BaseModel, ConfigDict, Field

from translator.core.domain_types import Language, TranslationEntry


class TranslationEntryPayload(BaseModel):
    """A translation entry as posted by the client."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    source_text: str = Field(alias="sourceText")
    translated_text: str = Field(alias="translatedText")
    source_language: Language = Field(alias="sourceLanguage")
    target_language: Language = Field(alias="targetLanguage")
    romanization: str | None = None
    timestamp: int

    def to_entry(self) -> TranslationEntry:
        return TranslationEntry(
            id=self.id,
            source_text=self.source_text,
            translated_text=self.translated_text,
            source_language=self.source_language,
            target_language=self.target_language,
            timestamp=self.timestamp,
            romanization=self.romanization,
        )


class HistoryResponse(BaseModel):
    """Full collection, newest first."""
    entries: list[dict]

    @classmethod
    def from_entries(cls, entries: list[TranslationEntry]) -> "HistoryResponse":
        return cls(entries=[e.to_dict() for e in entries])


class RandomFactResponse(BaseModel):
    fact: str | None
