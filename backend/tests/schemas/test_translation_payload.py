"""Translation payload — camelCase aliases and conversion to the domain entry."""

import pytest
from pydantic import ValidationError

from translator.core.domain_types import Language, TranslationEntry
from translator.schemas.translation import HistoryResponse, TranslationEntryPayload

BODY = {
    "id": "a",
    "sourceText": "dog",
    "translatedText": "犬",
    "sourceLanguage": "en",
    "targetLanguage": "ja",
    "timestamp": 200,
}


def test_parses_camelcase_body():
    payload = TranslationEntryPayload.model_validate(BODY)
    assert payload.source_text == "dog"
    assert payload.source_language is Language.EN
    assert payload.romanization is None


def test_to_entry_keeps_fields():
    entry = TranslationEntryPayload.model_validate(
        {**BODY, "romanization": "inu"},
    ).to_entry()
    assert entry == TranslationEntry(
        id="a", source_text="dog", translated_text="犬",
        source_language=Language.EN, target_language=Language.JA,
        timestamp=200, romanization="inu",
    )


def test_empty_id_rejected():
    with pytest.raises(ValidationError):
        TranslationEntryPayload.model_validate({**BODY, "id": ""})


def test_unknown_language_rejected():
    with pytest.raises(ValidationError):
        TranslationEntryPayload.model_validate({**BODY, "targetLanguage": "de"})


def test_history_response_keeps_stored_shape():
    entry = TranslationEntryPayload.model_validate(BODY).to_entry()
    assert HistoryResponse.from_entries([entry]).entries == [BODY]
