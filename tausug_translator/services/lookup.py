from __future__ import annotations

from tausug_translator.errors import UnsupportedLanguageError
from tausug_translator.models.state import (
    AUTO, ENGLISH, LANGUAGES, TAUSUG, LookupStatus, TranslationResult,
)
from tausug_translator.persistence.dictionary_store import DictionaryStore

# apostrophe is part of Tausug spelling (bassa', dakula') and is never stripped
TRAILING_PUNCTUATION = ".,!?;:"


def strip_trailing_punctuation(token: str) -> str:
    if token and token[-1] in TRAILING_PUNCTUATION:
        return token[:-1]
    return token


def detect_language(store: DictionaryStore, token: str) -> str:
    word = (token or "").strip().lower()
    if word in store:
        return TAUSUG
    if store.has_gloss(word):
        return ENGLISH
    return TAUSUG


def _check_language(code: str, allow_auto: bool = False):
    if code in LANGUAGES or (allow_auto and code == AUTO):
        return
    raise UnsupportedLanguageError(code)


def translate(store: DictionaryStore, token: str, source_language: str, target_language: str) -> TranslationResult:
    _check_language(source_language, allow_auto=True)
    _check_language(target_language)
    if not (token or "").strip():
        return TranslationResult(LookupStatus.EMPTY)

    word = token.strip().lower()
    source = detect_language(store, word) if source_language == AUTO else source_language

    if source == target_language:
        return TranslationResult(LookupStatus.IDENTITY, token, source, target_language)

    if source == TAUSUG:
        gloss = store.get(word)
        if gloss is None:
            gloss = store.get(strip_trailing_punctuation(word))
        if gloss is not None:
            return TranslationResult(LookupStatus.FOUND, gloss, source, target_language)
    else:
        found = store.find_token_for_gloss(word)
        if found is not None:
            return TranslationResult(LookupStatus.FOUND, found, source, target_language)
    return TranslationResult(LookupStatus.NOT_FOUND, "", source, target_language)
