"""Tests for single-token lookup."""

import pytest

from tausug_translator.errors import UnsupportedLanguageError
from tausug_translator.models.state import AUTO, ENGLISH, NOT_FOUND_TEXT, TAUSUG, LookupStatus
from tausug_translator.services.lookup import detect_language, strip_trailing_punctuation, translate


def test_default_scenario(store):
    assert translate(store, "bay", TAUSUG, ENGLISH).text == "house"
    assert translate(store, "house", ENGLISH, TAUSUG).text == "bay"
    missing = translate(store, "xyz", TAUSUG, ENGLISH)
    assert missing.status is LookupStatus.NOT_FOUND
    assert not missing.found
    assert missing.display == NOT_FOUND_TEXT


def test_added_word_is_found(store):
    store.add("Lamisahan", "table")
    assert translate(store, "lamisahan", TAUSUG, ENGLISH).text == "table"
    assert translate(store, "Lamisahan", TAUSUG, ENGLISH).text == "table"


def test_overwrite_changes_lookup(store):
    store.add("Bay", "home")
    assert translate(store, "bay", TAUSUG, ENGLISH).text == "home"


def test_trailing_punctuation_keeps_apostrophe(store):
    result = translate(store, "bassa'.", TAUSUG, ENGLISH)
    assert result.status is LookupStatus.FOUND
    assert result.text == "read"


@pytest.mark.parametrize("token", ["bay.", "bay,", "bay!", "bay?", "bay;", "bay:", "  BAY?  "])
def test_each_trailing_mark_is_stripped(store, token):
    assert translate(store, token, TAUSUG, ENGLISH).text == "house"


def test_only_one_trailing_mark_is_stripped(store):
    assert translate(store, "bay?!", TAUSUG, ENGLISH).status is LookupStatus.NOT_FOUND


def test_strip_helper():
    assert strip_trailing_punctuation("dakula'") == "dakula'"
    assert strip_trailing_punctuation("dakula'!") == "dakula'"
    assert strip_trailing_punctuation("") == ""


def test_empty_input_is_not_an_error(store):
    result = translate(store, "   ", TAUSUG, ENGLISH)
    assert result.status is LookupStatus.EMPTY
    assert result.display == ""


def test_reverse_lookup_is_case_insensitive(store):
    assert translate(store, "House", ENGLISH, TAUSUG).text == "bay"
    assert translate(store, "castle", ENGLISH, TAUSUG).status is LookupStatus.NOT_FOUND


def test_same_language_passes_token_through(store):
    result = translate(store, "Bay", TAUSUG, TAUSUG)
    assert result.status is LookupStatus.IDENTITY
    assert result.found
    assert result.text == "Bay"


class TestAutoDetect:
    def test_tausug_key(self, store):
        assert detect_language(store, "Kaun") == TAUSUG
        result = translate(store, "kaun", AUTO, ENGLISH)
        assert result.text == "eat"
        assert result.source_language == TAUSUG

    def test_english_value(self, store):
        assert detect_language(store, "Drink") == ENGLISH
        result = translate(store, "drink", AUTO, TAUSUG)
        assert result.text == "inum"
        assert result.source_language == ENGLISH

    def test_unknown_defaults_to_tausug(self, store):
        assert detect_language(store, "zzz") == TAUSUG

    def test_key_wins_over_value(self, store):
        store.add("house", "balay")
        assert detect_language(store, "house") == TAUSUG
        assert translate(store, "house", AUTO, ENGLISH).text == "balay"

    def test_detected_language_equal_to_target_is_identity(self, store):
        result = translate(store, "house", AUTO, ENGLISH)
        assert result.status is LookupStatus.IDENTITY
        assert result.text == "house"


def test_unknown_language_rejected(store):
    with pytest.raises(UnsupportedLanguageError):
        translate(store, "bay", "fr", ENGLISH)
    with pytest.raises(UnsupportedLanguageError):
        translate(store, "bay", TAUSUG, AUTO)
