"""Tests for the recent translations tracker."""

import json

import pytest

from tausug_translator.errors import StorageWriteError
from tausug_translator.models.state import ENGLISH, TAUSUG, LookupStatus, TranslationResult
from tausug_translator.persistence.history_store import STORAGE_KEY, RecentHistory
from tausug_translator.persistence.local_storage import LocalStorage


def found(text, source=TAUSUG, target=ENGLISH):
    return TranslationResult(LookupStatus.FOUND, text, source, target)


def make_history(storage, capacity=5):
    return RecentHistory(storage, capacity=capacity, clock=lambda: "09:30")


def test_records_most_recent_first(storage):
    history = make_history(storage)
    history.record("bay", found("house"))
    history.record("kaun", found("eat"))
    assert [r.original for r in history.records] == ["kaun", "bay"]


def test_capacity_evicts_oldest(storage):
    history = make_history(storage)
    for i in range(6):
        history.record(f"word{i}", found(f"gloss{i}"))
    assert len(history) == 5
    assert [r.original for r in history.records] == ["word5", "word4", "word3", "word2", "word1"]


def test_skips_empty_and_not_found(storage):
    history = make_history(storage)
    assert history.record("  ", found("house")) is None
    assert history.record("xyz", TranslationResult(LookupStatus.NOT_FOUND, "", TAUSUG, ENGLISH)) is None
    assert len(history) == 0


def test_identity_results_are_recorded(storage):
    history = make_history(storage)
    rec = history.record("bay", TranslationResult(LookupStatus.IDENTITY, "bay", TAUSUG, TAUSUG))
    assert rec.source_label == "Tausug"
    assert rec.target_label == "Tausug"


def test_truncates_to_fifty_chars(storage):
    history = make_history(storage)
    rec = history.record("a" * 80, found("b" * 70))
    assert len(rec.original) == 50
    assert len(rec.translation) == 50


def test_record_fields(storage):
    history = make_history(storage)
    rec = history.record("drink", found("inum", ENGLISH, TAUSUG))
    assert rec.source_label == "English"
    assert rec.target_label == "Tausug"
    assert rec.timestamp == "09:30"


def test_persisted_and_reloaded(storage):
    history = make_history(storage)
    history.record("bay", found("house"))
    stored = json.loads(storage.get_item(STORAGE_KEY))
    assert stored == [{"original": "bay", "translation": "house", "sourceLang": "Tausug",
                       "targetLang": "English", "timestamp": "09:30"}]

    again = make_history(LocalStorage(storage.path))
    again.hydrate()
    assert [r.translation for r in again.records] == ["house"]


def test_hydrate_drops_malformed_and_caps(storage):
    good = {"original": "bay", "translation": "house", "sourceLang": "Tausug", "targetLang": "English", "timestamp": "10:00"}
    storage.set_item(STORAGE_KEY, json.dumps([good] * 7 + [{"original": 1}, "junk"]))
    history = make_history(storage)
    history.hydrate()
    assert len(history) == 5


def test_hydrate_ignores_non_list(storage):
    storage.set_item(STORAGE_KEY, json.dumps({"not": "a list"}))
    history = make_history(storage)
    history.hydrate()
    assert history.records == []


def test_failed_save_keeps_previous_records(blocked_state_path):
    history = make_history(LocalStorage(blocked_state_path))
    with pytest.raises(StorageWriteError):
        history.record("bay", found("house"))
    assert len(history) == 0
