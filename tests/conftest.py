"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json

import httpx
import pytest

from tausug_translator.config import Settings
from tausug_translator.persistence.dictionary_store import DictionaryStore
from tausug_translator.persistence.local_storage import LocalStorage
from tausug_translator.services.community import CommunityClient
from tausug_translator.session import TranslatorSession

DICTIONARY_URL = "https://community.test/json/dictionary.json"
SENTENCES_URL = "https://community.test/json/sentences.json"


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def store(storage):
    s = DictionaryStore(storage)
    s.hydrate()
    return s


@pytest.fixture
def community_document():
    return {
        "metadata": {"version": "1.0", "totalWords": 4},
        "nouns": {"bay": "home (community)", "lamisahan": "table"},
        "verbs": {"lumingkud": "sit"},
        "adjectives": {"mahulg": "fragile"},
    }


@pytest.fixture
def sentences_document():
    return {
        "sentences": {
            "bay": [
                {"tausug": "Dakula' in bay nila.", "english": "Their house is big.", "pronunciation": "da-ku-la in bay ni-la"},
                {"tausug": "Awn bay ha higad dagat.", "english": "There is a house by the sea."},
            ],
            "Kaun": [{"tausug": "Kaun na kita.", "english": "Let's eat."}],
        }
    }


def make_transport(routes: dict):
    """MockTransport answering each URL with (status, payload)."""

    def handler(request: httpx.Request) -> httpx.Response:
        status, payload = routes.get(str(request.url), (404, {"error": "missing"}))
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, content=json.dumps(payload).encode("utf-8"),
                              headers={"content-type": "application/json"})

    return httpx.MockTransport(handler)


@pytest.fixture
def client_factory():
    def build(routes: dict) -> CommunityClient:
        return CommunityClient(DICTIONARY_URL, SENTENCES_URL, transport=make_transport(routes))
    return build


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATA_DIR=tmp_path,
        COMMUNITY_DICTIONARY_URL=DICTIONARY_URL,
        COMMUNITY_SENTENCES_URL=SENTENCES_URL,
        TTS_ENABLED=False,
    )


@pytest.fixture
def session_factory(settings, client_factory):
    def build(routes: dict | None = None) -> TranslatorSession:
        s = TranslatorSession(settings, client=client_factory(routes or {}))
        s.hydrate()
        return s
    return build


@pytest.fixture
def blocked_state_path(tmp_path):
    """State file path whose parent is a regular file, so every write fails."""
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("x", encoding="utf-8")
    return blocker / "local_storage.json"
