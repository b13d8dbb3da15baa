"""Tests for the community resource client."""

import pytest

from conftest import DICTIONARY_URL, SENTENCES_URL
from tausug_translator.errors import ResourceUnavailableError
from tausug_translator.services.community import flatten_categories


def test_flatten_unions_all_categories_except_metadata():
    doc = {
        "metadata": {"version": "1"},
        "nouns": {"bay": "house"},
        "verbs": {"Kaun": "eat"},
        "numbers": {"isa": "one"},
        "slang": {"ayaw": "don't"},
        "notes": "free text",
    }
    assert flatten_categories(doc) == {"bay": "house", "kaun": "eat", "isa": "one", "ayaw": "don't"}


def test_flatten_later_category_wins():
    assert flatten_categories({"nouns": {"tug": "sleep (n)"}, "verbs": {"tug": "sleep"}}) == {"tug": "sleep"}


def test_flatten_skips_bad_entries():
    assert flatten_categories({"nouns": {"": "blank", "bay": 3, "kursi": "chair"}}) == {"kursi": "chair"}
    assert flatten_categories(["not", "a", "dict"]) == {}


def test_fetch_dictionary(client_factory, community_document):
    client = client_factory({DICTIONARY_URL: (200, community_document)})
    words = client.fetch_dictionary()
    assert words == {"bay": "home (community)", "lamisahan": "table", "lumingkud": "sit", "mahulg": "fragile"}


def test_fetch_sentences(client_factory, sentences_document):
    client = client_factory({SENTENCES_URL: (200, sentences_document)})
    assert set(client.fetch_sentences()) == {"bay", "Kaun"}


def test_fetch_sentences_without_key(client_factory):
    client = client_factory({SENTENCES_URL: (200, {"other": 1})})
    assert client.fetch_sentences() == {}


@pytest.mark.parametrize("route", [(404, {"error": "missing"}), (500, {"error": "boom"}), (200, "<html>"), (200, [1, 2])])
def test_failures_raise_resource_unavailable(client_factory, route):
    client = client_factory({DICTIONARY_URL: route})
    with pytest.raises(ResourceUnavailableError) as exc:
        client.fetch_dictionary()
    assert exc.value.url == DICTIONARY_URL
    assert exc.value.code == "resource_unavailable"


def test_transport_error_raises_resource_unavailable():
    import httpx
    from tausug_translator.services.community import CommunityClient

    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    client = CommunityClient(DICTIONARY_URL, SENTENCES_URL, transport=httpx.MockTransport(handler))
    with pytest.raises(ResourceUnavailableError):
        client.fetch_sentences()
