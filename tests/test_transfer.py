"""Tests for dictionary import/export files."""

import datetime as dt
import json

import pytest

from tausug_translator.errors import DictionaryFormatError
from tausug_translator.persistence import transfer


def test_plain_document_is_the_mapping():
    assert transfer.build_export_document({"bay": "house"}) == {"bay": "house"}


def test_submission_document_has_metadata():
    now = dt.datetime(2026, 10, 19, 8, 15, tzinfo=dt.timezone.utc)
    doc = transfer.build_export_document({"bay": "house", "kaun": "eat"}, for_submission=True, now=now)
    assert doc["metadata"] == {"submitted": "2026-10-19T08:15:00+00:00", "totalWords": 2}
    assert doc["dictionary"] == {"bay": "house", "kaun": "eat"}


def test_filenames_include_date():
    day = dt.date(2026, 10, 19)
    assert transfer.export_filename(day) == "tausug-dictionary-2026-10-19.json"
    assert transfer.export_filename(day, sorted_keys=True) == "tausug-dictionary-sorted-2026-10-19.json"


def test_write_export_round_trips(tmp_path):
    doc = {"tāu": "person", "bassa'": "read"}
    path = transfer.write_export(tmp_path / "out", doc, "dict.json")
    text = path.read_text(encoding="utf-8")
    assert "tāu" in text
    assert json.loads(text) == doc
    assert transfer.parse_import(text) == doc


def test_parse_import_unwraps_dictionary_key():
    text = json.dumps({"metadata": {"totalWords": 1}, "dictionary": {"bay": "house"}})
    assert transfer.parse_import(text) == {"bay": "house"}


@pytest.mark.parametrize("text", [
    "{oops", "[1, 2]", "\"bay\"", "42", "null",
    "{\"dictionary\": \"oops\"}", "{\"metadata\": {}, \"dictionary\": [\"bay\"]}",
])
def test_parse_import_rejects_non_objects(text):
    with pytest.raises(DictionaryFormatError):
        transfer.parse_import(text)


def test_read_import_missing_file(tmp_path):
    with pytest.raises(DictionaryFormatError):
        transfer.read_import(tmp_path / "nope.json")


def test_source_module(tmp_path):
    path = transfer.write_source_module(tmp_path, {"bay": "house"})
    assert path.name == "dictionary.js"
    content = path.read_text(encoding="utf-8")
    assert content.startswith("// Tausug Dictionary\nconst dictionary = {")
    assert content.endswith("};")
    body = content[len("// Tausug Dictionary\nconst dictionary = "):-1]
    assert json.loads(body) == {"bay": "house"}
