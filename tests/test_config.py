from pathlib import Path

import pytest
from pydantic import ValidationError

from tausug_translator.config import Settings


def test_defaults(tmp_path):
    settings = Settings(DATA_DIR=tmp_path)
    assert settings.HISTORY_SIZE == 5
    assert settings.HTTP_TIMEOUT is None
    assert settings.STATUS_DISMISS_SECONDS == 3.0
    assert settings.state_file == tmp_path / "local_storage.json"
    assert set(settings.tts_models) == {"fil-PH", "en-US"}


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TAUSUG_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TAUSUG_HISTORY_SIZE", "3")
    monkeypatch.setenv("TAUSUG_LOG_LEVEL", "debug")
    settings = Settings()
    assert Path(settings.DATA_DIR) == tmp_path
    assert settings.HISTORY_SIZE == 3
    assert settings.LOG_LEVEL == "DEBUG"


def test_history_size_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(HISTORY_SIZE=0)
