from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TAUSUG_", env_file=".env", extra="ignore")

    # Lokaler Zustand (Ersatz für localStorage)
    DATA_DIR: Path = Path.home() / ".tausug_translator"
    STATE_FILE_NAME: str = "local_storage.json"

    # Community-Daten
    COMMUNITY_DICTIONARY_URL: str = "https://raw.githubusercontent.com/ramy430/tausug-translator/main/json/dictionary.json"
    COMMUNITY_SENTENCES_URL: str = "https://raw.githubusercontent.com/ramy430/tausug-translator/main/json/sentences.json"
    HTTP_TIMEOUT: Optional[float] = None  # None = transport decides

    ISSUES_URL: str = "https://github.com/ramy430/tausug-translator/issues/new"
    SOURCE_URL: str = "https://github.com/ramy430/tausug-translator"

    HISTORY_SIZE: int = 5
    STATUS_DISMISS_SECONDS: float = 3.0

    TTS_ENABLED: bool = True
    TTS_MODEL_FIL: str = "tts_models/tgl/fairseq/vits"
    TTS_MODEL_EN: str = "tts_models/en/vctk/vits"

    LOG_LEVEL: str = "INFO"
    WINDOW_WIDTH: int = 900
    WINDOW_HEIGHT: int = 1000

    @field_validator("HISTORY_SIZE")
    @classmethod
    def _positive_history(cls, value: int) -> int:
        if value < 1:
            raise ValueError("HISTORY_SIZE must be at least 1")
        return value

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def state_file(self) -> Path:
        return Path(self.DATA_DIR).expanduser() / self.STATE_FILE_NAME

    @property
    def tts_models(self) -> dict[str, str]:
        return {"fil-PH": self.TTS_MODEL_FIL, "en-US": self.TTS_MODEL_EN}


@lru_cache
def get_settings() -> Settings:
    return Settings()
