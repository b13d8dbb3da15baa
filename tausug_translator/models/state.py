from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TypedDict

AUTO = "auto"
TAUSUG = "tsg"
ENGLISH = "en"
LANGUAGES = (TAUSUG, ENGLISH)

LANGUAGE_LABELS = {AUTO: "Auto", TAUSUG: "Tausug", ENGLISH: "English"}
TTS_LOCALES = {TAUSUG: "fil-PH", ENGLISH: "en-US"}

NOT_FOUND_TEXT = "Word not found"
MAX_RECORD_CHARS = 50

WORD_CATEGORIES = ("nouns", "verbs", "adjectives", "pronouns", "numbers", "phrases", "other")

DEFAULT_DICTIONARY: dict[str, str] = {
    "bay": "house",
    "kaun": "eat",
    "inum": "drink",
    "tāu": "person",
    "iskul": "school",
    "tug": "sleep",
    "bassa'": "read",
    "dakula'": "big",
    "asibi'": "small",
    "maisug": "brave",
}


def language_label(code: str) -> str:
    return LANGUAGE_LABELS.get(code, code)


class SentenceExample(TypedDict, total=False):
    tausug: str
    english: str
    pronunciation: str


class LookupStatus(str, Enum):
    FOUND = "found"
    IDENTITY = "identity"
    NOT_FOUND = "not_found"
    EMPTY = "empty"


@dataclass(slots=True, frozen=True)
class TranslationResult:
    status: LookupStatus
    text: str = ""
    source_language: Optional[str] = None
    target_language: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status in (LookupStatus.FOUND, LookupStatus.IDENTITY)

    @property
    def display(self) -> str:
        if self.status is LookupStatus.NOT_FOUND:
            return NOT_FOUND_TEXT
        return self.text


@dataclass(slots=True)
class RecentTranslation:
    original: str
    translation: str
    source_label: str
    target_label: str
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "translation": self.translation,
            "sourceLang": self.source_label,
            "targetLang": self.target_label,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data) -> Optional["RecentTranslation"]:
        if not isinstance(data, dict):
            return None
        values = [data.get(k) for k in ("original", "translation", "sourceLang", "targetLang", "timestamp")]
        if not all(isinstance(v, str) for v in values):
            return None
        original, translation, src, tgt, ts = values
        return cls(original[:MAX_RECORD_CHARS], translation[:MAX_RECORD_CHARS], src, tgt, ts)


@dataclass(slots=True, frozen=True)
class StatusMessage:
    text: str
    level: str = "info"  # info | success | error

    @property
    def sticky(self) -> bool:
        # Fehler bleiben stehen, bis die nächste Meldung kommt
        return self.level == "error"


@dataclass(slots=True, frozen=True)
class DictionaryStats:
    total: int
    community: int
    user: int


@dataclass(slots=True, frozen=True)
class ImportReport:
    imported: int
    skipped: int = 0


@dataclass(slots=True)
class AppState:
    """UI-side state that is not persisted."""
    source_language: str = AUTO
    target_language: str = ENGLISH
    ready: bool = False
