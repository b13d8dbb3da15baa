from __future__ import annotations
import datetime as _dt
import logging
from typing import Callable, Optional

from tausug_translator.models.state import (
    MAX_RECORD_CHARS, RecentTranslation, TranslationResult, language_label,
)
from tausug_translator.persistence.local_storage import LocalStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "recentTranslations"


def _clock_time() -> str:
    return _dt.datetime.now().strftime("%H:%M")


class RecentHistory:
    """Most-recent-first list of successful translations."""

    def __init__(self, storage: LocalStorage, capacity: int = 5, clock: Callable[[], str] = _clock_time):
        self.storage = storage
        self.capacity = capacity
        self._clock = clock
        self._records: list[RecentTranslation] = []

    def hydrate(self):
        raw = self.storage.get_json(STORAGE_KEY, [])
        records = []
        if isinstance(raw, list):
            for item in raw:
                rec = RecentTranslation.from_dict(item)
                if rec is not None:
                    records.append(rec)
        self._records = records[: self.capacity]

    def record(self, original: str, result: TranslationResult) -> Optional[RecentTranslation]:
        if not (original or "").strip() or not result.found:
            return None
        rec = RecentTranslation(
            original=original[:MAX_RECORD_CHARS],
            translation=result.text[:MAX_RECORD_CHARS],
            source_label=language_label(result.source_language),
            target_label=language_label(result.target_language),
            timestamp=self._clock(),
        )
        records = [rec, *self._records][: self.capacity]
        self.storage.set_json(STORAGE_KEY, [r.to_dict() for r in records])
        self._records = records
        return rec

    @property
    def records(self) -> list[RecentTranslation]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
