from __future__ import annotations
from collections.abc import Mapping
import logging
from typing import Iterator, Optional

from tausug_translator.errors import DictionaryFormatError, WordInputError
from tausug_translator.models.state import DEFAULT_DICTIONARY, DictionaryStats, ImportReport
from tausug_translator.persistence.local_storage import LocalStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "tausugDictionary"


def normalize_token(token) -> str:
    return (token or "").strip().lower() if isinstance(token, str) else ""


def clean_mapping(data: Mapping) -> tuple[dict[str, str], int]:
    """Lowercase keys and drop entries without a usable key or gloss."""
    cleaned, skipped = {}, 0
    for k, v in data.items():
        key = normalize_token(k)
        if not key or not isinstance(v, str):
            skipped += 1
            continue
        cleaned[key] = v
    return cleaned, skipped


class DictionaryStore:
    """Token -> gloss mapping; every mutation is written back immediately."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._entries: dict[str, str] = {}
        self._community_keys: set[str] = set()

    # ---- Load/Save ----
    def hydrate(self):
        data = self.storage.get_json(STORAGE_KEY)
        if isinstance(data, dict):
            entries, skipped = clean_mapping(data)
            if skipped:
                logger.warning("Dropped %d malformed stored entries", skipped)
            self._entries = entries
        else:
            if data is not None:
                logger.warning("Stored dictionary is not an object, using defaults")
            self._entries = dict(DEFAULT_DICTIONARY)
        logger.info("Dictionary hydrated with %d words", len(self._entries))

    def _commit(self, entries: dict[str, str]):
        # erst speichern, dann übernehmen: Speicher und Datei bleiben gleich
        self.storage.set_json(STORAGE_KEY, entries)
        self._entries = entries

    # ---- Mutations ----
    def merge_remote(self, remote: Mapping[str, str]) -> int:
        candidate, _ = clean_mapping(remote)
        added = [k for k in candidate if k not in self._entries]
        # lokale Einträge haben Vorrang
        merged = {**candidate, **self._entries}
        if added:
            self._commit(merged)
        else:
            self._entries = merged
        self._community_keys = set(candidate)
        logger.info("Merged community dictionary: %d words, %d new", len(candidate), len(added))
        return len(candidate)

    def add(self, token: str, gloss: str) -> str:
        key = normalize_token(token)
        if not key or not isinstance(gloss, str) or not gloss.strip():
            raise WordInputError("Both the word and its meaning are required.")
        self._commit({**self._entries, key: gloss})
        return key

    def import_merge(self, candidate) -> ImportReport:
        if not isinstance(candidate, Mapping):
            raise DictionaryFormatError("Imported data is not a word mapping.")
        cleaned, skipped = clean_mapping(candidate)
        self._commit({**self._entries, **cleaned})
        logger.info("Imported %d words (%d skipped)", len(cleaned), skipped)
        return ImportReport(imported=len(cleaned), skipped=skipped)

    def reset(self):
        self._commit(dict(DEFAULT_DICTIONARY))
        logger.info("Dictionary reset to %d default words", len(self._entries))

    # ---- Reads ----
    def export_snapshot(self, sorted_keys: bool = False) -> dict[str, str]:
        if sorted_keys:
            return {k: self._entries[k] for k in sorted(self._entries)}
        return dict(self._entries)

    def get(self, token: str) -> Optional[str]:
        return self._entries.get(token)

    def __contains__(self, token) -> bool:
        return token in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._entries.items())

    def has_gloss(self, text: str) -> bool:
        return self.find_token_for_gloss(text) is not None

    def find_token_for_gloss(self, text: str) -> Optional[str]:
        needle = (text or "").lower()
        for token, gloss in self._entries.items():
            if gloss.lower() == needle:
                return token
        return None

    def stats(self) -> DictionaryStats:
        total = len(self._entries)
        community = sum(1 for k in self._entries if k in self._community_keys)
        return DictionaryStats(total=total, community=community, user=total - community)
