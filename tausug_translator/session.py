from __future__ import annotations
from pathlib import Path
import datetime as _dt
import logging
from typing import Optional

from tausug_translator.config import Settings
from tausug_translator.errors import DictionaryFormatError, ResourceUnavailableError, StorageWriteError
from tausug_translator.models.state import (
    ImportReport, RecentTranslation, SentenceExample, StatusMessage, TranslationResult, DictionaryStats,
)
from tausug_translator.persistence import transfer
from tausug_translator.persistence.dictionary_store import DictionaryStore, normalize_token
from tausug_translator.persistence.history_store import RecentHistory
from tausug_translator.persistence.local_storage import LocalStorage
from tausug_translator.services import lookup
from tausug_translator.services.community import CommunityClient
from tausug_translator.services.sentences import SentenceIndex

logger = logging.getLogger(__name__)

SAVE_FAILED_TEXT = "Error: could not save dictionary"


class TranslatorSession:
    """Owns the dictionary, the recent history and the sentence table.

    The UI keeps exactly one session and calls into it for every action,
    so lookups always see the current store.
    """

    def __init__(self, settings: Settings, storage: Optional[LocalStorage] = None,
                 client: Optional[CommunityClient] = None):
        self.settings = settings
        self.storage = storage or LocalStorage(settings.state_file)
        self.client = client or CommunityClient(
            settings.COMMUNITY_DICTIONARY_URL,
            settings.COMMUNITY_SENTENCES_URL,
            timeout=settings.HTTP_TIMEOUT,
        )
        self.dictionary = DictionaryStore(self.storage)
        self.history = RecentHistory(self.storage, capacity=settings.HISTORY_SIZE)
        self.sentences = SentenceIndex()

    # ---- Startup ----
    def hydrate(self):
        self.dictionary.hydrate()
        self.history.hydrate()

    def load_community(self) -> list[StatusMessage]:
        messages = [self.reload_community_dictionary()]
        try:
            self.sentences.load(self.client.fetch_sentences())
        except ResourceUnavailableError as e:
            logger.warning("Could not load sentences: %s", e)
            self.sentences.load({})
            messages.append(StatusMessage("Example sentences unavailable", "info"))
        return messages

    def reload_community_dictionary(self) -> StatusMessage:
        try:
            words = self.client.fetch_dictionary()
        except ResourceUnavailableError as e:
            logger.warning("Using local dictionary only: %s", e)
            return StatusMessage("Using local dictionary only", "info")
        if not words:
            return StatusMessage("Community dictionary is empty", "info")
        try:
            count = self.dictionary.merge_remote(words)
        except StorageWriteError as e:
            logger.warning("Community words not saved: %s", e)
            return StatusMessage(SAVE_FAILED_TEXT, "error")
        return StatusMessage(f"Loaded {count} words!", "success")

    # ---- Lookup ----
    def translate(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        result = lookup.translate(self.dictionary, text, source_language, target_language)
        try:
            self.history.record(text.strip(), result)
        except StorageWriteError as e:
            # Ergebnis trotzdem anzeigen
            logger.warning("Recent translation not saved: %s", e)
        return result

    def example_sentences(self, token: str) -> list[SentenceExample]:
        return self.sentences.lookup(token)

    def recent(self) -> list[RecentTranslation]:
        return self.history.records

    def stats(self) -> DictionaryStats:
        return self.dictionary.stats()

    # ---- Mutations ----
    def has_word(self, token: str) -> bool:
        return normalize_token(token) in self.dictionary

    def add_word(self, token: str, gloss: str) -> str:
        key = self.dictionary.add(token, gloss)
        logger.info("Added word %r", key)
        return key

    def import_file(self, path: Path) -> ImportReport:
        data = transfer.read_import(path)
        return self.dictionary.import_merge(data)

    def try_import_file(self, path: Path) -> StatusMessage:
        try:
            report = self.import_file(path)
        except DictionaryFormatError as e:
            logger.warning("Import of %s rejected: %s", path, e)
            return StatusMessage("Error: Invalid JSON format", "error")
        except StorageWriteError:
            return StatusMessage(SAVE_FAILED_TEXT, "error")
        return StatusMessage(f"Imported {report.imported} new words!", "success")

    def export_file(self, directory: Path, *, sorted_keys: bool = False, for_submission: bool = False,
                    today: Optional[_dt.date] = None) -> Path:
        snapshot = self.dictionary.export_snapshot(sorted_keys=sorted_keys)
        document = transfer.build_export_document(snapshot, for_submission=for_submission)
        filename = transfer.export_filename(today, sorted_keys=sorted_keys)
        return transfer.write_export(directory, document, filename)

    def export_source_module(self, directory: Path) -> Path:
        return transfer.write_source_module(directory, self.dictionary.export_snapshot())

    def reset(self):
        self.dictionary.reset()
