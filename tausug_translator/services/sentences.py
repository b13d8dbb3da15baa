from __future__ import annotations
import logging
from typing import Optional

from tausug_translator.models.state import SentenceExample

logger = logging.getLogger(__name__)


def _clean_example(item) -> Optional[SentenceExample]:
    if not isinstance(item, dict):
        return None
    tausug = item.get("tausug")
    english = item.get("english")
    if not isinstance(tausug, str) or not isinstance(english, str):
        return None
    example: SentenceExample = {"tausug": tausug, "english": english}
    pron = item.get("pronunciation")
    if isinstance(pron, str) and pron.strip():
        example["pronunciation"] = pron
    return example


class SentenceIndex:
    """Read-only token -> example sentences table."""

    def __init__(self, sentences: Optional[dict] = None):
        self._table: dict[str, list[SentenceExample]] = {}
        if sentences:
            self.load(sentences)

    def load(self, sentences):
        table = {}
        if isinstance(sentences, dict):
            for token, items in sentences.items():
                if not isinstance(token, str) or not isinstance(items, list):
                    continue
                examples = [ex for ex in (_clean_example(i) for i in items) if ex]
                if examples:
                    table.setdefault(token.strip().lower(), []).extend(examples)
        self._table = table
        logger.info("Loaded sentences for %d words", len(table))

    def lookup(self, token: str) -> list[SentenceExample]:
        return list(self._table.get((token or "").strip().lower(), []))

    def __len__(self) -> int:
        return len(self._table)
