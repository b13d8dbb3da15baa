from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import httpx

from tausug_translator.errors import ResourceUnavailableError

logger = logging.getLogger(__name__)

HEADERS = {"accept": "application/json"}
SKIPPED_SECTIONS = ("metadata",)


def flatten_categories(document: Any) -> Dict[str, str]:
    """Union of all word categories (nouns, verbs, ...) in one mapping."""
    if not isinstance(document, dict):
        return {}
    combined: Dict[str, str] = {}
    for section, words in document.items():
        if section in SKIPPED_SECTIONS or not isinstance(words, dict):
            continue
        for token, gloss in words.items():
            if isinstance(token, str) and token.strip() and isinstance(gloss, str):
                combined[token.strip().lower()] = gloss
    return combined


class CommunityClient:
    def __init__(self, dictionary_url: str, sentences_url: str,
                 timeout: Optional[float] = None, transport: Optional[httpx.BaseTransport] = None):
        self.dictionary_url = dictionary_url
        self.sentences_url = sentences_url
        self.timeout = timeout
        self._transport = transport

    def _http_get(self, url: str) -> Any:
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport, follow_redirects=True) as client:
                r = client.get(url, headers=HEADERS)
                r.raise_for_status()
                return r.json()
        except httpx.HTTPStatusError as e:
            raise ResourceUnavailableError(url, f"status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ResourceUnavailableError(url, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ResourceUnavailableError(url, "invalid JSON") from e

    def fetch_dictionary(self) -> Dict[str, str]:
        data = self._http_get(self.dictionary_url)
        if not isinstance(data, dict):
            raise ResourceUnavailableError(self.dictionary_url, "document is not an object")
        words = flatten_categories(data)
        logger.info("Fetched %d community words", len(words))
        return words

    def fetch_sentences(self) -> Dict[str, Any]:
        data = self._http_get(self.sentences_url)
        if not isinstance(data, dict):
            raise ResourceUnavailableError(self.sentences_url, "document is not an object")
        sentences = data.get("sentences") or {}
        return sentences if isinstance(sentences, dict) else {}
