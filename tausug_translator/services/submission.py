from __future__ import annotations
import logging
import webbrowser
from urllib.parse import quote, urlencode

from tausug_translator.errors import WordInputError
from tausug_translator.models.state import WORD_CATEGORIES

logger = logging.getLogger(__name__)

SUBMISSION_LABEL = "word-submission"


def build_submission_url(issues_url: str, tausug: str, english: str, category: str = "nouns") -> str:
    tausug = (tausug or "").strip()
    english = (english or "").strip()
    if not tausug or not english:
        raise WordInputError("Enter both words")
    if category not in WORD_CATEGORIES:
        category = "other"
    params = {
        "title": f"New Word: {tausug} = {english}",
        "body": f"Tausug: {tausug}\nEnglish: {english}\nCategory: {category}",
        "labels": SUBMISSION_LABEL,
    }
    return f"{issues_url}?{urlencode(params, quote_via=quote)}"


def submit_word(issues_url: str, tausug: str, english: str, category: str = "nouns", opener=webbrowser.open) -> str:
    # no API call: a person finishes the issue in the browser
    url = build_submission_url(issues_url, tausug, english, category)
    opener(url, new=2)
    logger.info("Opened word submission for %r", tausug.strip())
    return url


def open_source_page(url: str, opener=webbrowser.open):
    opener(url, new=2)
