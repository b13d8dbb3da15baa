from __future__ import annotations
from collections.abc import Mapping
from pathlib import Path
import datetime as _dt
import json
import logging
from typing import Optional

from tausug_translator.errors import DictionaryFormatError

logger = logging.getLogger(__name__)

SOURCE_MODULE_NAME = "dictionary.js"


def build_export_document(snapshot: Mapping[str, str], for_submission: bool = False,
                          now: Optional[_dt.datetime] = None):
    if not for_submission:
        return dict(snapshot)
    now = now or _dt.datetime.now(_dt.timezone.utc)
    return {
        "metadata": {"submitted": now.isoformat(), "totalWords": len(snapshot)},
        "dictionary": dict(snapshot),
    }


def export_filename(today: Optional[_dt.date] = None, sorted_keys: bool = False) -> str:
    today = today or _dt.date.today()
    infix = "-sorted" if sorted_keys else ""
    return f"tausug-dictionary{infix}-{today.isoformat()}.json"


def write_export(directory: Path, document, filename: str) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, ensure_ascii=False, indent=2)
    logger.info("Exported dictionary to %s", path)
    return path


def parse_import(text: str) -> dict:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise DictionaryFormatError("Invalid JSON format") from e
    # Einsende-Format: {"metadata": ..., "dictionary": {...}}
    if isinstance(data, dict) and "dictionary" in data:
        data = data["dictionary"]
    if not isinstance(data, dict):
        raise DictionaryFormatError("Invalid JSON format")
    return data


def read_import(path: Path) -> dict:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DictionaryFormatError(f"Could not read {path}") from e
    return parse_import(text)


def render_source_module(snapshot: Mapping[str, str]) -> str:
    body = json.dumps(dict(snapshot), ensure_ascii=False, indent=2)
    return f"// Tausug Dictionary\nconst dictionary = {body};"


def write_source_module(directory: Path, snapshot: Mapping[str, str]) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / SOURCE_MODULE_NAME
    path.write_text(render_source_module(snapshot), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path
