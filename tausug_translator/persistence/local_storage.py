from __future__ import annotations
from pathlib import Path
import json
import logging
import os
import threading
from typing import Optional

from tausug_translator.errors import StorageWriteError

logger = logging.getLogger(__name__)

_MISSING = object()


class LocalStorage:
    """String key/value store backed by one JSON file.

    Every write replaces the whole file (tmp file + os.replace). A failed
    write leaves the in-memory items as they were before the call.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._items: dict[str, str] = {}
        self._loaded = False
        # UI thread and loader threads both write
        self._lock = threading.RLock()

    def _load(self):
        self._loaded = True
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: not an object", self.path)
            return
        self._items = {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            if not self._loaded:
                self._load()
            return self._items.get(key)

    def set_item(self, key: str, value: str):
        with self._lock:
            if not self._loaded:
                self._load()
            previous = self._items.get(key, _MISSING)
            self._items[key] = value
            try:
                self._flush()
            except StorageWriteError:
                if previous is _MISSING:
                    del self._items[key]
                else:
                    self._items[key] = previous
                raise

    def remove_item(self, key: str):
        with self._lock:
            if not self._loaded:
                self._load()
            previous = self._items.pop(key, None)
            if previous is None:
                return
            try:
                self._flush()
            except StorageWriteError:
                self._items[key] = previous
                raise

    def get_json(self, key: str, default=None):
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Stored value for %r is not valid JSON", key)
            return default

    def set_json(self, key: str, value):
        self.set_item(key, json.dumps(value, ensure_ascii=False, separators=(",", ":")))

    def _flush(self):
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._items, f, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Could not write state file %s: %s", self.path, e)
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove %s", tmp_path, exc_info=True)
            raise StorageWriteError(self.path, e.strerror or str(e)) from e
