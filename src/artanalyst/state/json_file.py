"""JSON file state store backend.

The whole state lives in one JSON object on disk. It is read lazily on
first access and rewritten wholesale on every ``set`` through a temporary
file that replaces the original, so a failed write never leaves a
half-written document behind.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from .base import StateStore

logger = logging.getLogger(__name__)


class JsonFileStateStore(StateStore):
    """State store persisted as a single JSON document."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backend_type(self) -> str:
        return "json"

    def _load(self) -> dict[str, Any]:
        """Return the cached document, reading the file on first use.

        Raises:
            OSError: If the file exists but cannot be read
        """
        if self._data is not None:
            return self._data

        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._data = {}
            return self._data
        except UnicodeDecodeError as exc:
            logger.error("State file %s is not valid UTF-8, starting empty: %s", self._path, exc)
            text = "{}"

        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("State file %s is not valid JSON, starting empty: %s", self._path, exc)
            document = {}

        if not isinstance(document, dict):
            logger.error(
                "State file %s holds %s instead of an object, starting empty",
                self._path,
                type(document).__name__,
            )
            document = {}

        self._data = document
        return self._data

    def _write(self, document: dict[str, Any]) -> None:
        payload = json.dumps(document, ensure_ascii=False, indent=2)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        if not self.is_allowed_key(key):
            logger.error("Refusing read of unknown state key %r", key)
            return default

        try:
            document = self._load()
        except OSError as exc:
            logger.error("Failed to read state file %s: %s", self._path, exc)
            return default

        if key not in document:
            return default
        return copy.deepcopy(document[key])

    def set(self, key: str, value: Any) -> bool:
        if not self.is_allowed_key(key):
            logger.error("Refusing write of unknown state key %r", key)
            return False

        try:
            document = dict(self._load())
            document[key] = copy.deepcopy(value)
            self._write(document)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to persist %r to %s: %s", key, self._path, exc)
            return False

        self._data = document
        return True

    def has(self, key: str) -> bool:
        try:
            return key in self._load()
        except OSError as exc:
            logger.error("Failed to read state file %s: %s", self._path, exc)
            return False
