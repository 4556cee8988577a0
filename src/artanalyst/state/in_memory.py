"""In-memory state store backend.

Dict-based storage for session-only state. Data is lost when the
application exits. Values still go through a JSON round trip so that
non-serializable values fail here exactly as they would on disk.
"""

import json
import logging
from typing import Any

from .base import StateStore

logger = logging.getLogger(__name__)


class InMemoryStateStore(StateStore):
    """In-memory state store (session-only).

    Suitable for tests and for running without a writable data directory.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._records: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._records[key] = json.dumps(value)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._records:
            return default
        return json.loads(self._records[key])

    def set(self, key: str, value: Any) -> bool:
        if not self.is_allowed_key(key):
            logger.error("Refusing write of unknown state key %r", key)
            return False
        try:
            self._records[key] = json.dumps(value)
        except (TypeError, ValueError) as exc:
            logger.error("Failed to serialize %r: %s", key, exc)
            return False
        return True

    def has(self, key: str) -> bool:
        return key in self._records

    @property
    def backend_type(self) -> str:
        return "memory"
