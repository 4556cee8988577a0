"""Bounded chat history log.

Hidden design decisions:
- History is a single ``chatHistory`` record, not one record per message
- Every mutation re-reads and re-validates the stored record first
- Overflow evicts from the front so the newest messages survive
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..config import MAX_CHAT_HISTORY_SIZE
from .base import StateStore
from .models import ChatMessage, ChatRole
from .validation import RecordKind, validate, validate_chat_history

logger = logging.getLogger(__name__)

HISTORY_KEY = "chatHistory"


class BoundedHistoryLog:
    """Ordered, size-capped sequence of chat messages with FIFO eviction."""

    def __init__(self, store: StateStore, capacity: int = MAX_CHAT_HISTORY_SIZE):
        if not 1 <= capacity <= MAX_CHAT_HISTORY_SIZE:
            raise ValueError(f"capacity must be between 1 and {MAX_CHAT_HISTORY_SIZE}")
        self._store = store
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self.list())

    def last(self, role: ChatRole | None = None) -> ChatMessage | None:
        """Return the most recent message, optionally restricted to a role."""
        for message in reversed(self.list()):
            if role is None or message.role == role:
                return message
        return None

    def append(self, message: ChatMessage | Mapping[str, Any]) -> bool:
        """Validate and append a message, evicting the oldest on overflow.

        Args:
            message: Message model or raw mapping from the caller

        Returns:
            True if the message was persisted, False if it was invalid or
            the write failed
        """
        result = validate(RecordKind.CHAT_MESSAGE, message)
        if not result.ok:
            logger.error("Message validation failed: %s", result.error)
            return False

        history = self.list()
        history.append(result.value)

        overflow = max(0, len(history) - self._capacity)
        if overflow:
            del history[:overflow]
            logger.debug("Evicted %d message(s) from chat history", overflow)

        return self._persist(history)

    def delete(self, message_id: str) -> bool:
        """Remove every message with ``message_id``. Missing ids are a no-op."""
        history = self.list()
        remaining = [message for message in history if message.id != message_id]
        return self._persist(remaining)

    def clear(self) -> bool:
        return self._persist([])

    def _persist(self, history: list[ChatMessage]) -> bool:
        return self._store.set(HISTORY_KEY, [message.to_record() for message in history])

    def list(self) -> list[ChatMessage]:
        """Return the current history, or an empty list if it is unreadable."""
        return validate_chat_history(self._store.get(HISTORY_KEY, []))
