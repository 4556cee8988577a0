"""Abstract base class for state store backends.

This module defines the interface for the persisted key-value store.
The abstraction hides:
- Storage format and file layout
- When the backing document is loaded
- How a write is made durable
"""

from abc import ABC, abstractmethod
from typing import Any

from ..config import ALLOWED_STORE_KEYS


class StateStore(ABC):
    """Abstract key-value store over the fixed set of state records.

    Single-writer and single-threaded: callers serialize access, the store
    takes no locks. Neither ``get`` nor ``set`` raises for storage
    failures; ``get`` falls back to the supplied default and ``set``
    reports ``False``.
    """

    allowed_keys: tuple[str, ...] = ALLOWED_STORE_KEYS

    def is_allowed_key(self, key: str) -> bool:
        return key in self.allowed_keys

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Read a record.

        Args:
            key: Record key
            default: Value returned when the record is missing or unreadable

        Returns:
            A copy of the stored JSON value, or ``default``
        """

    @abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """Replace a record and persist the whole document.

        Args:
            key: Record key
            value: JSON-serializable value

        Returns:
            True if the write succeeded, False otherwise
        """

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check whether a record is present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
