"""Schema validation for persisted records.

``validate`` never raises for bad data: it returns a ``ValidationResult``
holding either the typed value or a ``ValidationError``. Whether a failure
becomes a default (reads) or a refused write is decided by the caller; the
``validate_*`` helpers below implement the read-side defaults.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Generic, TypeVar

from pydantic import Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..config import MAX_CHAT_HISTORY_SIZE
from ..errors import ValidationError
from .models import ChatMessage, Settings, WindowState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordKind(str, Enum):
    """Named record shapes known to the validator."""

    CHAT_MESSAGE = "chatMessage"
    CHAT_HISTORY = "chatHistory"
    WINDOW_STATE = "windowState"
    SETTINGS = "settings"


ChatHistory = Annotated[list[ChatMessage], Field(max_length=MAX_CHAT_HISTORY_SIZE)]

_ADAPTERS: dict[RecordKind, TypeAdapter] = {
    RecordKind.CHAT_MESSAGE: TypeAdapter(ChatMessage),
    RecordKind.CHAT_HISTORY: TypeAdapter(ChatHistory),
    RecordKind.WINDOW_STATE: TypeAdapter(WindowState),
    RecordKind.SETTINGS: TypeAdapter(Settings),
}


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Either a validated value or the reason validation failed."""

    value: T | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        """Return the value, or ``default`` when validation failed."""
        return self.value if self.ok else default


def _describe(exc: PydanticValidationError) -> list[str]:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        problems.append(f"{location}: {error['msg']}")
    return problems


def validate(kind: RecordKind | str, raw: Any) -> ValidationResult:
    """Validate a decoded value against the schema for ``kind``.

    Args:
        kind: Record shape to validate against
        raw: Decoded JSON value (or an already-typed model)

    Returns:
        ValidationResult with the typed value on success
    """
    kind = RecordKind(kind)
    try:
        value = _ADAPTERS[kind].validate_python(raw, strict=True)
    except PydanticValidationError as exc:
        return ValidationResult(error=ValidationError(kind.value, _describe(exc)))
    return ValidationResult(value=value)


def validate_chat_history(raw: Any) -> list[ChatMessage]:
    """Lenient read: invalid history becomes an empty list."""
    if raw is None:
        return []
    result = validate(RecordKind.CHAT_HISTORY, raw)
    if not result.ok:
        logger.warning("Chat history validation failed: %s", result.error)
        return []
    return list(result.value)


def validate_window_state(raw: Any) -> WindowState | None:
    """Lenient read: invalid window state becomes ``None``."""
    if raw is None:
        return None
    result = validate(RecordKind.WINDOW_STATE, raw)
    if not result.ok:
        logger.warning("Window state validation failed: %s", result.error)
    return result.value


def validate_settings(raw: Any) -> Settings:
    """Lenient read: invalid settings become empty settings."""
    if raw is None:
        return Settings()
    result = validate(RecordKind.SETTINGS, raw)
    if not result.ok:
        logger.warning("Settings validation failed: %s", result.error)
        return Settings()
    return result.value
