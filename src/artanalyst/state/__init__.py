"""Persisted application state.

Schema-validated key-value store, bounded chat history and debounced
window-geometry persistence.
"""

from .base import StateStore
from .debounce import DebounceState, WriteDebouncer
from .factory import create_state_store
from .history import BoundedHistoryLog
from .models import AiStatus, AnalysisResult, ChatMessage, DisplayArea, Settings, WindowState
from .validation import (
    RecordKind,
    ValidationResult,
    validate,
    validate_chat_history,
    validate_settings,
    validate_window_state,
)
from .window import WindowHandle, WindowStateTracker, load_window_state, resolve_window_state

__all__ = [
    "AiStatus",
    "AnalysisResult",
    "BoundedHistoryLog",
    "ChatMessage",
    "DebounceState",
    "DisplayArea",
    "RecordKind",
    "Settings",
    "StateStore",
    "ValidationResult",
    "WindowHandle",
    "WindowState",
    "WindowStateTracker",
    "WriteDebouncer",
    "create_state_store",
    "load_window_state",
    "resolve_window_state",
    "validate",
    "validate_chat_history",
    "validate_settings",
    "validate_window_state",
]
