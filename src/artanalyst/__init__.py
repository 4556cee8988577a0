"""
artanalyst: persisted application state for a desktop image-analysis chat client.

Schema-validated state store, bounded chat history, debounced window
geometry and a uniform error envelope for every UI-facing operation.
"""

__version__ = "0.1.0"

from .boundary import AppContext, BoundaryDispatcher, Channel
from .config import AppConfig
from .errors import (
    ApiKeyMissingError,
    ArtAnalystError,
    BoundaryError,
    ImageAnalysisError,
    StorageError,
    ValidationError,
    WindowControlError,
)
from .state import BoundedHistoryLog, ChatMessage, StateStore, WindowState, create_state_store

__all__ = [
    "ApiKeyMissingError",
    "AppConfig",
    "AppContext",
    "ArtAnalystError",
    "BoundaryDispatcher",
    "BoundaryError",
    "BoundedHistoryLog",
    "Channel",
    "ChatMessage",
    "ImageAnalysisError",
    "StateStore",
    "StorageError",
    "ValidationError",
    "WindowControlError",
    "WindowState",
    "create_state_store",
]
