"""Boundary operation catalog.

Each operation takes the caller context first (unused by the bodies, kept
so wrappers can exclude it from logs) and returns plain JSON-ready values.
``BoundaryDispatcher`` wraps every operation in its envelope and routes
calls by channel name.
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..ai import validate_image_data
from ..errors import (
    ImageAnalysisError,
    StorageError,
    ValidationError,
    WindowControlError,
)
from ..state import RecordKind, validate, validate_settings, validate_window_state
from ..state.models import AnalysisResult
from .channels import Channel
from .context import AppContext
from .wrapper import BooleanBoundaryHandler, BoundaryHandler

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
WINDOW_STATE_KEY = "windowState"


class BoundaryOperations:
    """Operation bodies bound to one ``AppContext``."""

    def __init__(self, context: AppContext):
        self._context = context

    # -- store -------------------------------------------------------------

    def get_settings(self, caller: Any) -> dict[str, Any]:
        return validate_settings(self._context.store.get(SETTINGS_KEY, {})).to_record()

    def set_settings(self, caller: Any, value: Any) -> bool:
        result = validate(RecordKind.SETTINGS, value)
        if not result.ok:
            logger.error("Settings validation failed: %s", result.error)
            return False
        return self._context.store.set(SETTINGS_KEY, result.value.to_record())

    def get_window_state(self, caller: Any) -> dict[str, Any] | None:
        state = validate_window_state(self._context.store.get(WINDOW_STATE_KEY))
        return state.to_record() if state is not None else None

    # -- AI ----------------------------------------------------------------

    def get_ai_status(self, caller: Any) -> dict[str, Any]:
        return self._context.analyzer.status().to_record()

    async def analyze_image(self, caller: Any, image_base64: Any, mime_type: Any, prompt: Any) -> dict[str, Any]:
        if not all(isinstance(arg, str) for arg in (image_base64, mime_type, prompt)):
            return AnalysisResult.failure(
                "Invalid arguments: imageBase64, mimeType, and prompt must all be strings"
            ).to_record()

        if not image_base64.strip() or not mime_type.strip() or not prompt.strip():
            return AnalysisResult.failure(
                "Invalid arguments: imageBase64, mimeType, and prompt cannot be empty"
            ).to_record()

        check = validate_image_data(image_base64, mime_type)
        if not check.is_valid:
            return AnalysisResult.failure(check.error).to_record()

        result = await self._context.analyzer.analyze(image_base64, mime_type.lower(), prompt)
        return result.to_record()

    # -- window controls -----------------------------------------------------

    def minimize_window(self, caller: Any) -> None:
        window = self._context.windows.window
        if window is not None:
            window.minimize()

    def maximize_window(self, caller: Any) -> None:
        """Toggle between maximized and restored."""
        window = self._context.windows.window
        if window is None:
            return
        if window.is_maximized():
            window.unmaximize()
        else:
            window.maximize()

    def close_window(self, caller: Any) -> None:
        window = self._context.windows.window
        if window is not None:
            window.close()

    def is_window_maximized(self, caller: Any) -> bool:
        window = self._context.windows.window
        return bool(window is not None and window.is_maximized())

    # -- chat history --------------------------------------------------------

    def get_chat_history(self, caller: Any) -> list[dict[str, Any]]:
        return [message.to_record() for message in self._context.history.list()]

    def save_message(self, caller: Any, message: Mapping[str, Any]) -> bool:
        return self._context.history.append(message)

    def clear_history(self, caller: Any) -> bool:
        return self._context.history.clear()

    def delete_message(self, caller: Any, message_id: Any) -> bool:
        if not isinstance(message_id, str):
            raise ValidationError("messageId", [f"expected a string, got {type(message_id).__name__}"])
        return self._context.history.delete(message_id)


class BoundaryDispatcher:
    """Route channel calls to wrapped operations.

    Usage:
        dispatcher = BoundaryDispatcher(context)
        ok = await dispatcher.invoke(Channel.SAVE_MESSAGE, message)
    """

    def __init__(self, context: AppContext):
        self._context = context
        ops = BoundaryOperations(context)
        self._handlers: dict[Channel, Callable[..., Any]] = {
            Channel.GET_SETTINGS: BoundaryHandler("getSettings", ops.get_settings, StorageError),
            Channel.SET_SETTINGS: BooleanBoundaryHandler("setSettings", ops.set_settings, StorageError),
            Channel.GET_WINDOW_STATE: BoundaryHandler("getWindowState", ops.get_window_state, StorageError),
            # Read-only status, no persistence: left unwrapped.
            Channel.GET_AI_STATUS: ops.get_ai_status,
            Channel.WINDOW_MINIMIZE: BoundaryHandler("minimizeWindow", ops.minimize_window, WindowControlError),
            Channel.WINDOW_MAXIMIZE: BoundaryHandler("maximizeWindow", ops.maximize_window, WindowControlError),
            Channel.WINDOW_CLOSE: BoundaryHandler("closeWindow", ops.close_window, WindowControlError),
            Channel.WINDOW_IS_MAXIMIZED: BoundaryHandler(
                "isWindowMaximized", ops.is_window_maximized, WindowControlError
            ),
            Channel.ANALYZE_IMAGE: BoundaryHandler("analyzeImage", ops.analyze_image, ImageAnalysisError),
            Channel.GET_CHAT_HISTORY: BoundaryHandler("getChatHistory", ops.get_chat_history, StorageError),
            Channel.SAVE_MESSAGE: BooleanBoundaryHandler("saveMessage", ops.save_message, StorageError),
            Channel.CLEAR_HISTORY: BooleanBoundaryHandler("clearHistory", ops.clear_history, StorageError),
            Channel.DELETE_MESSAGE: BooleanBoundaryHandler("deleteMessage", ops.delete_message, StorageError),
        }

    @property
    def context(self) -> AppContext:
        return self._context

    @property
    def channels(self) -> list[Channel]:
        return list(self._handlers)

    def handler(self, channel: Channel | str) -> Callable[..., Any]:
        """Look up the wrapped handler for a channel.

        Raises:
            ValueError: If the channel is unknown or outbound-only
        """
        try:
            return self._handlers[Channel(channel)]
        except (KeyError, ValueError):
            raise ValueError(f"No handler registered for channel: {channel}") from None

    async def invoke(self, channel: Channel | str, *args: Any, caller: Any = None) -> Any:
        """Call an operation as the UI would.

        Args:
            channel: Channel name
            *args: Operation arguments
            caller: Caller context passed through to the handler

        Returns:
            The operation's envelope value
        """
        result = self.handler(channel)(caller, *args)
        if inspect.isawaitable(result):
            result = await result
        return result
