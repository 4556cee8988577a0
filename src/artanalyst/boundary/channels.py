"""Boundary channel names.

Centralized so the UI and the handlers cannot drift apart on spelling.
"""

from enum import Enum


class Channel(str, Enum):
    """Operations callable across the UI boundary."""

    # Store
    GET_SETTINGS = "get-settings"
    SET_SETTINGS = "set-settings"
    GET_WINDOW_STATE = "get-window-state"

    # AI
    GET_AI_STATUS = "get-ai-status"
    ANALYZE_IMAGE = "analyze-image"

    # Window controls
    WINDOW_MINIMIZE = "window-minimize"
    WINDOW_MAXIMIZE = "window-maximize"
    WINDOW_CLOSE = "window-close"
    WINDOW_IS_MAXIMIZED = "window-is-maximized"
    WINDOW_MAXIMIZE_CHANGED = "window-maximize-changed"  # outbound event only

    # Chat history
    GET_CHAT_HISTORY = "get-chat-history"
    SAVE_MESSAGE = "save-message"
    CLEAR_HISTORY = "clear-history"
    DELETE_MESSAGE = "delete-message"
