"""Application-state context shared by every boundary handler.

Constructed once at startup and passed by reference; replaces module-level
singletons for the store, the window handle and the AI client.
"""

from dataclasses import dataclass

from ..ai import ImageAnalyzer
from ..config import MAX_CHAT_HISTORY_SIZE, WINDOW_STATE_SAVE_DEBOUNCE_MS, AppConfig
from ..state import (
    BoundedHistoryLog,
    DisplayArea,
    StateStore,
    WindowState,
    WindowStateTracker,
    WriteDebouncer,
    create_state_store,
    load_window_state,
)


@dataclass
class AppContext:
    """Everything a boundary operation may touch."""

    config: AppConfig
    store: StateStore
    history: BoundedHistoryLog
    windows: WindowStateTracker
    analyzer: ImageAnalyzer

    @classmethod
    def create(
        cls,
        config: AppConfig,
        store: StateStore | None = None,
        analyzer: ImageAnalyzer | None = None,
        history_capacity: int = MAX_CHAT_HISTORY_SIZE,
        quiet_period: float = WINDOW_STATE_SAVE_DEBOUNCE_MS / 1000,
    ) -> "AppContext":
        """Build the context from configuration.

        Args:
            config: Resolved application configuration
            store: State store (default: JSON file at ``config.store_path``)
            analyzer: Image analyzer (default: Gemini with the configured key)
            history_capacity: Maximum messages kept in history
            quiet_period: Window-geometry debounce interval in seconds

        Returns:
            Ready-to-use AppContext
        """
        if store is None:
            store = create_state_store("json", path=config.store_path)
        if analyzer is None:
            analyzer = ImageAnalyzer(api_key=config.gemini_api_key, model=config.gemini_model)

        windows = WindowStateTracker(
            store,
            debouncer_factory=lambda action: WriteDebouncer(action, quiet_period=quiet_period),
        )
        return cls(
            config=config,
            store=store,
            history=BoundedHistoryLog(store, capacity=history_capacity),
            windows=windows,
            analyzer=analyzer,
        )

    def initial_window_state(self, area: DisplayArea) -> WindowState:
        """Geometry for a newly created window on ``area``."""
        return load_window_state(self.store, area)

    def shutdown(self) -> None:
        """Cancel the pending geometry write before the store goes away."""
        self.windows.shutdown()
