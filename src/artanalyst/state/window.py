"""Window geometry persistence.

Hidden design decisions:
- Geometry is clamped against the display every time it is loaded, so a
  record that was valid when saved can still be replaced later
- Resize/move bursts reach the store through a ``WriteDebouncer``
- The window handle is only touched while attached and not destroyed
"""

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from ..config import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MAX_DIMENSION_MULTIPLIER,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    WINDOW_DISPLAY_MARGIN,
)
from .base import StateStore
from .debounce import WriteDebouncer
from .models import DisplayArea, WindowState
from .validation import validate_window_state

logger = logging.getLogger(__name__)

WINDOW_STATE_KEY = "windowState"

DEFAULT_WINDOW_STATE = WindowState(
    x=0,
    y=0,
    width=DEFAULT_WINDOW_WIDTH,
    height=DEFAULT_WINDOW_HEIGHT,
    is_maximized=False,
)


@runtime_checkable
class WindowHandle(Protocol):
    """The subset of a native window the state core needs."""

    def is_destroyed(self) -> bool: ...

    def get_bounds(self) -> tuple[int, int, int, int]:
        """Return ``(x, y, width, height)``."""
        ...

    def is_maximized(self) -> bool: ...

    def minimize(self) -> None: ...

    def maximize(self) -> None: ...

    def unmaximize(self) -> None: ...

    def close(self) -> None: ...


def is_off_screen(state: WindowState, area: DisplayArea) -> bool:
    """Check whether the window lies entirely outside the work area."""
    return (
        state.x + state.width < area.x
        or state.x > area.x + area.width
        or state.y + state.height < area.y
        or state.y > area.y + area.height
    )


def has_invalid_dimensions(state: WindowState, area: DisplayArea) -> bool:
    return (
        state.width < MIN_WINDOW_WIDTH
        or state.height < MIN_WINDOW_HEIGHT
        or state.width > area.width * MAX_DIMENSION_MULTIPLIER
        or state.height > area.height * MAX_DIMENSION_MULTIPLIER
    )


def centered_default(area: DisplayArea, is_maximized: bool = False) -> WindowState:
    """Default-sized window centered in the work area."""
    width = min(DEFAULT_WINDOW_WIDTH, area.width - WINDOW_DISPLAY_MARGIN)
    height = min(DEFAULT_WINDOW_HEIGHT, area.height - WINDOW_DISPLAY_MARGIN)
    return WindowState(
        x=(area.width - width) // 2 + area.x,
        y=(area.height - height) // 2 + area.y,
        width=width,
        height=height,
        is_maximized=is_maximized,
    )


def resolve_window_state(saved: WindowState | None, area: DisplayArea) -> WindowState:
    """Clamp saved geometry to the current display.

    Args:
        saved: Validated persisted state, or None if absent/invalid
        area: Work area of the primary display

    Returns:
        ``saved`` if it fits the display, otherwise a centered default that
        keeps the saved maximized flag
    """
    state = saved or DEFAULT_WINDOW_STATE
    if is_off_screen(state, area) or has_invalid_dimensions(state, area):
        return centered_default(area, is_maximized=state.is_maximized)
    return state


def load_window_state(store: StateStore, area: DisplayArea) -> WindowState:
    """Read, validate and clamp the persisted window state."""
    saved = validate_window_state(store.get(WINDOW_STATE_KEY))
    return resolve_window_state(saved, area)


def capture_window_state(window: WindowHandle) -> WindowState:
    x, y, width, height = window.get_bounds()
    return WindowState(x=x, y=y, width=width, height=height, is_maximized=window.is_maximized())


class WindowStateTracker:
    """Persist window geometry changes through a debouncer.

    The host forwards native window events to the ``on_*`` methods. Only
    the geometry current when the quiet period ends is written.
    """

    def __init__(
        self,
        store: StateStore,
        debouncer_factory: Callable[[Callable[[], object]], WriteDebouncer] = WriteDebouncer,
    ):
        self._store = store
        self._window: WindowHandle | None = None
        self._debouncer = debouncer_factory(self._persist)
        self._maximize_listeners: list[Callable[[bool], None]] = []

    @property
    def debouncer(self) -> WriteDebouncer:
        return self._debouncer

    @property
    def window(self) -> WindowHandle | None:
        """The attached window, or None once it is gone."""
        if self._window is not None and self._window.is_destroyed():
            self._window = None
        return self._window

    def attach(self, window: WindowHandle) -> None:
        self._window = window

    def detach(self) -> None:
        self._debouncer.cancel()
        self._window = None

    def add_maximize_listener(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        """Register a maximize-changed listener.

        Returns:
            Callable that unregisters the listener
        """
        self._maximize_listeners.append(listener)

        def remove() -> None:
            if listener in self._maximize_listeners:
                self._maximize_listeners.remove(listener)

        return remove

    def on_resize(self) -> None:
        if self.window is not None:
            self._debouncer.notify()

    def on_move(self) -> None:
        if self.window is not None:
            self._debouncer.notify()

    def on_maximize(self) -> None:
        self._on_maximize_changed()

    def on_unmaximize(self) -> None:
        self._on_maximize_changed()

    def on_closed(self) -> None:
        self._window = None

    def shutdown(self) -> None:
        """Cancel any pending write; geometry changes inside the quiet period are dropped."""
        self._debouncer.flush_and_cancel()

    def _on_maximize_changed(self) -> None:
        window = self.window
        if window is None:
            return
        self._debouncer.notify()
        maximized = window.is_maximized()
        for listener in list(self._maximize_listeners):
            try:
                listener(maximized)
            except Exception:
                logger.exception("Maximize listener failed")

    def _persist(self) -> None:
        window = self.window
        if window is None:
            return
        state = capture_window_state(window)
        if not self._store.set(WINDOW_STATE_KEY, state.to_record()):
            logger.warning("Window state was not persisted")
