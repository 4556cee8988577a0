"""Write debouncing for high-frequency state changes.

A ``WriteDebouncer`` is a two-state machine (Idle/Pending) owning at most
one timer handle on the asyncio event loop. Bursts of ``notify()`` calls
collapse into a single run of the action once the quiet period elapses
without a new notification.
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from ..config import WINDOW_STATE_SAVE_DEBOUNCE_MS

logger = logging.getLogger(__name__)


class DebounceState(str, Enum):
    """Debouncer state."""

    IDLE = "idle"        # No timer scheduled
    PENDING = "pending"  # Timer scheduled, action not yet run


class WriteDebouncer:
    """Coalesce repeated notifications into one delayed action.

    Usage:
        debouncer = WriteDebouncer(save_geometry)
        debouncer.notify()   # Idle -> Pending
        debouncer.notify()   # timer restarted
        ...                  # 0.5s of quiet: save_geometry() runs once
        debouncer.cancel()   # at shutdown, drops any pending write
    """

    def __init__(
        self,
        action: Callable[[], object],
        quiet_period: float = WINDOW_STATE_SAVE_DEBOUNCE_MS / 1000,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        """Initialize the debouncer.

        Args:
            action: Zero-argument callable run when the timer fires
            quiet_period: Seconds without notifications before firing
            loop: Event loop for the timer (default: running loop at notify time)
        """
        if quiet_period < 0:
            raise ValueError("quiet_period must be >= 0")
        self._action = action
        self._quiet_period = quiet_period
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def quiet_period(self) -> float:
        return self._quiet_period

    @property
    def state(self) -> DebounceState:
        return DebounceState.PENDING if self._handle is not None else DebounceState.IDLE

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def notify(self) -> None:
        """Schedule the action, restarting the timer if one is pending."""
        if self._handle is not None:
            self._handle.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._quiet_period, self._fire)

    def cancel(self) -> None:
        """Drop any pending timer without running the action."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush_and_cancel(self) -> None:
        """Shutdown hook: cancel the pending write rather than performing it."""
        self.cancel()

    def _fire(self) -> None:
        self._handle = None
        try:
            self._action()
        except Exception:
            logger.exception("Debounced action failed")
