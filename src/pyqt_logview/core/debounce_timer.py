"""Reusable trailing debounce timer."""

from typing import Callable, Optional
from PyQt6.QtCore import QObject, QTimer


class DebounceTimer:
    """
    Reusable trailing debounce timer.

    Restarts timer on each call. Handler fires only after delay_ms of inactivity;
    there is no maximum delay, so a steady stream of triggers defers it indefinitely.

    Usage:
        self._debounce = DebounceTimer(delay_ms=150, handler=self._flush)

        def on_file_event(self, name):
            self._pending.add(name)
            self._debounce.trigger()  # Restarts timer
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None], parent: Optional[QObject] = None):
        self._delay_ms = delay_ms
        self._handler = handler
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    def set_delay(self, delay_ms: int) -> None:
        """Change the quiet period; applies from the next trigger."""
        self._delay_ms = delay_ms

    def is_pending(self) -> bool:
        return self._timer.isActive()

    def trigger(self):
        """Trigger debounce: stops any pending fire and restarts the timer."""
        self._timer.stop()
        self._timer.start(self._delay_ms)

    def cancel(self):
        """Cancel pending trigger."""
        self._timer.stop()

    def force(self):
        """Cancel timer and fire handler immediately."""
        self.cancel()
        self._handler()

    def _fire(self):
        self._handler()
