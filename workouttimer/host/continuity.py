"""Keep a run alive while the window is hidden.

Ties the engine's lifecycle to a :class:`WakeLock` and publishes the
ongoing status line shown in the tray, the desktop stand-in for a
foreground-service notification.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from ..timer.display import format_time
from ..timer.engine import TimerEngine, TimerState
from .wake_lock import WakeLock

STATUS_TITLE = "Workout Timer Active"
STATUS_RUNNING = "Timer is running."


class BackgroundContinuity(QObject):
    """Acquire the wake lock while running; release it otherwise.

    Signals
    -------
    status_changed(text: str)
        Ongoing status line; empty string when no run is active.
        Refreshed at most once per displayed second.
    """

    status_changed = pyqtSignal(str)

    def __init__(
        self,
        engine: TimerEngine,
        wake_lock: WakeLock,
        parent: QObject | None = None,
        *,
        enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._wake_lock = wake_lock
        self._enabled = enabled
        self._status = ""
        self._last_second: int | None = None

        engine.state_changed.connect(self._on_state_changed)
        engine.tick.connect(self._on_tick)

    @property
    def status(self) -> str:
        return self._status

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Toggle keep-awake.  Takes effect immediately on a live run."""
        self._enabled = enabled
        if not enabled:
            self._wake_lock.release()
        elif self._engine.is_running:
            self._wake_lock.acquire()

    # ── slots ─────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        if state == TimerState.RUNNING:
            if self._enabled:
                self._wake_lock.acquire()
            self._last_second = None
            self._publish(STATUS_RUNNING)
        else:
            self._wake_lock.release()
            self._last_second = None
            self._publish("")

    def _on_tick(self, elapsed_millis: int) -> None:
        second = elapsed_millis // 1000
        if second == self._last_second:
            return
        self._last_second = second
        self._publish(f"{STATUS_RUNNING} {format_time(elapsed_millis)[:5]}")

    def _publish(self, text: str) -> None:
        if text == self._status:
            return
        self._status = text
        self.status_changed.emit(text)
