"""Deferred wake-up for the "target reached" moment.

The sampling loop in :class:`~workouttimer.timer.engine.TimerEngine` only
runs while the event loop is servicing it at full rate.  ``WakeAlarm`` is a
second, independent path: a single precise timer armed for an absolute
wall-clock instant, so the reached event is delivered even if sampling is
throttled (window hidden, app napped by the OS).
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, Qt, QTimer

from .clock import Clock, wall_clock_millis

# QTimer intervals are a signed 32-bit millisecond count.
MAX_DELAY_MS = 2**31 - 1


class AlarmScheduleError(RuntimeError):
    """The host refused or could not represent the requested alarm."""


class WakeAlarm(QObject):
    """One-shot alarm at an absolute wall-clock time.

    Only one alarm is armed at a time; scheduling again replaces the
    previous one.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Clock = wall_clock_millis,
    ) -> None:
        super().__init__(parent)
        self._clock = clock
        self._callback: Callable[[], None] | None = None
        self._trigger_at: int | None = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_armed(self) -> bool:
        return self._callback is not None

    @property
    def trigger_at(self) -> int | None:
        """Wall-clock millis the armed alarm fires at, or None."""
        return self._trigger_at

    def schedule(self, trigger_at_millis: int, callback: Callable[[], None]) -> None:
        """Arm the alarm.  Raises :class:`AlarmScheduleError` on failure."""
        self.cancel()
        delay = trigger_at_millis - self._clock()
        if delay > MAX_DELAY_MS:
            raise AlarmScheduleError(
                f"alarm {delay} ms ahead exceeds the {MAX_DELAY_MS} ms limit"
            )
        self._callback = callback
        self._trigger_at = trigger_at_millis
        self._timer.start(max(0, delay))

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None
        self._trigger_at = None

    def _on_timeout(self) -> None:
        callback = self._callback
        self._callback = None
        self._trigger_at = None
        if callback is not None:
            callback()
