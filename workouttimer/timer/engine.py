"""Timer state machine for the workout timer.

States
------
IDLE       Nothing picked yet, or the picker is showing again.
RUNNING    Stopwatch counting up from the run's effective start.
PAUSED     Sampling suspended; elapsed time frozen and resumable.
STOPPED    Run cancelled; elapsed time back to zero.

Transitions
-----------
any → RUNNING          (start / restart_tap)
RUNNING → PAUSED       (pause)
PAUSED → RUNNING       (resume)
RUNNING | PAUSED → STOPPED  (stop)
any → IDLE             (reset)

Timekeeping
-----------
Elapsed time is always ``now - effective_start`` where ``effective_start``
is fixed when the run begins.  Nothing is accumulated per tick, so a late
or skipped sample never introduces drift.

Every run gets a new ``run_generation``.  The sampling loop and the target
alarm are both bound to the generation they were created for; anything that
arrives carrying an older generation is dropped.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import partial

from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal

from .alarm import AlarmScheduleError, WakeAlarm
from .clock import Clock, wall_clock_millis
from .display import progress_fraction

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


# ── constants ─────────────────────────────────────────────────────────────

SAMPLE_INTERVAL_MS = 10  # matches the hundredths shown by format_time
RESTART_GUARD_MILLIS = 1000


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Free-running stopwatch with a one-shot target threshold.

    Signals
    -------
    tick(elapsed_millis: int)
        Emitted on every sample while running.
    target_reached()
        Emitted once per run when elapsed time first crosses the target.
        Always emitted before the tick that first reports the crossing.
    state_changed(new_state: TimerState)
        Emitted on every state transition.
    """

    tick = pyqtSignal(int)
    target_reached = pyqtSignal()
    state_changed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Clock = wall_clock_millis,
        alarm: WakeAlarm | None = None,
        sample_interval: int = SAMPLE_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        self._clock = clock
        self._alarm = alarm if alarm is not None else WakeAlarm(self, clock=clock)
        self._sample_interval = sample_interval

        # ── run state ─────────────────────────────────────────────────
        self._state: TimerState = TimerState.IDLE
        self._target: int = 0
        self._elapsed: int = 0
        self._effective_start: int = 0
        self._reached: bool = False
        self._generation: int = 0

        # ── restart debounce ──────────────────────────────────────────
        self._last_restart_at: int | None = None

        # ── sampling loop (one QTimer per run) ────────────────────────
        self._sampler: QTimer | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def elapsed_millis(self) -> int:
        return self._elapsed

    @property
    def target_duration_millis(self) -> int:
        """Target of the current (or most recent) run; 0 means none."""
        return self._target

    @property
    def reached(self) -> bool:
        """True once the current run has crossed its target."""
        return self._reached

    @property
    def run_generation(self) -> int:
        return self._generation

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def progress(self) -> float:
        """0.0 → 1.0 progress toward the target."""
        return progress_fraction(self._elapsed, self._target)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, target_duration_millis: int, resume_from_millis: int = 0) -> None:
        """Begin a new run, superseding any run in progress."""
        self._begin_run(
            max(0, target_duration_millis),
            max(0, resume_from_millis),
            already_reached=False,
        )

    def stop(self) -> None:
        """Cancel the run and zero the clock.  No-op unless a run exists."""
        if self._state not in (TimerState.RUNNING, TimerState.PAUSED):
            return
        self._cancel_activity()
        self._elapsed = 0
        self._set_state(TimerState.STOPPED)

    def pause(self) -> None:
        if self._state != TimerState.RUNNING:
            return
        self.sample()
        self._cancel_activity()
        self._set_state(TimerState.PAUSED)

    def resume(self) -> None:
        """Continue a paused run from its frozen elapsed time."""
        if self._state != TimerState.PAUSED:
            return
        self._begin_run(self._target, self._elapsed, already_reached=self._reached)

    def reset(self) -> None:
        """Drop everything and return to IDLE (picker showing)."""
        self._cancel_activity()
        self._elapsed = 0
        self._reached = False
        self._set_state(TimerState.IDLE)

    def restart_tap(self) -> None:
        """Stop and start again with the same target.

        Taps landing within ``RESTART_GUARD_MILLIS`` of the previous
        restart are ignored so one touch never restarts twice.  If the
        wall clock has stepped back past the previous restart, the window
        is treated as over.
        """
        if self._generation == 0:
            return
        now = self._clock()
        if (
            self._last_restart_at is not None
            and 0 <= now - self._last_restart_at < RESTART_GUARD_MILLIS
        ):
            logger.debug("Restart tap ignored, %d ms after the last one",
                         now - self._last_restart_at)
            return
        self._last_restart_at = now
        self.stop()
        self.start(self._target)

    def sample(self, now: int | None = None, generation: int | None = None) -> None:
        """Recompute elapsed time and notify listeners.

        Called by the run's sampling loop; ``generation`` identifies the
        run the caller belongs to and stale callers are ignored.
        """
        if generation is not None and generation != self._generation:
            logger.debug("Dropping sample from stale run %d", generation)
            return
        if self._state != TimerState.RUNNING:
            return
        if now is None:
            now = self._clock()

        # Wall clock can step backwards; elapsed time never does.
        self._elapsed = max(self._elapsed, now - self._effective_start)

        if not self._reached and self._target > 0 and self._elapsed >= self._target:
            self._mark_reached()

        self.tick.emit(self._elapsed)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: run mechanics
    # ══════════════════════════════════════════════════════════════════

    def _begin_run(self, target: int, resume_from: int, *, already_reached: bool) -> None:
        self._cancel_activity()
        self._generation += 1
        generation = self._generation

        now = self._clock()
        self._target = target
        self._elapsed = resume_from
        self._effective_start = now - resume_from
        starts_reached = target > 0 and resume_from >= target
        self._reached = starts_reached
        logger.debug(
            "Run %d started: target=%d ms, resume_from=%d ms",
            generation, target, resume_from,
        )

        self._set_state(TimerState.RUNNING)

        if starts_reached:
            if not already_reached:
                self.target_reached.emit()
        elif target > 0:
            self._schedule_alarm(generation, self._effective_start + target)

        self._start_sampler(generation)

    def _start_sampler(self, generation: int) -> None:
        sampler = QTimer(self)
        sampler.setTimerType(Qt.TimerType.PreciseTimer)
        sampler.setInterval(self._sample_interval)
        sampler.timeout.connect(partial(self._on_sample_timeout, generation))
        sampler.start()
        self._sampler = sampler

    def _schedule_alarm(self, generation: int, trigger_at: int) -> None:
        try:
            self._alarm.schedule(trigger_at, partial(self._on_alarm, generation))
        except (AlarmScheduleError, PermissionError):
            logger.warning(
                "Could not schedule the target alarm for run %d; "
                "target will only be detected while sampling",
                generation,
                exc_info=True,
            )

    def _cancel_activity(self) -> None:
        if self._sampler is not None:
            self._sampler.stop()
            self._sampler.deleteLater()
            self._sampler = None
        self._alarm.cancel()

    def _on_sample_timeout(self, generation: int) -> None:
        self.sample(generation=generation)

    def _on_alarm(self, generation: int) -> None:
        if generation != self._generation or self._state != TimerState.RUNNING:
            logger.debug("Dropping alarm from stale run %d", generation)
            return
        if not self._reached:
            self._mark_reached()
        self.sample(generation=generation)

    def _mark_reached(self) -> None:
        self._reached = True
        logger.info("Target of %d ms reached (run %d)", self._target, self._generation)
        self.target_reached.emit()

    def _set_state(self, new_state: TimerState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)
