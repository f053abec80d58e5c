"""Timer package."""

from .alarm import AlarmScheduleError, WakeAlarm
from .clock import wall_clock_millis
from .display import format_time, progress_fraction
from .engine import (
    TimerEngine,
    TimerState,
    SAMPLE_INTERVAL_MS,
    RESTART_GUARD_MILLIS,
)

__all__ = [
    "TimerEngine",
    "TimerState",
    "WakeAlarm",
    "AlarmScheduleError",
    "SAMPLE_INTERVAL_MS",
    "RESTART_GUARD_MILLIS",
    "format_time",
    "progress_fraction",
    "wall_clock_millis",
]
