"""UI package."""

from .picker import TimePickerWidget
from .progress_ring import ProgressRing
from .timer_widget import TimerWidget

__all__ = [
    "TimePickerWidget",
    "ProgressRing",
    "TimerWidget",
]
