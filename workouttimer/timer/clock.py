"""Wall-clock source in whole milliseconds."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def wall_clock_millis() -> int:
    return time.time_ns() // 1_000_000
