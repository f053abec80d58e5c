"""Host integration: keeping the timer alive while the window is hidden."""

from .continuity import BackgroundContinuity
from .wake_lock import WakeLock, WAKE_LOCK_TIMEOUT_MILLIS, default_inhibit_command

__all__ = [
    "BackgroundContinuity",
    "WakeLock",
    "WAKE_LOCK_TIMEOUT_MILLIS",
    "default_inhibit_command",
]
