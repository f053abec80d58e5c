"""Keep-awake lock bounded by a safety timeout.

While held, an inhibitor process keeps the machine from idling to sleep:

- macOS:  ``caffeinate -i``
- Linux:  ``systemd-inhibit`` wrapping ``sleep infinity``

The lock lets go on its own after ``WAKE_LOCK_TIMEOUT_MILLIS`` even if
nobody calls :meth:`WakeLock.release`.
"""

from __future__ import annotations

import logging
import shutil
import sys

from PyQt6.QtCore import QObject, QProcess, QTimer, pyqtSignal

logger = logging.getLogger(__name__)

WAKE_LOCK_TIMEOUT_MILLIS = 10 * 60 * 1000
KILL_GRACE_MILLIS = 500


def default_inhibit_command() -> list[str] | None:
    """Platform command that blocks idle sleep while it runs, if any."""
    if sys.platform == "darwin" and shutil.which("caffeinate"):
        return ["caffeinate", "-i"]
    if sys.platform.startswith("linux") and shutil.which("systemd-inhibit"):
        return [
            "systemd-inhibit",
            "--what=idle:sleep",
            "--who=WorkoutTimer",
            "--why=Workout timer running",
            "sleep", "infinity",
        ]
    return None


class WakeLock(QObject):
    """Re-entrant-safe keep-awake request.

    Signals
    -------
    expired()
        The safety timeout released the lock.
    """

    expired = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        command: list[str] | None = None,
    ) -> None:
        super().__init__(parent)
        self._command = command
        self._held = False
        self._process: QProcess | None = None

        self._safety_timer = QTimer(self)
        self._safety_timer.setSingleShot(True)
        self._safety_timer.timeout.connect(self._on_safety_timeout)

    @property
    def is_held(self) -> bool:
        return self._held

    def acquire(self, timeout_ms: int = WAKE_LOCK_TIMEOUT_MILLIS) -> None:
        """Take the lock.  Already held → no-op, timeout is not extended."""
        if self._held:
            return
        self._held = True
        self._safety_timer.start(timeout_ms)
        self._start_inhibitor()

    def release(self) -> None:
        if not self._held:
            return
        self._held = False
        self._safety_timer.stop()
        self._stop_inhibitor()

    # ── internal ──────────────────────────────────────────────────────

    def _on_safety_timeout(self) -> None:
        logger.info("Wake lock released by its safety timeout")
        self.release()
        self.expired.emit()

    def _start_inhibitor(self) -> None:
        if not self._command:
            return
        process = QProcess(self)
        process.errorOccurred.connect(self._on_process_error)
        process.start(self._command[0], self._command[1:])
        self._process = process

    def _stop_inhibitor(self) -> None:
        process = self._process
        self._process = None
        if process is None:
            return
        process.errorOccurred.disconnect(self._on_process_error)
        if process.state() == QProcess.ProcessState.NotRunning:
            process.deleteLater()
            return
        # Let it exit in the background; the kill timer dies with the process.
        process.finished.connect(process.deleteLater)
        killer = QTimer(process)
        killer.setSingleShot(True)
        killer.timeout.connect(process.kill)
        killer.start(KILL_GRACE_MILLIS)
        process.terminate()

    def _on_process_error(self, error: QProcess.ProcessError) -> None:
        # Keeping the machine awake is best-effort; the timer runs regardless.
        logger.warning("Keep-awake process failed (%s): %s",
                       error.name, " ".join(self._command or []))
