"""Running screen: ring and elapsed time.

Gestures
--------
tap              restart the run with the same target (debounced by the engine)
swipe right      dismiss back to the picker
"""

from __future__ import annotations

from PyQt6.QtCore import QPointF, Qt, pyqtSignal
from PyQt6.QtWidgets import QWidget, QVBoxLayout

from ..timer.display import format_time
from ..timer.engine import TimerEngine, TimerState
from .progress_ring import ProgressRing

SWIPE_DISTANCE_PX = 80
TAP_SLOP_PX = 10


class TimerWidget(QWidget):
    """Displays the engine's run and turns gestures into engine calls."""

    dismissed = pyqtSignal()
    restarted = pyqtSignal()

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._press_pos: QPointF | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._ring = ProgressRing(self)
        # Let presses fall through to this widget's gesture handling.
        self._ring.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        layout.addWidget(self._ring)

        engine.tick.connect(self._refresh_display)
        engine.target_reached.connect(self._on_target_reached)
        engine.state_changed.connect(self._on_state_changed)
        self._refresh_display(engine.elapsed_millis)

    @property
    def ring(self) -> ProgressRing:
        return self._ring

    # ── gestures ──────────────────────────────────────────────────────

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.position()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton or self._press_pos is None:
            super().mouseReleaseEvent(event)
            return
        delta = event.position() - self._press_pos
        self._press_pos = None
        self.handle_gesture(delta.x(), delta.y())
        event.accept()

    def handle_gesture(self, dx: float, dy: float) -> None:
        """Classify a completed press-drag-release by its displacement."""
        if dx >= SWIPE_DISTANCE_PX and abs(dy) < dx:
            self.dismissed.emit()
        elif abs(dx) <= TAP_SLOP_PX and abs(dy) <= TAP_SLOP_PX:
            before = self._engine.run_generation
            self._engine.restart_tap()
            if self._engine.run_generation != before:
                self.restarted.emit()

    # ── slots ─────────────────────────────────────────────────────────

    def _refresh_display(self, elapsed_millis: int) -> None:
        self._ring.set_time_text(format_time(elapsed_millis))
        self._ring.set_percent(self._engine.progress)

    def _on_target_reached(self) -> None:
        self._ring.set_emphasis(True)

    def _on_state_changed(self, state: TimerState) -> None:
        active = state in (TimerState.RUNNING, TimerState.PAUSED)
        self._ring.set_emphasis(active and self._engine.reached)
        self._refresh_display(self._engine.elapsed_millis)
