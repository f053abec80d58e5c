"""Target picker: the first screen.

``-`` and ``+`` step the target by 5 s (never below 5 s).  Tapping anywhere
else on the screen confirms the value and begins the run.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton

from ..settings import DEFAULT_TARGET_SECONDS, MIN_TARGET_SECONDS, TARGET_STEP_SECONDS


class TimePickerWidget(QWidget):
    """Pick a target in whole seconds.

    Signals
    -------
    value_changed(seconds: int)
    time_selected(seconds: int)
        The user tapped the screen to begin with this target.
    """

    value_changed = pyqtSignal(int)
    time_selected = pyqtSignal(int)

    def __init__(
        self,
        initial_value: int = DEFAULT_TARGET_SECONDS,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._value = max(MIN_TARGET_SECONDS, initial_value)
        self._build_ui()
        self._refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        row = QHBoxLayout()
        row.setSpacing(16)
        row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._minus_btn = QPushButton("-", self)
        self._minus_btn.setObjectName("stepButton")
        self._minus_btn.clicked.connect(self.decrement)

        self._value_label = QLabel(self)
        self._value_label.setObjectName("pickerValue")
        self._value_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._plus_btn = QPushButton("+", self)
        self._plus_btn.setObjectName("stepButton")
        self._plus_btn.clicked.connect(self.increment)

        row.addWidget(self._minus_btn)
        row.addWidget(self._value_label)
        row.addWidget(self._plus_btn)
        layout.addLayout(row)

        layout.addSpacing(12)
        hint = QLabel("Tap to start", self)
        hint.setObjectName("pickerHint")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(hint)

    # ── public API ────────────────────────────────────────────────────

    @property
    def value(self) -> int:
        return self._value

    def set_value(self, seconds: int) -> None:
        seconds = max(MIN_TARGET_SECONDS, seconds)
        if seconds == self._value:
            return
        self._value = seconds
        self._refresh()
        self.value_changed.emit(seconds)

    def increment(self) -> None:
        self.set_value(self._value + TARGET_STEP_SECONDS)

    def decrement(self) -> None:
        if self._value > MIN_TARGET_SECONDS:
            self.set_value(self._value - TARGET_STEP_SECONDS)

    def select(self) -> None:
        self.time_selected.emit(self._value)

    # ── events ────────────────────────────────────────────────────────

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        # Buttons accept their own clicks, so this only sees background taps.
        if event.button() == Qt.MouseButton.LeftButton:
            self.select()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def _refresh(self) -> None:
        self._value_label.setText(f"{self._value}s")
