"""Main application window for the workout timer."""

from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QColor, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QMainWindow, QMenu, QStackedWidget, QSystemTrayIcon

from .audio.sounds import SoundManager
from .host.continuity import STATUS_TITLE, BackgroundContinuity
from .host.wake_lock import WakeLock, default_inhibit_command
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine, TimerState
from .ui.picker import TimePickerWidget
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget

APP_NAME = "Workout Timer"

PICKER_PAGE = 0
TIMER_PAGE = 1


# ── tray-icon image generation ────────────────────────────────────────────


def _make_tray_icon(state: TimerState) -> QIcon:
    """32×32 monochrome template icon.

    - RUNNING:  filled circle
    - PAUSED:   circle outline with a centre dot
    - other:    circle outline
    """
    size = 64  # drawn at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)
    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if state == TimerState.RUNNING:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(cx - r, cy - r, r * 2, r * 2)

    if state == TimerState.PAUSED:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - 6, cy - 6, 12, 12)

    p.end()
    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


class WorkoutTimerApp(QMainWindow):
    """Main application window: picker and running screen in a stack."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        engine: TimerEngine | None = None,
        sound_manager: SoundManager | None = None,
        wake_lock: WakeLock | None = None,
        persist_settings: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self._settings = settings if settings is not None else load_settings()
        self._persist_settings = persist_settings

        # ── core + collaborators ───────────────────────────────────────
        self._engine = engine if engine is not None else TimerEngine(self)
        self._sound_manager = (
            sound_manager if sound_manager is not None else SoundManager(self)
        )
        self._sound_manager.set_enabled(self._settings.sound_enabled)
        self._sound_manager.set_volume(self._settings.sound_volume)

        self._wake_lock = (
            wake_lock if wake_lock is not None
            else WakeLock(self, command=default_inhibit_command())
        )
        self._continuity = BackgroundContinuity(
            self._engine, self._wake_lock, self,
            enabled=self._settings.keep_awake,
        )

        # ── screens ────────────────────────────────────────────────────
        self._stack = QStackedWidget(self)
        self._picker = TimePickerWidget(self._settings.target_seconds, self._stack)
        self._timer_widget = TimerWidget(self._engine, self._stack)
        self._stack.addWidget(self._picker)
        self._stack.addWidget(self._timer_widget)
        self.setCentralWidget(self._stack)
        self.setStyleSheet(build_stylesheet())

        # ── tray (ongoing status while hidden) ────────────────────────
        self._tray_icon = QSystemTrayIcon(_make_tray_icon(TimerState.IDLE), self)
        self._tray_icon.setToolTip(APP_NAME)
        self._build_tray_menu()
        self._tray_icon.activated.connect(self._on_tray_activated)
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        # ── geometry save debounce ────────────────────────────────────
        self._geometry_timer = QTimer(self)
        self._geometry_timer.setSingleShot(True)
        self._geometry_timer.setInterval(500)
        self._geometry_timer.timeout.connect(self._save_geometry)

        self._connect_signals()
        self._restore_geometry()
        self._apply_always_on_top(self._settings.always_on_top)

    # ══════════════════════════════════════════════════════════════════
    #  PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def current_page(self) -> int:
        return self._stack.currentIndex()

    # ══════════════════════════════════════════════════════════════════
    #  WIRING
    # ══════════════════════════════════════════════════════════════════

    def _connect_signals(self) -> None:
        self._picker.time_selected.connect(self._on_time_selected)
        self._picker.value_changed.connect(lambda _: self._play_sound("click"))
        self._timer_widget.dismissed.connect(self._show_picker)
        self._timer_widget.restarted.connect(lambda: self._play_sound("restart"))

        self._engine.target_reached.connect(self._on_target_reached)
        self._engine.state_changed.connect(self._on_state_changed)
        self._continuity.status_changed.connect(self._on_status_changed)
        self._wake_lock.expired.connect(self._on_wake_lock_expired)

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        self._tray_restart_action = menu.addAction("Restart")
        self._tray_restart_action.triggered.connect(self._engine.restart_tap)

        self._tray_stop_action = menu.addAction("Stop")
        self._tray_stop_action.triggered.connect(self._show_picker)

        menu.addSeparator()
        show_action = menu.addAction(f"Show {APP_NAME}")
        show_action.triggered.connect(self._show_window)

        menu.addSeparator()
        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_app)

        self._tray_icon.setContextMenu(menu)
        self._update_tray_state(TimerState.IDLE)

    # ══════════════════════════════════════════════════════════════════
    #  NAVIGATION
    # ══════════════════════════════════════════════════════════════════

    def _on_time_selected(self, seconds: int) -> None:
        self._settings.target_seconds = seconds
        self._save_settings()
        self._stack.setCurrentIndex(TIMER_PAGE)
        self._engine.start(seconds * 1000)
        self._play_sound("start")

    def _show_picker(self) -> None:
        """Swipe-away: end the run and go back to choosing a target."""
        self._engine.stop()
        self._engine.reset()
        self._picker.set_value(self._settings.target_seconds)
        self._stack.setCurrentIndex(PICKER_PAGE)

    def _toggle_pause(self) -> None:
        if self._engine.state == TimerState.RUNNING:
            self._engine.pause()
        elif self._engine.state == TimerState.PAUSED:
            self._engine.resume()

    # ══════════════════════════════════════════════════════════════════
    #  FEEDBACK
    # ══════════════════════════════════════════════════════════════════

    def _play_sound(self, name: str) -> None:
        self._sound_manager.play(name)

    def _send_notification(self, title: str, body: str) -> None:
        if not self._settings.notifications_enabled:
            return
        self._tray_icon.showMessage(title, body)

    def _on_target_reached(self) -> None:
        self._sound_manager.pulse()
        seconds = self._engine.target_duration_millis // 1000
        self._send_notification("Target reached", f"{seconds}s done. Still counting.")

    def _on_state_changed(self, state: TimerState) -> None:
        self._update_tray_state(state)

    def _on_status_changed(self, text: str) -> None:
        if text:
            self._tray_icon.setToolTip(f"{STATUS_TITLE}\n{text}")
        else:
            self._tray_icon.setToolTip(APP_NAME)

    def _on_wake_lock_expired(self) -> None:
        self._tray_icon.setToolTip(f"{APP_NAME}\nKeep-awake ended; the timer keeps counting.")

    def _update_tray_state(self, state: TimerState) -> None:
        self._tray_icon.setIcon(_make_tray_icon(state))
        active = state in (TimerState.RUNNING, TimerState.PAUSED)
        self._tray_restart_action.setEnabled(active)
        self._tray_stop_action.setEnabled(active)

    # ══════════════════════════════════════════════════════════════════
    #  TRAY / WINDOW
    # ══════════════════════════════════════════════════════════════════

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._show_window()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def _quit_app(self) -> None:
        self._save_geometry()
        self._engine.reset()
        self._wake_lock.release()
        self._tray_icon.hide()
        from PyQt6.QtWidgets import QApplication
        QApplication.instance().quit()

    def _apply_always_on_top(self, on_top: bool) -> None:
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, on_top)

    def _restore_geometry(self) -> None:
        s = self._settings
        self.resize(s.window_width, s.window_height)
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)

    def _save_geometry(self) -> None:
        geo = self.geometry()
        self._settings.window_x = geo.x()
        self._settings.window_y = geo.y()
        self._settings.window_width = geo.width()
        self._settings.window_height = geo.height()
        self._save_settings()

    def _save_settings(self) -> None:
        if self._persist_settings:
            save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  EVENTS
    # ══════════════════════════════════════════════════════════════════

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space: begin / pause-resume.  R: restart.  Esc: back to picker.

        Up/Down step the target on the picker.
        """
        key = event.key()
        on_picker = self._stack.currentIndex() == PICKER_PAGE
        if key == Qt.Key.Key_Space:
            if on_picker:
                self._picker.select()
            else:
                self._toggle_pause()
        elif key == Qt.Key.Key_R and not on_picker:
            self._engine.restart_tap()
        elif key == Qt.Key.Key_Escape and not on_picker:
            self._show_picker()
        elif key == Qt.Key.Key_Up and on_picker:
            self._picker.increment()
        elif key == Qt.Key.Key_Down and on_picker:
            self._picker.decrement()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._geometry_timer.start()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._geometry_timer.start()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Hide to the tray while a run is active, otherwise quit."""
        self._save_geometry()
        if self._engine.is_running and self._tray_icon.isVisible():
            event.ignore()
            self.hide()
            return
        self._engine.reset()
        self._wake_lock.release()
        self._tray_icon.hide()
        event.accept()
