"""Tests for the picker, the running screen and the main window wiring."""

from __future__ import annotations

import pytest
from PyQt6.QtCore import QPoint, Qt
from PyQt6.QtTest import QTest

from workouttimer.app import PICKER_PAGE, TIMER_PAGE, WorkoutTimerApp
from workouttimer.audio.sounds import SoundManager
from workouttimer.host.wake_lock import WakeLock
from workouttimer.settings import Settings, load_settings
from workouttimer.timer.engine import TimerEngine, TimerState
from workouttimer.ui.picker import TimePickerWidget
from workouttimer.ui.timer_widget import SWIPE_DISTANCE_PX, TimerWidget

from helpers import SignalCollector


class RecordingSoundManager(SoundManager):
    """SoundManager that remembers what it was asked to play."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.played: list[str] = []

    def play(self, name: str) -> None:
        if self.enabled:
            self.played.append(name)

    def pulse(self) -> None:
        self.played.append("pulse")


# ═══════════════════════════════════════════════════════════════════════
#  PICKER
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestPicker:

    def test_initial_value(self):
        picker = TimePickerWidget()
        assert picker.value == 45
        assert picker._value_label.text() == "45s"

    def test_steps_of_five(self):
        picker = TimePickerWidget(45)
        picker.increment()
        assert picker.value == 50
        picker.decrement()
        picker.decrement()
        assert picker.value == 40

    def test_never_below_five(self):
        picker = TimePickerWidget(10)
        picker.decrement()
        picker.decrement()
        picker.decrement()
        assert picker.value == 5
        assert picker._value_label.text() == "5s"

    def test_initial_value_clamped(self):
        assert TimePickerWidget(0).value == 5

    def test_buttons_step(self):
        picker = TimePickerWidget(45)
        picker._plus_btn.click()
        assert picker.value == 50
        picker._minus_btn.click()
        assert picker.value == 45

    def test_value_changed_signal(self):
        picker = TimePickerWidget(5)
        c = SignalCollector()
        picker.value_changed.connect(c)
        picker.decrement()  # already at minimum
        picker.increment()
        assert c.items == [10]

    def test_background_tap_selects(self):
        picker = TimePickerWidget(30)
        c = SignalCollector()
        picker.time_selected.connect(c)
        QTest.mouseClick(picker, Qt.MouseButton.LeftButton, pos=QPoint(2, 2))
        assert c.items == [30]


# ═══════════════════════════════════════════════════════════════════════
#  RUNNING SCREEN
# ═══════════════════════════════════════════════════════════════════════


class TestTimerWidget:

    def test_tick_updates_ring(self, engine, clock):
        widget = TimerWidget(engine)
        engine.start(10_000)
        clock.advance(2_500)
        engine.sample()
        assert widget.ring.time_text == "00:02.50"
        assert widget.ring.percent == pytest.approx(0.25)

    def test_reached_emphasises_label(self, engine, clock):
        widget = TimerWidget(engine)
        engine.start(1_000)
        assert widget.ring.emphasised is False
        clock.advance(1_000)
        engine.sample()
        assert widget.ring.emphasised is True

    def test_restart_clears_emphasis(self, engine, clock):
        widget = TimerWidget(engine)
        engine.start(1_000)
        clock.advance(1_500)
        engine.sample()
        engine.restart_tap()
        assert widget.ring.emphasised is False
        assert widget.ring.time_text == "00:00.00"

    def test_tap_restarts(self, engine, clock):
        widget = TimerWidget(engine)
        restarted = SignalCollector()
        widget.restarted.connect(restarted)
        engine.start(10_000)
        clock.advance(3_000)

        widget.handle_gesture(2, -3)
        assert engine.run_generation == 2
        assert len(restarted) == 1

    def test_debounced_tap_does_not_signal(self, engine, clock):
        widget = TimerWidget(engine)
        restarted = SignalCollector()
        widget.restarted.connect(restarted)
        engine.start(10_000)
        widget.handle_gesture(0, 0)
        clock.advance(100)
        widget.handle_gesture(0, 0)
        assert len(restarted) == 1

    def test_swipe_right_dismisses(self, engine):
        widget = TimerWidget(engine)
        dismissed = SignalCollector()
        widget.dismissed.connect(dismissed)
        engine.start(10_000)
        widget.handle_gesture(SWIPE_DISTANCE_PX + 20, 10)
        assert len(dismissed) == 1
        assert engine.run_generation == 1

    def test_short_drag_does_nothing(self, engine):
        widget = TimerWidget(engine)
        dismissed = SignalCollector()
        widget.dismissed.connect(dismissed)
        engine.start(10_000)
        widget.handle_gesture(40, 0)
        widget.handle_gesture(-SWIPE_DISTANCE_PX * 2, 0)
        assert len(dismissed) == 0
        assert engine.run_generation == 1

    def test_mouse_click_is_a_tap(self, engine):
        widget = TimerWidget(engine)
        engine.start(10_000)
        QTest.mouseClick(widget, Qt.MouseButton.LeftButton, pos=QPoint(5, 5))
        assert engine.run_generation == 2


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


class TestMainWindow:

    @pytest.fixture
    def sounds(self, qapp, tmp_path):
        return RecordingSoundManager(sounds_dir=tmp_path / "sounds")

    @pytest.fixture
    def window(self, engine, sounds):
        return WorkoutTimerApp(
            settings=Settings(),
            engine=engine,
            sound_manager=sounds,
            wake_lock=WakeLock(command=None),
        )

    def test_starts_on_picker(self, window):
        assert window.current_page == PICKER_PAGE
        assert window.engine.state == TimerState.IDLE

    def test_selecting_a_time_starts_the_run(self, window, sounds):
        window._picker.increment()
        window._picker.select()
        assert window.current_page == TIMER_PAGE
        assert window.engine.state == TimerState.RUNNING
        assert window.engine.target_duration_millis == 50_000
        assert "start" in sounds.played

    def test_selected_target_is_remembered(self, window):
        window._picker.set_value(60)
        window._picker.select()
        assert load_settings().target_seconds == 60

    def test_target_reached_pulses(self, window, engine, clock, sounds):
        window._picker.select()
        clock.advance(45_000)
        engine.sample()
        assert sounds.played.count("pulse") == 1
        clock.advance(5_000)
        engine.sample()
        assert sounds.played.count("pulse") == 1

    def test_muted_cues_still_pulse(self, engine, clock, sounds):
        window = WorkoutTimerApp(
            settings=Settings(sound_enabled=False),
            engine=engine,
            sound_manager=sounds,
            wake_lock=WakeLock(command=None),
        )
        window._picker.select()
        clock.advance(45_000)
        engine.sample()
        assert "start" not in sounds.played
        assert sounds.played.count("pulse") == 1

    def test_dismiss_returns_to_picker(self, window, engine):
        window._picker.select()
        window._timer_widget.dismissed.emit()
        assert window.current_page == PICKER_PAGE
        assert engine.state == TimerState.IDLE
        assert engine.elapsed_millis == 0

    def test_wake_lock_follows_run(self, window):
        window._picker.select()
        assert window._wake_lock.is_held
        window._show_picker()
        assert not window._wake_lock.is_held

    def test_space_toggles_pause(self, window, engine):
        window._picker.select()
        QTest.keyClick(window, Qt.Key.Key_Space)
        assert engine.state == TimerState.PAUSED
        QTest.keyClick(window, Qt.Key.Key_Space)
        assert engine.state == TimerState.RUNNING

    def test_space_on_picker_begins(self, window, engine):
        QTest.keyClick(window, Qt.Key.Key_Space)
        assert engine.state == TimerState.RUNNING

    def test_escape_returns_to_picker(self, window, engine):
        window._picker.select()
        QTest.keyClick(window, Qt.Key.Key_Escape)
        assert window.current_page == PICKER_PAGE
        assert engine.state == TimerState.IDLE

    def test_arrow_keys_step_picker(self, window):
        QTest.keyClick(window, Qt.Key.Key_Up)
        assert window._picker.value == 50
        QTest.keyClick(window, Qt.Key.Key_Down)
        QTest.keyClick(window, Qt.Key.Key_Down)
        assert window._picker.value == 40

    def test_restart_plays_cue(self, window, sounds):
        window._picker.select()
        window._timer_widget.handle_gesture(0, 0)
        assert "restart" in sounds.played
