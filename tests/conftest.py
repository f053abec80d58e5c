"""Shared pytest fixtures for the workout timer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from workouttimer.timer.engine import TimerEngine

from helpers import FakeAlarm, FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    monkeypatch.setattr("workouttimer.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("workouttimer.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield tmp_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def alarm():
    return FakeAlarm()


@pytest.fixture
def engine(qapp, clock, alarm):
    """TimerEngine on a hand-driven clock with a hand-fired alarm."""
    return TimerEngine(parent=None, clock=clock, alarm=alarm)
