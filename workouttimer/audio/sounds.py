"""Cue synthesis and playback using numpy + QSoundEffect.

Cues are generated programmatically as WAV files (sine synthesis with ADSR
envelopes) and cached to disk so later launches skip the work.

Sound names
-----------
- ``target_reached``: 500 ms low buzz, the desktop stand-in for a haptic pulse
- ``start``         : two rising notes when a run begins
- ``restart``       : quick double tick when a running timer is restarted
- ``click``         : subtle button click for the picker
"""

from __future__ import annotations

import io
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "target_reached",
    "start",
    "restart",
    "click",
)

SAMPLE_RATE = 44100
PULSE_MS = 500
DEFAULT_VOLUME = 70


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(env[r_start - 1] if r_start else 0.0, 0.0, length - r_start)
    return env


def _tone(freq: float, duration_s: float) -> np.ndarray:
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _wav_bytes(samples: np.ndarray) -> bytes:
    """16-bit mono PCM WAV from float samples in -1..1."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_pulse() -> bytes:
    """Target reached: 500 ms buzz (170 Hz plus a rough third harmonic).

    A 30 Hz amplitude wobble gives it the rattle of a vibration motor.
    """
    duration = PULSE_MS / 1000
    body = _tone(170.0, duration) * 0.6 + _tone(510.0, duration) * 0.15
    wobble = 0.75 + 0.25 * _tone(30.0, duration)
    env = _envelope(len(body), attack=220, decay=0, sustain_level=1.0, release=900)
    return _wav_bytes(body * wobble * env)


def _generate_start() -> bytes:
    """Run start: two rising notes (E5 → A5)."""
    parts: list[np.ndarray] = []
    for freq in (659.25, 880.0):
        note = _tone(freq, 0.09) * 0.5
        parts.append(note * _envelope(len(note), attack=80, decay=150,
                                      sustain_level=0.4, release=250))
        parts.append(_silence(0.025))
    parts.append(_silence(0.04))
    return _wav_bytes(np.concatenate(parts))


def _generate_restart() -> bytes:
    """Restart: two quick 1 kHz ticks."""
    tick = _tone(1000.0, 0.03) * 0.35
    tick = tick * _envelope(len(tick), attack=30, decay=80, sustain_level=0.2, release=200)
    return _wav_bytes(np.concatenate([tick, _silence(0.05), tick, _silence(0.04)]))


def _generate_click() -> bytes:
    """Button click: very short, subtle."""
    tick = _tone(1200.0, 0.015) * 0.2
    tick = tick * _envelope(len(tick), attack=20, decay=50, sustain_level=0.0, release=0)
    # Trailing silence so QSoundEffect doesn't clip the tail
    return _wav_bytes(np.concatenate([tick, _silence(0.03)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "target_reached": _generate_pulse,
    "start": _generate_start,
    "restart": _generate_restart,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Cue synthesis, caching and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("target_reached")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = DEFAULT_VOLUME / 100.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}
        self._pulse_effect: QSoundEffect | None = None

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100) on every loaded cue."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a cue by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    def pulse(self) -> None:
        """The single haptic-equivalent pulse for a reached target.

        Always plays at ``DEFAULT_VOLUME``; muting cues does not silence it.
        """
        if self._pulse_effect is not None:
            self._pulse_effect.play()

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, generate in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(generate())

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect

        pulse_path = self._sounds_dir / "target_reached.wav"
        if pulse_path.exists():
            self._pulse_effect = QSoundEffect(self)
            self._pulse_effect.setSource(QUrl.fromLocalFile(str(pulse_path)))
            self._pulse_effect.setVolume(DEFAULT_VOLUME / 100.0)
