"""Circular progress ring widget rendered with QPainter.

- Faint full-circle track behind a primary-coloured progress arc.
- Arc fills clockwise from 12 o'clock, ``elapsed / target`` clamped to 0..1.
- Elapsed time in ``MM:SS.cc`` at the centre.
- Once the target is reached the time label fades to the primary colour.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtWidgets import QWidget

from ..timer.display import format_time
from .styles import PALETTE, TRACK_ALPHA


def _lerp_color(c1: QColor, c2: QColor, t: float) -> QColor:
    """Linearly interpolate between two QColors."""
    t = max(0.0, min(1.0, t))
    return QColor(
        int(c1.red()   + (c2.red()   - c1.red())   * t),
        int(c1.green() + (c2.green() - c1.green()) * t),
        int(c1.blue()  + (c2.blue()  - c1.blue())  * t),
        int(c1.alpha() + (c2.alpha() - c1.alpha()) * t),
    )


class ProgressRing(QWidget):
    """Custom-painted stopwatch ring."""

    RING_THICKNESS = 6
    MARGIN = 8

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(180, 180)

        self._percent: float = 0.0
        self._time_text: str = format_time(0)
        self._emphasised: bool = False

        self._primary = QColor(PALETTE["primary"])
        self._text_color = QColor(PALETTE["text"])
        self._label_color = QColor(self._text_color)

        # ── reached emphasis fade ──────────────────────────────────────
        self._emphasis_anim = QVariantAnimation(self)
        self._emphasis_anim.setDuration(300)
        self._emphasis_anim.setStartValue(0.0)
        self._emphasis_anim.setEndValue(1.0)
        self._emphasis_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._emphasis_anim.valueChanged.connect(self._on_emphasis_anim)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def emphasised(self) -> bool:
        return self._emphasised

    def set_percent(self, pct: float) -> None:
        """Arc fill (0..1).  Updated every sample, so no smoothing."""
        self._percent = max(0.0, min(1.0, pct))
        self.update()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_emphasis(self, on: bool) -> None:
        """Switch the time label between normal and reached colours."""
        if on == self._emphasised:
            return
        self._emphasised = on
        self._emphasis_anim.stop()
        if on:
            self._emphasis_anim.start()
        else:
            self._label_color = QColor(self._text_color)
            self.update()

    # ══════════════════════════════════════════════════════════════════
    #  ANIMATION / PAINTING
    # ══════════════════════════════════════════════════════════════════

    def _on_emphasis_anim(self, value: object) -> None:
        self._label_color = _lerp_color(
            self._text_color, self._primary, float(value),  # type: ignore[arg-type]
        )
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        side = min(self.width(), self.height()) - 2 * self.MARGIN
        cx, cy = self.width() / 2, self.height() / 2
        ring_rect = QRectF(cx - side / 2, cy - side / 2, side, side)

        # ── background track ─────────────────────────────────────────
        track_color = QColor(self._text_color)
        track_color.setAlpha(TRACK_ALPHA)
        painter.setPen(QPen(track_color, self.RING_THICKNESS))
        painter.drawEllipse(ring_rect)

        # ── progress arc ─────────────────────────────────────────────
        if self._percent > 0.0:
            arc_pen = QPen(self._primary, self.RING_THICKNESS)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)
            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            painter.drawArc(ring_rect, 90 * 16, -int(self._percent * 360 * 16))

        # ── centre text ──────────────────────────────────────────────
        font = QFont()
        font.setPixelSize(max(16, int(side * 0.17)))
        font.setWeight(QFont.Weight.DemiBold)
        font.setStyleHint(QFont.StyleHint.Monospace)
        painter.setFont(font)
        painter.setPen(self._label_color)
        painter.drawText(ring_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        painter.end()
