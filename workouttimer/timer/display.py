"""Presentation helpers shared by the ring, the tray and the status text."""

from __future__ import annotations


def format_time(millis: int) -> str:
    """``MM:SS.cc``: minutes, seconds and hundredths.

    Minutes are not wrapped, so an hour reads ``60:00.00``.
    """
    millis = max(0, millis)
    minutes, seconds = divmod(millis // 1000, 60)
    hundredths = (millis % 1000) // 10
    return f"{minutes:02d}:{seconds:02d}.{hundredths:02d}"


def progress_fraction(elapsed_millis: int, target_millis: int) -> float:
    """0.0 → 1.0 progress toward the target; 0.0 when there is no target."""
    if target_millis <= 0:
        return 0.0
    return max(0.0, min(1.0, elapsed_millis / target_millis))
