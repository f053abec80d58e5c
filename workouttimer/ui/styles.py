"""QSS stylesheet and colours for the watch-face style window."""

from __future__ import annotations

# ── palette (dark, watch-face friendly) ──────────────────────────────────

PALETTE: dict[str, str] = {
    "bg":         "#000000",
    "surface":    "#1C1C1E",
    "primary":    "#AECBFA",   # arc + reached emphasis
    "on_primary": "#202124",
    "text":       "#FFFFFF",
    "text_muted": "#8E8E93",
    "border":     "#2C2C2E",
}

TRACK_ALPHA = 26   # ~10 % of the foreground colour


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── picker step buttons: small round, primary ── */
    QPushButton#stepButton {{
        background-color: {p['primary']};
        color: {p['on_primary']};
        border: none;
        border-radius: 16px;
        min-width: 32px;
        max-width: 32px;
        min-height: 32px;
        max-height: 32px;
        font-size: 18px;
        font-weight: 700;
    }}

    QPushButton#stepButton:pressed {{
        background-color: {p['text']};
    }}

    QLabel#pickerValue {{
        font-size: 28px;
        font-weight: 600;
    }}

    QLabel#pickerHint {{
        color: {p['text_muted']};
        font-size: 12px;
    }}
    """
