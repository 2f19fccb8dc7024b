"""QSS stylesheet and phase colors for PomoTask."""

from __future__ import annotations

from ..timer.engine import Phase

# ── phase accent colors ──────────────────────────────────────────────────

PHASE_COLORS: dict[Phase, str] = {
    Phase.WORK:        "#FF6B6B",   # warm coral
    Phase.SHORT_BREAK: "#4ECDC4",   # cool teal
    Phase.LONG_BREAK:  "#A18CD1",   # calm purple
}

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#CBA6F7",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "success":      "#A6E3A1",
    "danger":       "#F38BA8",
    "border":       "#313154",
}


def phase_color(phase: Phase) -> str:
    return PHASE_COLORS.get(phase, PALETTE["accent"])


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-size: 14px;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 20px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 12px 36px;
        border-radius: 12px;
    }}

    QPushButton#phaseButton:checked {{
        background-color: {p['text']};
        color: {p['bg']};
    }}

    QPushButton#dangerButton {{
        background-color: transparent;
        color: {p['danger']};
    }}

    QLabel#clockLabel {{
        font-size: 64px;
        font-weight: 800;
    }}

    QLabel#hintLabel, QLabel#statsLabel {{
        color: {p['text_muted']};
        font-size: 12px;
    }}

    QLineEdit, QComboBox, QSpinBox, QDateEdit {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 10px;
    }}

    QProgressBar {{
        background-color: {p['bg_secondary']};
        border: none;
        border-radius: 4px;
        max-height: 8px;
    }}

    QListWidget {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
    }}
    """
