"""Settings dialog for PomoTask.

Edits a copy of the settings; the caller reads ``settings`` after the
dialog is accepted and decides what to apply.  Duration fields are
locked while the timer is running.
"""

from __future__ import annotations

from dataclasses import replace

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QPushButton, QFrame, QWidget,
)

from ..settings import Settings


class SettingsDialog(QDialog):
    """Modal dialog for timer and sound preferences."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        timer_locked: bool = False,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(400)
        self.setModal(True)

        self._settings = replace(settings)
        self._timer_locked = timer_locked

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Timer section ────────────────────────────────────────────
        root.addWidget(self._section_label("Durations (minutes)"))
        timer_form = QFormLayout()
        timer_form.setHorizontalSpacing(20)
        timer_form.setVerticalSpacing(10)

        self._work_spin = self._minutes_spin(1, 180)
        timer_form.addRow("Work session:", self._work_spin)

        self._short_spin = self._minutes_spin(1, 60)
        timer_form.addRow("Short break:", self._short_spin)

        self._long_spin = self._minutes_spin(1, 120)
        timer_form.addRow("Long break:", self._long_spin)

        self._cycles_spin = QSpinBox()
        self._cycles_spin.setRange(1, 12)
        timer_form.addRow("Long break every:", self._cycles_spin)

        root.addLayout(timer_form)

        self._locked_hint = QLabel("Stop the timer to change durations.")
        self._locked_hint.setObjectName("hintLabel")
        self._locked_hint.setVisible(self._timer_locked)
        root.addWidget(self._locked_hint)

        for spin in (self._work_spin, self._short_spin, self._long_spin, self._cycles_spin):
            spin.setEnabled(not self._timer_locked)

        root.addWidget(self._separator())

        # ── Sound section ────────────────────────────────────────────
        root.addWidget(self._section_label("Sound"))
        snd_form = QFormLayout()
        snd_form.setHorizontalSpacing(20)

        self._sound_cb = QCheckBox("Chime at the end of each phase")
        snd_form.addRow("", self._sound_cb)

        vol_row = QHBoxLayout()
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(
            lambda v: self._vol_label.setText(f"{v}%")
        )
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)
        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        snd_form.addRow("Volume:", vol_wrapper)

        root.addLayout(snd_form)

        # ── buttons ──────────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        save_btn = QPushButton("Save")
        save_btn.setObjectName("primaryButton")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self.accept)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(save_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _minutes_spin(low: int, high: int) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(low, high)
        spin.setSuffix(" min")
        return spin

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        line.setStyleSheet("background-color: rgba(255,255,255,0.08);")
        return line

    def _populate(self) -> None:
        s = self._settings
        self._work_spin.setValue(s.work_minutes)
        self._short_spin.setValue(s.short_break_minutes)
        self._long_spin.setValue(s.long_break_minutes)
        self._cycles_spin.setValue(s.cycles_per_long_break)
        self._sound_cb.setChecked(s.sound_enabled)
        self._vol_slider.setValue(s.sound_volume)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        """The edited settings."""
        return replace(
            self._settings,
            work_minutes=self._work_spin.value(),
            short_break_minutes=self._short_spin.value(),
            long_break_minutes=self._long_spin.value(),
            cycles_per_long_break=self._cycles_spin.value(),
            sound_enabled=self._sound_cb.isChecked(),
            sound_volume=self._vol_slider.value(),
        )
