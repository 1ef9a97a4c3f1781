"""Style panel: the form side of the configurator.

Sections mirror the widget options: Appearance, Branding, Colors (with the
contrast warning block), Typography, Layout and Behavior. Every control
writes through ``StyleConfigurationStore.update_style_field``; the panel
re-syncs itself from ``AppEvent.STYLE_CHANGED`` so derived changes (header
color following the user bubble while synced) show up in the form too.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from chatbot_ui.models import FONT_FAMILIES, StyleConfiguration, StyleFieldError
from chatbot_ui.services.event_bus import AppEvent, Event
from chatbot_ui.services.style_store import StyleConfigurationStore
from .color_input import ColorInputBox

_logger = logging.getLogger(__name__)

# (field, label) in display order
COLOR_FIELDS = (
    ("user_bubble_color", "User bubble"),
    ("bot_bubble_color", "Bot bubble"),
    ("user_text_color", "User text"),
    ("bot_text_color", "Bot text"),
    ("header_bg_color", "Header background"),
    ("area_bg_color", "Area background"),
    ("chat_bubble_button_color", "Chat bubble button color"),
)

# field -> (label, minimum, maximum, step)
SLIDER_FIELDS = {
    "font_size": ("Font size", 12, 18, 1),
    "widget_width": ("Widget width", 280, 420, 5),
    "corner_radius": ("Corner radius", 0, 24, 1),
}


class StylePanel(QWidget):
    def __init__(self, store: StyleConfigurationStore, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("StylePanel")
        self._store = store
        # Widgets emit change signals while being configured; ignore them until synced
        self._syncing = True
        self.color_inputs: Dict[str, ColorInputBox] = {}
        self.sliders: Dict[str, QSlider] = {}
        self._slider_labels: Dict[str, QLabel] = {}
        self._build_ui()
        self._syncing = False
        self._sync_from(store.config)
        sub = store.event_bus.subscribe(AppEvent.STYLE_CHANGED, self._on_style_changed)
        self.destroyed.connect(lambda *_, s=sub: s.cancel())  # type: ignore

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def _build_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        outer.addWidget(scroll)
        body = QWidget()
        scroll.setWidget(body)
        layout = QVBoxLayout(body)
        layout.addWidget(self._build_appearance())
        layout.addWidget(self._build_branding())
        layout.addWidget(self._build_colors())
        self.warning_label = QLabel()
        self.warning_label.setObjectName("contrastWarnings")
        self.warning_label.setWordWrap(True)
        self.warning_label.setStyleSheet(
            "background: #FEF9C3; border: 1px solid #FACC15; color: #854D0E;"
            " border-radius: 4px; padding: 6px;"
        )
        layout.addWidget(self.warning_label)
        layout.addWidget(self._build_typography())
        layout.addWidget(self._build_layout())
        layout.addWidget(self._build_behavior())
        layout.addStretch(1)

    def _build_appearance(self) -> QGroupBox:
        box = QGroupBox("Appearance")
        row = QHBoxLayout(box)
        self.btn_light = QPushButton("Light")
        self.btn_dark = QPushButton("Dark")
        self._mode_group = QButtonGroup(self)
        for btn in (self.btn_light, self.btn_dark):
            btn.setCheckable(True)
            self._mode_group.addButton(btn)
            row.addWidget(btn)
        self.btn_light.clicked.connect(lambda: self._set("dark_mode", False))  # type: ignore
        self.btn_dark.clicked.connect(lambda: self._set("dark_mode", True))  # type: ignore
        return box

    def _build_branding(self) -> QGroupBox:
        box = QGroupBox("Branding")
        form = QFormLayout(box)
        self.profile_url = QLineEdit()
        self.profile_url.setPlaceholderText("URL")
        self.profile_url.textEdited.connect(lambda t: self._set("profile_picture", t))  # type: ignore
        self.btn_upload = QPushButton("Upload")
        self.btn_upload.setEnabled(False)
        self.btn_upload.setToolTip("Upload is not available in the preview")
        profile_row = QHBoxLayout()
        profile_row.addWidget(self.profile_url)
        profile_row.addWidget(self.btn_upload)
        form.addRow("Profile picture", profile_row)
        self.icon_url = QLineEdit()
        self.icon_url.setPlaceholderText("URL")
        self.icon_url.textEdited.connect(lambda t: self._set("chat_icon_url", t))  # type: ignore
        form.addRow("Chat icon URL", self.icon_url)
        return box

    def _build_colors(self) -> QGroupBox:
        box = QGroupBox("Colors")
        col = QVBoxLayout(box)
        for key, label in COLOR_FIELDS:
            inp = ColorInputBox(label, getattr(self._store.config, key))
            inp.color_changed.connect(lambda v, k=key: self._set(k, v))  # type: ignore
            self.color_inputs[key] = inp
            col.addWidget(inp)
        return box

    def _slider(self, key: str) -> QWidget:
        label, lo, hi, step = SLIDER_FIELDS[key]
        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(lo, hi)
        slider.setSingleStep(step)
        slider.setPageStep(step)
        slider.setTickInterval(step)
        slider.valueChanged.connect(lambda v, k=key: self._on_slider(k, v))  # type: ignore
        self.sliders[key] = slider
        self._slider_labels[key] = QLabel(label)
        return slider

    def _build_typography(self) -> QGroupBox:
        box = QGroupBox("Typography")
        form = QFormLayout(box)
        slider = self._slider("font_size")
        form.addRow(self._slider_labels["font_size"], slider)
        self.font_family = QComboBox()
        self.font_family.addItems(list(FONT_FAMILIES))
        self.font_family.currentTextChanged.connect(lambda t: self._set("font_family", t))  # type: ignore
        form.addRow("Font family", self.font_family)
        return box

    def _build_layout(self) -> QGroupBox:
        box = QGroupBox("Layout")
        form = QFormLayout(box)
        for key in ("widget_width", "corner_radius"):
            slider = self._slider(key)
            form.addRow(self._slider_labels[key], slider)
        return box

    def _build_behavior(self) -> QGroupBox:
        box = QGroupBox("Behavior")
        col = QVBoxLayout(box)
        self.chk_sync = QCheckBox("Sync user color with header")
        self.chk_sync.toggled.connect(lambda on: self._set("sync_user_color", on))  # type: ignore
        col.addWidget(self.chk_sync)
        self.chk_powered_by = QCheckBox('Show "Powered by" line')
        self.chk_powered_by.toggled.connect(lambda on: self._set("show_powered_by", on))  # type: ignore
        col.addWidget(self.chk_powered_by)
        return box

    # ------------------------------------------------------------------
    # Store interaction
    # ------------------------------------------------------------------
    def _set(self, key: str, value: Any) -> None:
        if self._syncing:
            return
        try:
            self._store.update_style_field(key, value)
        except StyleFieldError:
            _logger.warning("Rejected style edit %s=%r", key, value, exc_info=True)
            self._sync_from(self._store.config)

    def _on_slider(self, key: str, value: int) -> None:
        step = SLIDER_FIELDS[key][3]
        lo = SLIDER_FIELDS[key][1]
        snapped = lo + round((value - lo) / step) * step
        if snapped != value and not self._syncing:
            # An edit that snaps back to the stored value publishes nothing
            self._syncing = True
            try:
                self.sliders[key].setValue(snapped)
            finally:
                self._syncing = False
        self._set(key, snapped)

    def _on_style_changed(self, event: Event) -> None:
        self._sync_from(event.payload["config"])

    def _sync_from(self, config: StyleConfiguration) -> None:
        """Copy a snapshot into the controls without echoing edits back."""
        self._syncing = True
        try:
            self.btn_dark.setChecked(config.dark_mode)
            self.btn_light.setChecked(not config.dark_mode)
            if self.profile_url.text() != config.profile_picture:
                self.profile_url.setText(config.profile_picture)
            if self.icon_url.text() != config.chat_icon_url:
                self.icon_url.setText(config.chat_icon_url)
            for key, inp in self.color_inputs.items():
                inp.set_color(getattr(config, key))
            for key, slider in self.sliders.items():
                value = getattr(config, key)
                slider.setValue(value)
                self._slider_labels[key].setText(f"{SLIDER_FIELDS[key][0]} ({value} px)")
            self.font_family.setCurrentText(config.font_family)
            self.chk_sync.setChecked(config.sync_user_color)
            self.chk_powered_by.setChecked(config.show_powered_by)
        finally:
            self._syncing = False
        self._refresh_warnings()

    def _refresh_warnings(self) -> None:
        warnings = self._store.warnings
        self.warning_label.setText("\n".join(f"⚠️ {w.message}" for w in warnings))
        self.warning_label.setVisible(bool(warnings))


__all__ = ["StylePanel", "COLOR_FIELDS", "SLIDER_FIELDS"]
