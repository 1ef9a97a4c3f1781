"""Live chat widget preview.

Renders the widget described by the store: header with profile image,
scrolling message area, a reply-failure status line, composer and optional
"Powered by" footer. Style values come from ``build_preview``; this module only
copies them into Qt widgets and rebuilds on store events.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QColor, QFont, QPainter, QPixmap
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from chatbot_ui.config import settings
from chatbot_ui.services.event_bus import AppEvent
from chatbot_ui.services.style_store import StyleConfigurationStore
from chatbot_ui.viewmodels.preview_viewmodel import PreviewModel, build_preview

AVATAR_SIZE = 40


def placeholder_pixmap(letter: str = "P", size: int = AVATAR_SIZE) -> QPixmap:
    """Black circle with a white letter, matching the placeholder image."""
    pix = QPixmap(size, size)
    pix.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pix)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setBrush(QColor("#000000"))
    painter.setPen(Qt.PenStyle.NoPen)
    painter.drawEllipse(0, 0, size, size)
    painter.setPen(QColor("#FFFFFF"))
    font = QFont()
    font.setBold(True)
    font.setPixelSize(size // 2)
    painter.setFont(font)
    painter.drawText(pix.rect(), Qt.AlignmentFlag.AlignCenter, letter)
    painter.end()
    return pix


def load_avatar(source: str, size: int = AVATAR_SIZE) -> QPixmap:
    """Load a local image for the header; remote or broken sources get the placeholder.

    Images are never fetched over the network.
    """
    path = Path(source)
    if path.is_file():
        pix = QPixmap(str(path))
        if not pix.isNull():
            return pix.scaled(
                size,
                size,
                Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                Qt.TransformationMode.SmoothTransformation,
            )
    return placeholder_pixmap()


class WidgetPreview(QWidget):
    def __init__(self, store: StyleConfigurationStore, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("WidgetPreview")
        self._store = store
        self._bubble_count = 0
        self._avatar_source: str | None = None
        self.bubble_labels: List[QLabel] = []
        self._build_ui()
        self.refresh()
        bus = store.event_bus
        subs = [
            bus.subscribe(AppEvent.STYLE_CHANGED, lambda _e: self.refresh()),
            bus.subscribe(AppEvent.MESSAGE_APPENDED, lambda _e: self._on_message_appended()),
            bus.subscribe(AppEvent.BOT_REPLY_FAILED, lambda e: self._show_reply_error(e.payload)),
            bus.subscribe(AppEvent.DRAFT_CHANGED, lambda e: self._sync_draft(e.payload)),
        ]
        self.destroyed.connect(lambda *_, s=subs: [sub.cancel() for sub in s])  # type: ignore

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def _build_ui(self):
        outer = QVBoxLayout(self)
        outer.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.frame = QFrame()
        self.frame.setObjectName("widgetFrame")
        outer.addWidget(self.frame, 0, Qt.AlignmentFlag.AlignHCenter)
        col = QVBoxLayout(self.frame)
        col.setContentsMargins(0, 0, 0, 0)
        col.setSpacing(0)

        self.header = QFrame()
        self.header.setObjectName("widgetHeader")
        header_row = QHBoxLayout(self.header)
        self.avatar = QLabel()
        self.avatar.setFixedSize(AVATAR_SIZE, AVATAR_SIZE)
        header_row.addWidget(self.avatar)
        titles = QVBoxLayout()
        self.title_label = QLabel()
        self.status_label = QLabel()
        titles.addWidget(self.title_label)
        titles.addWidget(self.status_label)
        header_row.addLayout(titles, 1)
        col.addWidget(self.header)

        self.message_scroll = QScrollArea()
        self.message_scroll.setWidgetResizable(True)
        self.message_scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.message_area = QWidget()
        self.message_area.setObjectName("messageArea")
        self.message_layout = QVBoxLayout(self.message_area)
        self.message_layout.addStretch(1)
        self.message_scroll.setWidget(self.message_area)
        self._scroll_timer = QTimer(self)
        self._scroll_timer.setSingleShot(True)
        self._scroll_timer.setInterval(0)
        self._scroll_timer.timeout.connect(self.scroll_to_latest)  # type: ignore
        col.addWidget(self.message_scroll, 1)

        self.reply_error = QLabel()
        self.reply_error.setObjectName("replyError")
        self.reply_error.setWordWrap(True)
        self.reply_error.setStyleSheet("color: #B91C1C; font-size: 11px; padding: 2px 10px;")
        self.reply_error.hide()
        col.addWidget(self.reply_error)

        self.composer = QFrame()
        self.composer.setObjectName("composer")
        composer_row = QHBoxLayout(self.composer)
        self.input = QLineEdit()
        self.input.setPlaceholderText("Message...")
        self.input.textEdited.connect(self._store.set_draft)  # type: ignore
        self.input.returnPressed.connect(self._on_send)  # type: ignore
        composer_row.addWidget(self.input, 1)
        self.send_button = QPushButton("➤")
        self.send_button.setObjectName("sendButton")
        self.send_button.clicked.connect(self._on_send)  # type: ignore
        composer_row.addWidget(self.send_button)
        col.addWidget(self.composer)

        self.powered_by = QLabel(f'Powered by <a href="#">{settings.POWERED_BY_LABEL}</a>')
        self.powered_by.setAlignment(Qt.AlignmentFlag.AlignCenter)
        col.addWidget(self.powered_by)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def model(self) -> PreviewModel:
        store = self._store
        return build_preview(store.config, store.messages)

    def refresh(self) -> None:
        model = self.model()
        self.frame.setFixedWidth(model.width)
        self.frame.setStyleSheet(
            f"#widgetFrame {{ border-radius: {model.corner_radius}px;"
            f" background: {model.area_bg}; font-family: {model.font_family}; }}"
        )
        self.header.setStyleSheet(f"#widgetHeader {{ background-color: {model.header_bg}; }}")
        self.title_label.setText(model.title)
        self.title_label.setStyleSheet("color: white; font-weight: 600;")
        self.status_label.setText(model.status)
        self.status_label.setStyleSheet("color: #E5E7EB; font-size: 11px;")
        if model.profile_image != self._avatar_source:
            self._avatar_source = model.profile_image
            self.avatar.setPixmap(load_avatar(model.profile_image))
        self.message_area.setStyleSheet(f"#messageArea {{ background-color: {model.area_bg}; }}")
        self._render_bubbles(model)
        chrome = model.chrome
        self.composer.setStyleSheet(
            f"#composer {{ border-top: 1px solid {chrome.composer_border}; }}"
            f" QLineEdit {{ border: 1px solid {chrome.input_border}; border-radius: 14px;"
            f" padding: 4px 10px; color: {chrome.input_text}; background: transparent; }}"
        )
        self.send_button.setStyleSheet(
            f"#sendButton {{ background-color: {model.send_button_color}; color: white;"
            " border-radius: 14px; min-width: 28px; min-height: 28px; }"
        )
        self.powered_by.setStyleSheet(f"color: {chrome.footer_text}; font-size: 11px;")
        self.powered_by.setVisible(model.show_powered_by)

    def _render_bubbles(self, model: PreviewModel) -> None:
        # Remove everything but the leading stretch
        while self.message_layout.count() > 1:
            item = self.message_layout.takeAt(1)
            widget = item.widget() if item is not None else None
            if widget is not None:
                widget.deleteLater()
        self.bubble_labels = []
        for bubble in model.bubbles:
            row = QWidget()
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(0, 0, 0, 0)
            label = QLabel(bubble.text)
            label.setWordWrap(True)
            label.setTextFormat(Qt.TextFormat.PlainText)
            label.setStyleSheet(
                f"background-color: {bubble.background}; color: {bubble.foreground};"
                f" border-radius: {bubble.radius}px; padding: 8px 14px; font-size: {model.font_size}px;"
            )
            label.setMaximumWidth(int(model.width * 0.75))
            if bubble.align_right:
                row_layout.addStretch(1)
                row_layout.addWidget(label)
            else:
                row_layout.addWidget(label)
                row_layout.addStretch(1)
            self.message_layout.addWidget(row)
            self.bubble_labels.append(label)
        grew = len(model.bubbles) > self._bubble_count
        self._bubble_count = len(model.bubbles)
        if grew:
            # Layout must settle before the scroll range reflects the new rows
            self._scroll_timer.start()

    def scroll_to_latest(self) -> None:
        bar = self.message_scroll.verticalScrollBar()
        if bar is not None:
            bar.setValue(bar.maximum())

    # ------------------------------------------------------------------
    # Composer
    # ------------------------------------------------------------------
    def _sync_draft(self, text: str) -> None:
        if self.input.text() != text:
            self.input.setText(text)

    def _on_send(self) -> None:
        self._store.send_user_message()

    # ------------------------------------------------------------------
    # Bot reply status
    # ------------------------------------------------------------------
    def _on_message_appended(self) -> None:
        self.reply_error.hide()
        self.refresh()

    def _show_reply_error(self, payload: dict) -> None:
        self.reply_error.setText(f"Reply failed: {payload.get('error') or 'unknown error'}")
        self.reply_error.show()


__all__ = ["WidgetPreview", "load_avatar", "placeholder_pixmap"]
