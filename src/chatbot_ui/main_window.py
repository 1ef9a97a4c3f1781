"""Main configurator window: option tabs on the left, live preview on the right."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QSplitter,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from chatbot_ui.services.event_bus import AppEvent
from chatbot_ui.services.style_store import StyleConfigurationStore
from chatbot_ui.viewmodels.preview_viewmodel import chrome_colors
from chatbot_ui.views import StylePanel, WidgetPreview


class ConfiguratorWindow(QMainWindow):
    def __init__(self, store: StyleConfigurationStore, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Chatbot UI")
        self.resize(1100, 760)
        self.store = store

        options = QWidget()
        options.setObjectName("optionsPanel")
        col = QVBoxLayout(options)
        title = QLabel("Chatbot UI")
        title.setObjectName("viewTitleLabel")
        title.setStyleSheet("font-size: 20px; font-weight: bold;")
        col.addWidget(title)
        self.tabs = QTabWidget()
        content = QLabel("Content options are not part of this preview.")
        content.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.tabs.addTab(content, "Content")
        self.tabs.setTabEnabled(0, False)
        self.style_panel = StylePanel(store)
        self.tabs.addTab(self.style_panel, "Style")
        self.tabs.setCurrentIndex(1)
        col.addWidget(self.tabs, 1)

        self.preview = WidgetPreview(store)
        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(options)
        splitter.addWidget(self.preview)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        self._apply_chrome()
        sub = store.event_bus.subscribe(AppEvent.STYLE_CHANGED, lambda _e: self._apply_chrome())
        self.destroyed.connect(lambda *_, s=sub: s.cancel())  # type: ignore

    def _apply_chrome(self) -> None:
        chrome = chrome_colors(self.store.config)
        self.setStyleSheet(
            f"QMainWindow {{ background: {chrome.page_bg}; }}"
            f" #optionsPanel {{ background: {chrome.panel_bg}; color: {chrome.panel_fg}; }}"
        )


__all__ = ["ConfiguratorWindow"]
