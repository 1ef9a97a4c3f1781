"""ViewModel for the chat widget preview.

Separates the headless "what does the widget look like" derivation from the
Qt view. ``build_preview`` turns a style snapshot and transcript into plain
values (colors, sizes, per-bubble styles) the view copies into widgets, so
dark-mode rules and image fallbacks are testable without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from chatbot_ui.config import settings
from chatbot_ui.models import Message, StyleConfiguration

__all__ = [
    "BubbleStyle",
    "ChromeColors",
    "PreviewModel",
    "build_preview",
    "chrome_colors",
    "resolve_image",
]


@dataclass(frozen=True)
class BubbleStyle:
    text: str
    align_right: bool
    background: str
    foreground: str
    radius: int


@dataclass(frozen=True)
class ChromeColors:
    """Colors of the surfaces around the widget that follow dark mode."""

    page_bg: str
    panel_bg: str
    panel_fg: str
    composer_border: str
    input_border: str
    input_text: str
    footer_text: str


_LIGHT = ChromeColors(
    page_bg="#F3F4F6",
    panel_bg="#FFFFFF",
    panel_fg="#1F2937",
    composer_border="#E5E7EB",
    input_border="#D1D5DB",
    input_text="#1F2937",
    footer_text="#6B7280",
)
_DARK = ChromeColors(
    page_bg="#111827",
    panel_bg="#1F2937",
    panel_fg="#FFFFFF",
    composer_border="#4B5563",
    input_border="#4B5563",
    input_text="#FFFFFF",
    footer_text="#9CA3AF",
)


@dataclass(frozen=True)
class PreviewModel:
    width: int
    corner_radius: int
    font_family: str
    font_size: int
    title: str
    status: str
    header_bg: str
    profile_image: str
    area_bg: str
    bubbles: Tuple[BubbleStyle, ...]
    send_button_color: str
    show_powered_by: bool
    chrome: ChromeColors


def resolve_image(url: str, placeholder: str) -> str:
    """Return the trimmed URL, or ``placeholder`` when nothing usable is set."""
    url = (url or "").strip()
    return url or placeholder


def _bubble(message: Message, config: StyleConfiguration) -> BubbleStyle:
    if message.is_user:
        bg, fg = config.user_bubble_color, config.user_text_color
    else:
        bg, fg = config.bot_bubble_color, config.bot_text_color
    return BubbleStyle(
        text=message.text,
        align_right=message.is_user,
        background=bg,
        foreground=fg,
        radius=config.bubble_radius,
    )


def chrome_colors(config: StyleConfiguration) -> ChromeColors:
    return _DARK if config.dark_mode else _LIGHT


def build_preview(config: StyleConfiguration, messages: Sequence[Message]) -> PreviewModel:
    return PreviewModel(
        width=config.widget_width,
        corner_radius=config.corner_radius,
        font_family=config.font_family,
        font_size=config.font_size,
        title=settings.WIDGET_TITLE,
        status=settings.WIDGET_STATUS,
        header_bg=config.header_bg_color,
        profile_image=resolve_image(config.profile_picture, settings.PLACEHOLDER_PROFILE_IMAGE),
        area_bg=config.area_bg_color,
        bubbles=tuple(_bubble(m, config) for m in messages),
        send_button_color=config.chat_bubble_button_color,
        show_powered_by=config.show_powered_by,
        chrome=chrome_colors(config),
    )
