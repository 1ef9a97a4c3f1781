"""Global configuration and constants for the widget configurator."""

from __future__ import annotations

import os
from typing import Final


def env_int(name: str, default: int) -> int:
    """Integer from the environment; unset or non-numeric values give ``default``."""
    raw = os.environ.get(name, "").strip()
    try:
        return int(raw)
    except ValueError:
        return default


# Simulated bot reply delay (milliseconds)
BOT_REPLY_DELAY_MS: Final = env_int("CHATBOT_UI_REPLY_DELAY_MS", 1000)
LOG_LEVEL: Final = os.environ.get("CHATBOT_UI_LOG_LEVEL", "INFO").upper()

CANNED_BOT_REPLY: Final = "Thank you, I'll process your request shortly."

PLACEHOLDER_PROFILE_IMAGE: Final = "https://placehold.co/40x40/000000/FFFFFF?text=P"
PLACEHOLDER_CHAT_ICON: Final = "https://placehold.co/40x40/000000/FFFFFF?text=C"

WIDGET_TITLE: Final = "Chatcells.com"
WIDGET_STATUS: Final = "Online"
POWERED_BY_LABEL: Final = "Chatbot-ui⚡"

# (text, author) pairs seeding the transcript at session start
SEED_MESSAGES: Final = (
    ("Hi! What can I help you with?", "bot"),
    ("Hello", "user"),
)
