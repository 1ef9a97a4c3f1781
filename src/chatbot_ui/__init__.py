"""Chatbot UI configurator public API.

Small surface for the launcher and tests; Qt is not imported here so the
headless core (contrast evaluation, style store) can be used without a display.
"""

from __future__ import annotations

from .services.event_bus import EventBus, AppEvent, Event  # noqa: F401
from .services.style_store import StyleConfigurationStore, derive_warnings  # noqa: F401
from .design.contrast import contrast_ratio, MalformedColorError  # noqa: F401
from .models import StyleConfiguration, Message, Author  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "EventBus",
    "AppEvent",
    "Event",
    "StyleConfigurationStore",
    "derive_warnings",
    "contrast_ratio",
    "MalformedColorError",
    "StyleConfiguration",
    "Message",
    "Author",
]
