"""Configurator models: widget style snapshot and chat transcript entries.

``StyleConfiguration`` is an immutable snapshot. Each field carries its
schema in ``dataclasses.field(metadata=...)``:

 - ``min`` / ``max``: inclusive bounds for integer fields
 - ``choices``: allowed values for enumerated string fields
 - ``color``: marks color fields (format is not validated at this layer)

``with_field`` validates a single change against that schema and returns a
new snapshot; the source snapshot is never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Tuple

from chatbot_ui.config import settings

__all__ = [
    "Author",
    "Message",
    "FONT_FAMILIES",
    "StyleConfiguration",
    "StyleFieldError",
    "style_field_names",
    "color_field_names",
    "seed_messages",
]

FONT_FAMILIES: Tuple[str, ...] = ("sans-serif", "serif", "monospace", "cursive")


class StyleFieldError(ValueError):
    """Raised when a style update names an unknown field or violates its schema."""


class Author(str, Enum):
    USER = "user"
    BOT = "bot"


@dataclass(frozen=True)
class Message:
    text: str
    author: Author

    @property
    def is_user(self) -> bool:
        return self.author is Author.USER


def _color(default: str) -> Any:
    return field(default=default, metadata={"color": True})


def _ranged(default: int, lo: int, hi: int) -> Any:
    return field(default=default, metadata={"min": lo, "max": hi})


@dataclass(frozen=True)
class StyleConfiguration:
    dark_mode: bool = False
    profile_picture: str = settings.PLACEHOLDER_PROFILE_IMAGE
    chat_icon_url: str = settings.PLACEHOLDER_CHAT_ICON
    user_bubble_color: str = _color("#3B82F6")
    bot_bubble_color: str = _color("#E5E7EB")
    user_text_color: str = _color("#FFFFFF")
    bot_text_color: str = _color("#000000")
    header_bg_color: str = _color("#60A5FA")
    area_bg_color: str = _color("#FFFFFF")
    chat_bubble_button_color: str = _color("#3B82F6")
    bubble_radius: int = _ranged(16, 0, 24)
    font_size: int = _ranged(14, 12, 18)
    font_family: str = field(default="sans-serif", metadata={"choices": FONT_FAMILIES})
    widget_width: int = _ranged(360, 280, 420)
    corner_radius: int = _ranged(12, 0, 24)
    sync_user_color: bool = False
    show_powered_by: bool = True

    def with_field(self, key: str, value: Any) -> "StyleConfiguration":
        """Return a copy with ``key`` set to ``value`` after schema validation."""
        _validate(key, value)
        return replace(self, **{key: value})

    def with_fields(self, changes: Dict[str, Any]) -> "StyleConfiguration":
        for key, value in changes.items():
            _validate(key, value)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


_FIELDS = {f.name: f for f in fields(StyleConfiguration)}
_TYPES = {"dark_mode": bool, "sync_user_color": bool, "show_powered_by": bool}
_TYPES.update({name: int for name, f in _FIELDS.items() if "min" in f.metadata})


def style_field_names() -> Tuple[str, ...]:
    return tuple(_FIELDS)


def color_field_names() -> Tuple[str, ...]:
    return tuple(name for name, f in _FIELDS.items() if f.metadata.get("color"))


def _validate(key: str, value: Any) -> None:
    spec = _FIELDS.get(key)
    if spec is None:
        raise StyleFieldError(f"Unknown style field: {key!r}")
    expected = _TYPES.get(key, str)
    # bool is an int subclass; reject it explicitly for numeric fields
    if expected is int and isinstance(value, bool):
        raise StyleFieldError(f"{key} expects int, got bool")
    if not isinstance(value, expected):
        raise StyleFieldError(f"{key} expects {expected.__name__}, got {type(value).__name__}")
    meta = spec.metadata
    if "min" in meta and not (meta["min"] <= value <= meta["max"]):
        raise StyleFieldError(f"{key}={value} outside [{meta['min']}, {meta['max']}]")
    if "choices" in meta and value not in meta["choices"]:
        raise StyleFieldError(f"{key}={value!r} not one of {', '.join(meta['choices'])}")


def seed_messages() -> Tuple[Message, ...]:
    return tuple(Message(text=text, author=Author(author)) for text, author in settings.SEED_MESSAGES)
