"""Style configuration store.

Single owner of the session state shown by the configurator:

 - the current ``StyleConfiguration`` snapshot (replaced, never mutated)
 - the chat transcript (append-only tuple of ``Message``)
 - the composer draft text

Every transition publishes an ``AppEvent`` on the EventBus so the form panel
and the preview re-render from the new state. Accessibility warnings are
derived from the snapshot on every read via ``derive_warnings``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from chatbot_ui.design.contrast import (
    MalformedColorError,
    WCAG_AA_NORMAL_TEXT,
    contrast_ratio,
)
from chatbot_ui.models import Author, Message, StyleConfiguration, seed_messages
from .bot_reply import BotReplyChannel, ReplyRequest
from .event_bus import AppEvent, EventBus

__all__ = [
    "WarningKind",
    "ContrastWarning",
    "LowContrastWarning",
    "UnevaluableContrast",
    "CONTRAST_CHECKS",
    "derive_warnings",
    "apply_style_update",
    "StyleConfigurationStore",
]

_logger = logging.getLogger(__name__)


class WarningKind(str, Enum):
    USER_BUBBLE = "user_bubble"
    BOT_BUBBLE = "bot_bubble"
    HEADER = "header"


_LABELS = {
    WarningKind.USER_BUBBLE: "User bubble & text",
    WarningKind.BOT_BUBBLE: "Bot bubble & text",
    WarningKind.HEADER: "Header background & text",
}

# (kind, background field, text field) in display order.
# The header has no text color of its own and is checked against user text.
CONTRAST_CHECKS: Tuple[Tuple[WarningKind, str, str], ...] = (
    (WarningKind.USER_BUBBLE, "user_bubble_color", "user_text_color"),
    (WarningKind.BOT_BUBBLE, "bot_bubble_color", "bot_text_color"),
    (WarningKind.HEADER, "header_bg_color", "user_text_color"),
)


@dataclass(frozen=True)
class ContrastWarning:
    kind: WarningKind

    @property
    def label(self) -> str:
        return _LABELS[self.kind]

    @property
    def message(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError


@dataclass(frozen=True)
class LowContrastWarning(ContrastWarning):
    ratio: float

    @property
    def message(self) -> str:
        return f"Low contrast: {self.label} may be hard to read."


@dataclass(frozen=True)
class UnevaluableContrast(ContrastWarning):
    reason: str

    @property
    def message(self) -> str:
        return f"Cannot check contrast: {self.label} uses an unrecognized color."


def derive_warnings(config: StyleConfiguration) -> List[ContrastWarning]:
    """Return contrast warnings for ``config`` in fixed check order.

    A pair below the WCAG AA ratio yields ``LowContrastWarning``; a pair with
    a malformed color yields ``UnevaluableContrast``. Never raises.
    """
    warnings: List[ContrastWarning] = []
    for kind, bg_field, fg_field in CONTRAST_CHECKS:
        try:
            ratio = contrast_ratio(getattr(config, bg_field), getattr(config, fg_field))
        except MalformedColorError as exc:
            warnings.append(UnevaluableContrast(kind=kind, reason=str(exc)))
            continue
        if ratio < WCAG_AA_NORMAL_TEXT:
            warnings.append(LowContrastWarning(kind=kind, ratio=ratio))
    return warnings


def apply_style_update(config: StyleConfiguration, key: str, value: Any) -> StyleConfiguration:
    """Pure transition: ``config`` with ``key`` set to ``value``.

    With ``sync_user_color`` on, a user bubble color change also sets the
    header background in the same snapshot.
    """
    if key == "user_bubble_color" and config.sync_user_color:
        return config.with_fields({key: value, "header_bg_color": value})
    return config.with_field(key, value)


class StyleConfigurationStore:
    def __init__(
        self,
        *,
        config: StyleConfiguration | None = None,
        messages: Tuple[Message, ...] | None = None,
        reply_channel: BotReplyChannel | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._config = config or StyleConfiguration()
        self._messages: Tuple[Message, ...] = seed_messages() if messages is None else tuple(messages)
        self._draft = ""
        self.reply_channel = reply_channel or BotReplyChannel()
        self.event_bus = event_bus or EventBus()

    # State ------------------------------------------------------------
    @property
    def config(self) -> StyleConfiguration:
        return self._config

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self._messages

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def warnings(self) -> List[ContrastWarning]:
        return derive_warnings(self._config)

    # Style ------------------------------------------------------------
    def update_style_field(self, key: str, value: Any) -> StyleConfiguration:
        """Replace one field (``StyleFieldError`` on schema violations)."""
        new = apply_style_update(self._config, key, value)
        if new == self._config:
            return new
        self._config = new
        _logger.debug("Style field %s -> %r", key, value)
        self.event_bus.publish(AppEvent.STYLE_CHANGED, {"key": key, "config": new})
        return new

    # Transcript -------------------------------------------------------
    def set_draft(self, text: str) -> None:
        if text == self._draft:
            return
        self._draft = text
        self.event_bus.publish(AppEvent.DRAFT_CHANGED, text)

    def send_user_message(self, text: Optional[str] = None) -> Optional[Message]:
        """Append a user message and request a bot reply.

        ``text`` defaults to the composer draft. Blank text is ignored.
        """
        if text is None:
            text = self._draft
        if not text.strip():
            return None
        message = Message(text=text, author=Author.USER)
        self._append(message)
        self.set_draft("")
        self.reply_channel.submit(
            ReplyRequest(prompt=text, history=self._messages),
            self._deliver_reply,
            self._reply_failed,
        )
        return message

    def _deliver_reply(self, text: str) -> None:
        self._append(Message(text=text, author=Author.BOT))

    def _reply_failed(self, exc: Exception) -> None:
        self.event_bus.publish(AppEvent.BOT_REPLY_FAILED, {"error": str(exc)})

    def _append(self, message: Message) -> None:
        self._messages = self._messages + (message,)
        self.event_bus.publish(AppEvent.MESSAGE_APPENDED, message)
