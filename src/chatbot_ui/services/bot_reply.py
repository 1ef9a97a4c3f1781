"""Bot reply channel for the preview transcript.

The store never talks to a reply backend directly. It submits a
``ReplyRequest`` to a ``BotReplyChannel`` which schedules a one-shot task;
when the task runs it asks the ``ReplySource`` for text and hands it back
through the ``deliver`` callback. Swapping the canned source for a real
chat/completion client only changes the source, not the store.

The default scheduler is ``QTimer.singleShot`` so replies arrive on the GUI
thread. Tests pass their own scheduler to advance time by hand.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, Tuple

from chatbot_ui.config import settings
from chatbot_ui.models import Message

__all__ = [
    "ReplyRequest",
    "ReplySource",
    "CannedReplySource",
    "Scheduler",
    "qt_single_shot",
    "BotReplyChannel",
]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplyRequest:
    prompt: str
    history: Tuple[Message, ...] = ()


class ReplySource(Protocol):
    def reply_to(self, prompt: str, history: Sequence[Message]) -> str: ...  # pragma: no cover


class CannedReplySource:
    """Placeholder source answering every prompt with the same text."""

    def __init__(self, text: str = settings.CANNED_BOT_REPLY) -> None:
        self.text = text

    def reply_to(self, prompt: str, history: Sequence[Message]) -> str:
        return self.text


Scheduler = Callable[[int, Callable[[], None]], None]


def qt_single_shot(delay_ms: int, callback: Callable[[], None]) -> None:
    from PyQt6.QtCore import QTimer  # lazy: keep the channel importable headless

    QTimer.singleShot(delay_ms, callback)


class BotReplyChannel:
    def __init__(
        self,
        source: ReplySource | None = None,
        *,
        delay_ms: int = settings.BOT_REPLY_DELAY_MS,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.source: ReplySource = source or CannedReplySource()
        self.delay_ms = max(0, delay_ms)
        self._scheduler = scheduler or qt_single_shot
        self._pending = 0

    @property
    def pending(self) -> int:
        """Number of submitted requests whose task has not run yet."""
        return self._pending

    def submit(
        self,
        request: ReplyRequest,
        deliver: Callable[[str], None],
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> None:
        """Schedule one reply for ``request``; each call is independent."""
        self._pending += 1
        self._scheduler(self.delay_ms, lambda: self._dispatch(request, deliver, on_error))
        _logger.debug("Reply scheduled in %d ms (pending=%d)", self.delay_ms, self._pending)

    def _dispatch(
        self,
        request: ReplyRequest,
        deliver: Callable[[str], None],
        on_error: Optional[Callable[[Exception], None]],
    ) -> None:
        self._pending -= 1
        try:
            text = self.source.reply_to(request.prompt, request.history)
        except Exception as exc:  # noqa: BLE001 - reported to caller, no retry
            _logger.exception("Reply source failed for prompt %r", request.prompt[:40])
            if on_error is not None:
                on_error(exc)
            return
        deliver(text)
