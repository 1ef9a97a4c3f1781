"""EventBus connecting the style store to the preview and form views.

Lightweight synchronous publish/subscribe mechanism with typed events.

 - The store publishes after every state transition; views re-render
 - No Qt dependency so the store stays headless-testable
 - One failing handler doesn't break the publish cycle (errors are kept)
 - One-shot (once) subscriptions and cancellable handles
 - Optional tracing ring buffer of recent events
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol, Tuple

__all__ = [
    "AppEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class AppEvent(str, Enum):
    STYLE_CHANGED = "style_changed"
    MESSAGE_APPENDED = "message_appended"
    DRAFT_CHANGED = "draft_changed"
    BOT_REPLY_FAILED = "bot_reply_failed"
    LOG_RECORD_ADDED = "log_record_added"
    UNCAUGHT_EXCEPTION = "uncaught_exception"


@dataclass
class Event:
    name: str  # AppEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | AppEvent) -> str:
    return name.value if isinstance(name, AppEvent) else name


class EventBus:
    """Synchronous event dispatcher with optional tracing.

    Handlers run outside the lock (subscribers are snapshotted first), so a
    handler may subscribe or unsubscribe while being dispatched.
    """

    DEFAULT_TRACE_CAPACITY = 50

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []
        self._tracing_enabled = False
        self._traces: Deque[Tuple[str, float, str]] = deque(maxlen=self.DEFAULT_TRACE_CAPACITY)

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | AppEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket and sub in bucket:
                bucket.remove(sub)
                if not bucket:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | AppEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
            if self._tracing_enabled:
                text = "-" if payload is None else str(payload)
                self._traces.append((key, evt.timestamp, text if len(text) <= 40 else text[:37] + "..."))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | AppEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)

    def enable_tracing(self, enabled: bool = True) -> None:
        with self._lock:
            self._tracing_enabled = enabled

    def recent_traces(self) -> list[Tuple[str, float, str]]:
        with self._lock:
            return list(self._traces)
