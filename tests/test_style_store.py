import pytest

from chatbot_ui.config import settings
from chatbot_ui.models import Author, StyleConfiguration, StyleFieldError
from chatbot_ui.services.bot_reply import BotReplyChannel
from chatbot_ui.services.event_bus import AppEvent
from chatbot_ui.services.style_store import StyleConfigurationStore, apply_style_update


def _events(bus, name):
    seen = []
    bus.subscribe(name, lambda e: seen.append(e.payload))
    return seen


def test_update_replaces_snapshot(store):
    before = store.config
    after = store.update_style_field("font_size", 16)
    assert store.config is after
    assert after.font_size == 16
    assert before.font_size == 14


def test_sync_on_copies_user_bubble_into_header(store):
    store.update_style_field("sync_user_color", True)
    cfg = store.update_style_field("user_bubble_color", "#123456")
    assert cfg.user_bubble_color == "#123456"
    assert cfg.header_bg_color == "#123456"


def test_sync_off_leaves_header(store):
    cfg = store.update_style_field("user_bubble_color", "#123456")
    assert cfg.header_bg_color == "#60A5FA"


def test_sync_update_is_single_transition(store, bus):
    store.update_style_field("sync_user_color", True)
    changes = _events(bus, AppEvent.STYLE_CHANGED)
    store.update_style_field("user_bubble_color", "#123456")
    assert len(changes) == 1
    assert changes[0]["key"] == "user_bubble_color"
    assert changes[0]["config"].header_bg_color == "#123456"


def test_sync_only_applies_to_user_bubble():
    cfg = StyleConfiguration(sync_user_color=True)
    new = apply_style_update(cfg, "bot_bubble_color", "#111111")
    assert new.header_bg_color == cfg.header_bg_color


def test_enabling_sync_does_not_retroactively_copy(store):
    cfg = store.update_style_field("sync_user_color", True)
    assert cfg.header_bg_color == "#60A5FA"


def test_invalid_update_keeps_previous_snapshot(store, bus):
    changes = _events(bus, AppEvent.STYLE_CHANGED)
    before = store.config
    with pytest.raises(StyleFieldError):
        store.update_style_field("font_size", 40)
    assert store.config is before
    assert changes == []


def test_noop_update_publishes_nothing(store, bus):
    changes = _events(bus, AppEvent.STYLE_CHANGED)
    store.update_style_field("font_size", 14)
    assert changes == []


def test_transcript_seeded(store):
    assert [m.author for m in store.messages] == [Author.BOT, Author.USER]


def test_blank_message_is_noop(store, scheduler):
    before = store.messages
    assert store.send_user_message("   ") is None
    assert store.send_user_message("") is None
    assert store.messages == before
    assert scheduler.pending == 0


def test_send_appends_user_then_bot_after_delay(store, scheduler):
    before = len(store.messages)
    msg = store.send_user_message("hi")
    assert msg is not None and msg.author is Author.USER
    assert len(store.messages) == before + 1
    assert store.messages[-1].text == "hi"
    scheduler.advance(999)
    assert len(store.messages) == before + 1
    scheduler.advance(1)
    assert len(store.messages) == before + 2
    assert store.messages[-1].author is Author.BOT
    assert store.messages[-1].text == settings.CANNED_BOT_REPLY


def test_send_uses_and_clears_draft(store, bus):
    drafts = _events(bus, AppEvent.DRAFT_CHANGED)
    store.set_draft("hello there")
    store.send_user_message()
    assert store.messages[-1].text == "hello there"
    assert store.draft == ""
    assert drafts == ["hello there", ""]


def test_whitespace_draft_is_not_sent_or_cleared(store):
    store.set_draft("  ")
    assert store.send_user_message() is None
    assert store.draft == "  "


def test_each_send_schedules_independent_reply(store, scheduler):
    store.send_user_message("one")
    scheduler.advance(500)
    store.send_user_message("two")
    assert store.reply_channel.pending == 2
    scheduler.advance(500)
    texts = [(m.author, m.text) for m in store.messages[-3:]]
    assert texts == [
        (Author.USER, "one"),
        (Author.USER, "two"),
        (Author.BOT, settings.CANNED_BOT_REPLY),
    ]
    scheduler.advance(500)
    assert store.messages[-1].author is Author.BOT
    assert store.reply_channel.pending == 0


def test_message_events_published(store, bus, scheduler):
    appended = _events(bus, AppEvent.MESSAGE_APPENDED)
    store.send_user_message("hi")
    scheduler.advance(1000)
    assert [m.author for m in appended] == [Author.USER, Author.BOT]


def test_reply_failure_reported_without_append(scheduler, bus):
    class Broken:
        def reply_to(self, prompt, history):
            raise ConnectionError("backend down")

    store = StyleConfigurationStore(
        reply_channel=BotReplyChannel(Broken(), delay_ms=10, scheduler=scheduler),
        event_bus=bus,
    )
    failures = _events(bus, AppEvent.BOT_REPLY_FAILED)
    store.send_user_message("hi")
    count = len(store.messages)
    scheduler.advance(10)
    assert len(store.messages) == count
    assert failures == [{"error": "backend down"}]


def test_reply_source_sees_prompt_and_history(scheduler, bus):
    calls = []

    class Echo:
        def reply_to(self, prompt, history):
            calls.append((prompt, len(history)))
            return f"echo: {prompt}"

    store = StyleConfigurationStore(
        reply_channel=BotReplyChannel(Echo(), delay_ms=0, scheduler=scheduler),
        event_bus=bus,
    )
    store.send_user_message("ping")
    scheduler.advance(0)
    assert calls == [("ping", 3)]
    assert store.messages[-1].text == "echo: ping"
