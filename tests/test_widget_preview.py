from chatbot_ui.config import settings
from chatbot_ui.services.bot_reply import BotReplyChannel
from chatbot_ui.services.style_store import StyleConfigurationStore
from chatbot_ui.views.widget_preview import WidgetPreview, load_avatar


def _preview(qtbot, store):
    view = WidgetPreview(store)
    qtbot.addWidget(view)  # type: ignore
    return view


def test_renders_seeded_transcript(qtbot, store):
    view = _preview(qtbot, store)
    assert [lbl.text() for lbl in view.bubble_labels] == [m.text for m in store.messages]
    assert view.title_label.text() == settings.WIDGET_TITLE
    assert view.frame.minimumWidth() == view.frame.maximumWidth() == 360


def test_style_changes_rerender(qtbot, store):
    view = _preview(qtbot, store)
    store.update_style_field("widget_width", 300)
    store.update_style_field("show_powered_by", False)
    store.update_style_field("user_bubble_color", "#112233")
    assert view.frame.maximumWidth() == 300
    assert view.powered_by.isHidden()
    assert "#112233" in view.bubble_labels[-1].styleSheet()


def test_composer_send_flow(qtbot, store, scheduler):
    view = _preview(qtbot, store)
    count = len(store.messages)
    view.input.setText("hello")
    store.set_draft(view.input.text())
    view.send_button.click()
    assert len(store.messages) == count + 1
    assert view.input.text() == ""
    assert len(view.bubble_labels) == count + 1
    scheduler.advance(1000)
    assert len(view.bubble_labels) == count + 2
    assert view.bubble_labels[-1].text() == settings.CANNED_BOT_REPLY


def test_blank_composer_sends_nothing(qtbot, store):
    view = _preview(qtbot, store)
    count = len(store.messages)
    view.send_button.click()
    assert len(store.messages) == count


def test_remote_or_missing_image_uses_placeholder(qtbot, tmp_path):
    remote = load_avatar("https://example.com/me.png")
    missing = load_avatar(str(tmp_path / "nope.png"))
    assert not remote.isNull() and remote.width() == 40
    assert not missing.isNull()


def test_reply_failure_shown_until_next_message(qtbot, scheduler, bus):
    class Broken:
        def reply_to(self, prompt, history):
            raise ConnectionError("backend down")

    store = StyleConfigurationStore(
        reply_channel=BotReplyChannel(Broken(), delay_ms=10, scheduler=scheduler),
        event_bus=bus,
    )
    view = _preview(qtbot, store)
    assert view.reply_error.isHidden()
    store.send_user_message("hi")
    scheduler.advance(10)
    assert not view.reply_error.isHidden()
    assert "backend down" in view.reply_error.text()
    store.send_user_message("again")
    assert view.reply_error.isHidden()
