from chatbot_ui.config import settings
from chatbot_ui.models import Author, Message, StyleConfiguration
from chatbot_ui.viewmodels.preview_viewmodel import build_preview, chrome_colors, resolve_image


def test_bubbles_follow_author_styles():
    cfg = StyleConfiguration(bubble_radius=8)
    msgs = (Message("Hi", Author.BOT), Message("Hello", Author.USER))
    model = build_preview(cfg, msgs)
    bot, user = model.bubbles
    assert (bot.align_right, bot.background, bot.foreground) == (False, "#E5E7EB", "#000000")
    assert (user.align_right, user.background, user.foreground) == (True, "#3B82F6", "#FFFFFF")
    assert bot.radius == user.radius == 8


def test_layout_values_copied():
    cfg = StyleConfiguration(widget_width=400, corner_radius=4, font_family="serif", font_size=17)
    model = build_preview(cfg, ())
    assert (model.width, model.corner_radius, model.font_family, model.font_size) == (400, 4, "serif", 17)
    assert model.title == settings.WIDGET_TITLE
    assert model.header_bg == cfg.header_bg_color


def test_dark_mode_chrome():
    light = build_preview(StyleConfiguration(), ()).chrome
    dark = build_preview(StyleConfiguration(dark_mode=True), ()).chrome
    assert (light.composer_border, light.input_border, light.input_text) == ("#E5E7EB", "#D1D5DB", "#1F2937")
    assert (dark.composer_border, dark.input_border, dark.input_text) == ("#4B5563", "#4B5563", "#FFFFFF")
    assert chrome_colors(StyleConfiguration(dark_mode=True)) == dark
    assert chrome_colors(StyleConfiguration()).page_bg == "#F3F4F6"


def test_image_placeholder_fallback():
    assert resolve_image("", "fallback") == "fallback"
    assert resolve_image("   ", "fallback") == "fallback"
    assert resolve_image(" https://x/y.png ", "fallback") == "https://x/y.png"
    model = build_preview(StyleConfiguration(profile_picture=""), ())
    assert model.profile_image == settings.PLACEHOLDER_PROFILE_IMAGE


def test_powered_by_and_send_button():
    cfg = StyleConfiguration(show_powered_by=False)
    model = build_preview(cfg, ())
    assert model.show_powered_by is False
    assert model.send_button_color == cfg.chat_bubble_button_color
