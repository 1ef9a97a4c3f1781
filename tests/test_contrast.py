import pytest

from chatbot_ui.design.contrast import (
    MalformedColorError,
    contrast_ratio,
    meets_aa,
    parse_color,
    relative_luminance,
)


def test_relative_luminance_monotonic():
    # White > Gray > Black
    assert relative_luminance("#ffffff") > relative_luminance("#777777") > relative_luminance("#000000")


def test_black_on_white_is_maximum():
    assert contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21.0)


@pytest.mark.parametrize("color", ["#000000", "#3B82F6", "#E5E7EB", "rgb(12, 200, 99)"])
def test_identical_colors_ratio_is_one(color):
    assert contrast_ratio(color, color) == 1.0


@pytest.mark.parametrize(
    "a, b",
    [("#3B82F6", "#FFFFFF"), ("#60A5FA", "#000000"), ("rgb(1,2,3)", "#FEFEFE")],
)
def test_symmetric(a, b):
    assert contrast_ratio(a, b) == contrast_ratio(b, a)
    assert contrast_ratio(a, b) >= 1.0


def test_tailwind_blue_on_white_regression():
    # Known value for blue-500 on white
    assert contrast_ratio("#3B82F6", "#FFFFFF") == pytest.approx(3.68, abs=0.01)
    assert not meets_aa(contrast_ratio("#3B82F6", "#FFFFFF"))


def test_rgb_form_matches_hex_form():
    assert parse_color("rgb(59, 130, 246)") == (59, 130, 246)
    assert parse_color("rgb(59,130,246)") == parse_color("#3b82f6")
    assert contrast_ratio("rgb(255, 255, 255)", "#000000") == pytest.approx(21.0)


@pytest.mark.parametrize(
    "bad",
    [
        "blue",
        "#FFF",
        "#GGGGGG",
        "#1234567",
        "rgb(1, 2)",
        "rgb(256, 0, 0)",
        "",
        "rgba(1, 2, 3, 0.5)",
        "rgb(\u0662\u0665\u0665, 0, 0)",
    ],
)
def test_malformed_colors_raise(bad):
    with pytest.raises(MalformedColorError):
        contrast_ratio(bad, "#FFFFFF")


def test_malformed_error_is_value_error_and_keeps_value():
    with pytest.raises(ValueError) as info:
        parse_color("blue")
    assert info.value.value == "blue"


def test_non_string_rejected():
    with pytest.raises(MalformedColorError):
        parse_color(None)  # type: ignore[arg-type]


def test_aa_threshold_is_inclusive():
    assert meets_aa(4.5)
    assert not meets_aa(4.49)
