"""Contrast utilities for checking chat widget color accessibility.

Implements WCAG 2.1 contrast ratio calculations.

Public API:
- parse_color(color: str) -> tuple[int, int, int]
- relative_luminance(color: str) -> float
- contrast_ratio(color_a: str, color_b: str) -> float
- meets_aa(ratio: float) -> bool

Colors are accepted as ``#RRGGBB`` hex strings or ``rgb(r, g, b)`` strings.
Anything else raises ``MalformedColorError``; no NaN ever leaks out of here.
"""

from __future__ import annotations

import re
from functools import lru_cache

__all__ = [
    "MalformedColorError",
    "WCAG_AA_NORMAL_TEXT",
    "parse_color",
    "relative_luminance",
    "contrast_ratio",
    "meets_aa",
]

# Minimum ratio for normal-size text (WCAG AA)
WCAG_AA_NORMAL_TEXT = 4.5

_HEX_RE = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")
_RGB_RE = re.compile(r"rgb\(\s*([0-9]+),\s*([0-9]+),\s*([0-9]+)\s*\)")


class MalformedColorError(ValueError):
    """Raised when a color is neither ``#RRGGBB`` nor ``rgb(r, g, b)``."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Color must be '#RRGGBB' or 'rgb(r, g, b)': {value!r}")
        self.value = value


@lru_cache(maxsize=256)
def _parse_cached(color: str) -> tuple[int, int, int]:
    text = color.strip()
    if text.startswith("#"):
        match = _HEX_RE.fullmatch(text)
        if match is None:
            raise MalformedColorError(color)
        r, g, b = (int(part, 16) for part in match.groups())
        return r, g, b
    if text.startswith("rgb"):
        match = _RGB_RE.fullmatch(text)
        if match is None:
            raise MalformedColorError(color)
        r, g, b = (int(part) for part in match.groups())
        if max(r, g, b) > 255:
            raise MalformedColorError(color)
        return r, g, b
    raise MalformedColorError(color)


def parse_color(color: str) -> tuple[int, int, int]:
    if not isinstance(color, str):
        raise MalformedColorError(color)
    return _parse_cached(color)


def _linear_channel(c: float) -> float:
    c = c / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    r, g, b = parse_color(color)
    # Rec. 709 coefficients used by WCAG
    return 0.2126 * _linear_channel(r) + 0.7152 * _linear_channel(g) + 0.0722 * _linear_channel(b)


def contrast_ratio(color_a: str, color_b: str) -> float:
    """Return the WCAG contrast ratio between two colors (1.0 to 21.0).

    Symmetric in its arguments. Raises ``MalformedColorError`` if either
    color cannot be parsed.
    """
    l1 = relative_luminance(color_a)
    l2 = relative_luminance(color_b)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def meets_aa(ratio: float) -> bool:
    return ratio >= WCAG_AA_NORMAL_TEXT
