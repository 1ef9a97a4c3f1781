"""Design helpers: color parsing and WCAG contrast evaluation."""

from .contrast import (  # noqa: F401
    MalformedColorError,
    WCAG_AA_NORMAL_TEXT,
    contrast_ratio,
    meets_aa,
    parse_color,
    relative_luminance,
)
