"""Qt view layer.

Exports:
 - StylePanel (form side)
 - WidgetPreview (live chat widget)
 - ColorInputBox (labelled color swatch)
"""

from .color_input import ColorInputBox  # noqa: F401
from .style_panel import StylePanel  # noqa: F401
from .widget_preview import WidgetPreview  # noqa: F401
