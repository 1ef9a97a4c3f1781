"""Launcher for `python -m chatbot_ui` or the `chatbot-ui` console script."""

from __future__ import annotations

import logging
import sys

from chatbot_ui.app.bootstrap import create_application

_logger = logging.getLogger(__name__)


def main() -> int:  # pragma: no cover - runtime
    ctx = create_application(headless=False)
    app = ctx.qt_app
    if app is None:
        _logger.error("PyQt6 is required to run the configurator window")
        return 1
    from chatbot_ui.main_window import ConfiguratorWindow  # Qt-only import

    win = ConfiguratorWindow(ctx.store)
    win.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
