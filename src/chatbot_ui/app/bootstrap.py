"""Application bootstrap for the configurator.

Responsibilities:
 - Optional headless bootstrap (tests / environments without PyQt6)
 - Logging setup: package log level, stderr console handler and the
   ring-buffer LoggingService
 - Installing the global ErrorHandlingService hooks
 - Registering the session services (event bus, style store, ...)
 - Returning a single context object with references

PyQt6 is imported lazily so the headless core can be bootstrapped without a
display.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from chatbot_ui.config import settings
from chatbot_ui.services.bot_reply import BotReplyChannel, Scheduler
from chatbot_ui.services.error_handling_service import ErrorHandlingService
from chatbot_ui.services.event_bus import EventBus
from chatbot_ui.services.logging_service import LoggingService
from chatbot_ui.services.service_locator import ServiceLocator, services
from chatbot_ui.services.style_store import StyleConfigurationStore

try:  # Lazy / optional Qt import
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except Exception:  # noqa: BLE001
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

__all__ = ["AppContext", "create_application", "remove_console_handler"]

_logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None if headless or Qt missing)
    headless: Whether headless bootstrap was used
    store: The session's StyleConfigurationStore
    services: Global service locator (post-initialization state)
    duration_s: Elapsed seconds for bootstrap
    metadata: Free-form diagnostic values
    """

    qt_app: Optional[Any]
    headless: bool
    store: StyleConfigurationStore
    services: ServiceLocator
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


CONSOLE_HANDLER_NAME = "chatbot_ui.console"


def _configure_logging() -> None:
    """Set the package level and (re)attach the stderr console handler."""
    level = logging.getLevelName(settings.LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO
    pkg = logging.getLogger("chatbot_ui")
    pkg.setLevel(level)
    remove_console_handler()
    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER_NAME)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    pkg.addHandler(console)


def remove_console_handler() -> None:
    pkg = logging.getLogger("chatbot_ui")
    for handler in list(pkg.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            pkg.removeHandler(handler)
            handler.close()


def create_application(
    *,
    headless: bool | None = None,
    install_error_hooks: bool = True,
    reply_scheduler: Scheduler | None = None,
) -> AppContext:
    """Create and wire the configurator session.

    Parameters
    ----------
    headless: Skip QApplication creation. If None, inferred from Qt availability.
    install_error_hooks: Install sys/threading excepthooks.
    reply_scheduler: Override the bot reply scheduler (defaults to QTimer).
    """
    started = time.perf_counter()
    if headless is None:
        headless = not _QT_AVAILABLE

    qt_app = None
    if not headless and _QT_AVAILABLE:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    _configure_logging()
    # Fresh instances each bootstrap (test isolation)
    bus = EventBus()
    services.register("event_bus", bus, allow_override=True)

    previous_logging = services.try_get("logging_service")
    if isinstance(previous_logging, LoggingService):
        previous_logging.detach_root()
    logging_svc = LoggingService(event_bus=bus)
    logging_svc.attach_root()
    services.register("logging_service", logging_svc, allow_override=True)

    previous_errors = services.try_get("error_handling_service")
    if isinstance(previous_errors, ErrorHandlingService):
        previous_errors.uninstall()
    error_svc = ErrorHandlingService(event_bus=bus)
    if install_error_hooks:
        error_svc.install()
    services.register("error_handling_service", error_svc, allow_override=True)

    store = StyleConfigurationStore(
        reply_channel=BotReplyChannel(scheduler=reply_scheduler),
        event_bus=bus,
    )
    services.register("style_store", store, allow_override=True)

    duration = time.perf_counter() - started
    _logger.info("Configurator bootstrapped in %.3fs (headless=%s)", duration, headless)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        store=store,
        services=services,
        duration_s=duration,
        metadata={
            "qt_available": _QT_AVAILABLE,
            "reply_delay_ms": store.reply_channel.delay_ms,
            "log_level": settings.LOG_LEVEL,
        },
    )
