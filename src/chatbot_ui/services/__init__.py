"""Service layer exports.

 - Service locator (`services`)
 - EventBus publish/subscribe core
 - Style configuration store and contrast warning derivation
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, AppEvent  # noqa: F401
from .style_store import StyleConfigurationStore, derive_warnings  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "EventBus",
    "AppEvent",
    "StyleConfigurationStore",
    "derive_warnings",
]
