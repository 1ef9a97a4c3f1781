"""Application layer: bootstrap and session context."""

from .bootstrap import create_application, AppContext  # noqa: F401
