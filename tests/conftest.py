# Shared fixtures. Provides a fallback 'qtbot' fixture if pytest-qt is not
# installed; when pytest-qt is present its fixture wins.

import os
import sys
import contextlib

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from chatbot_ui.services.bot_reply import BotReplyChannel  # noqa: E402
from chatbot_ui.services.event_bus import EventBus  # noqa: E402
from chatbot_ui.services.style_store import StyleConfigurationStore  # noqa: E402
from reply_test_util import ManualScheduler  # noqa: E402

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except Exception:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except Exception:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        app = QApplication.instance() or QApplication(sys.argv)  # type: ignore  # noqa: F841
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        yield Bot()
        for w in widgets:
            w.close()
            w.deleteLater()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def store(scheduler, bus):
    channel = BotReplyChannel(delay_ms=1000, scheduler=scheduler)
    return StyleConfigurationStore(reply_channel=channel, event_bus=bus)
