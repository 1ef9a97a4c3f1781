import logging

import pytest

from chatbot_ui.services.event_bus import AppEvent, EventBus
from chatbot_ui.services.logging_service import LoggingService, get_logging_service
from chatbot_ui.services.service_locator import services


@pytest.fixture()
def setup_logging():
    bus = EventBus()
    svc = LoggingService(capacity=5, event_bus=bus)
    svc.attach_root()
    yield svc, bus
    svc.detach_root()


def test_logging_capture_and_retrieve(setup_logging):
    svc, _ = setup_logging
    logging.getLogger("chatbot_ui.alpha").info("Hello World")
    assert any(e.message == "Hello World" for e in svc.recent())


def test_logging_capacity_eviction(setup_logging):
    svc, _ = setup_logging
    for i in range(10):
        logging.getLogger("cap").info("M%d", i)
    recents = svc.recent()
    assert len(recents) == 5
    assert recents[0].message == "M5"
    assert [e.message for e in svc.recent(limit=2)] == ["M8", "M9"]


def test_logging_filtering(setup_logging):
    svc, _ = setup_logging
    logging.getLogger("chatbot_ui.store").debug("style edit")
    logging.getLogger("chatbot_ui.reply").info("reply scheduled")
    info_only = svc.filter(level="INFO")
    assert info_only and all(e.level == "INFO" for e in info_only)
    reply = svc.filter(name_contains="reply")
    assert reply and all("reply" in e.name for e in reply)


def test_logging_event_emission(setup_logging):
    _, bus = setup_logging
    payloads = []
    bus.subscribe(AppEvent.LOG_RECORD_ADDED, lambda evt: payloads.append(evt.payload))
    logging.getLogger("evt").warning("Something happened")
    assert payloads and payloads[-1]["level"] == "WARNING"
    assert payloads[-1]["message"] == "Something happened"


def test_detach_stops_capture():
    svc = LoggingService(capacity=5, event_bus=EventBus())
    svc.attach_root()
    svc.detach_root()
    logging.getLogger("late").warning("not captured")
    assert svc.recent() == []


def test_get_logging_service_from_locator():
    svc = LoggingService()
    with services.override_context(logging_service=svc):
        assert get_logging_service() is svc
