import logging

from modelhooks import EventDispatcher, Model, registry
from modelhooks.utils.logging import get_correlation_id, get_logger, set_correlation_id, time_call
from modelhooks.utils.naming import is_event_name, qualified_name


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, threshold_ms=0, channel="eloquent.saving: app.User") as timer:
        timer.note(halted_after=2)
    records = [record for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in record.message for record in records)
    assert records[-1].channel == "eloquent.saving: app.User"
    assert records[-1].halted_after == 2
    assert records[-1].failed is False


def test_registry_logs_dispatcher_changes(caplog):
    class Gadget(Model):
        pass

    caplog.set_level(logging.DEBUG, logger=registry.logger.name)
    try:
        Gadget.set_event_dispatcher(EventDispatcher())
        Gadget.observe({"saving": lambda gadget: None})
        Gadget.flush_event_listeners()
    finally:
        registry.clear()

    messages = [record.getMessage() for record in caplog.records if record.name == registry.logger.name]
    assert any("Event dispatcher set" in message for message in messages)
    assert any("registered for" in message and "saving" in message for message in messages)
    assert any("Flushed event listeners" in message for message in messages)


def test_naming_helpers():
    assert qualified_name(EventDispatcher) == "modelhooks.events.dispatcher.EventDispatcher"
    assert qualified_name(int) == "int"
    assert is_event_name("saving")
    assert not is_event_name("_private")
