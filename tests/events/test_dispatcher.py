import logging
import threading

from modelhooks.events import EventDispatcher, ModelEvent
from modelhooks.utils import qualified_name


class Ping(ModelEvent):
    pass


def test_listeners_run_by_priority_then_registration_order():
    dispatcher = EventDispatcher()
    calls = []
    dispatcher.listen("orders", lambda payload: calls.append("low"), priority=-5)
    dispatcher.listen("orders", lambda payload: calls.append("first"))
    dispatcher.listen("orders", lambda payload: calls.append("high"), priority=10)
    dispatcher.listen("orders", lambda payload: calls.append("second"))

    dispatcher.fire("orders", {"id": 1})

    assert calls == ["high", "first", "second", "low"]


def test_until_returns_first_non_none_response():
    dispatcher = EventDispatcher()
    calls = []

    def silent(payload):
        calls.append("silent")

    def answer(payload):
        calls.append("answer")
        return payload * 2

    def never(payload):
        calls.append("never")
        return "unused"

    dispatcher.listen("numbers", silent, priority=3)
    dispatcher.listen("numbers", answer, priority=2)
    dispatcher.listen("numbers", never, priority=1)

    assert dispatcher.until("numbers", 21) == 42
    assert calls == ["silent", "answer"]


def test_until_without_listeners_returns_none():
    assert EventDispatcher().until("nobody", object()) is None


def test_fire_collects_responses_and_stops_on_false():
    dispatcher = EventDispatcher()
    dispatcher.listen("audit", lambda payload: "a")
    dispatcher.listen("audit", lambda payload: None)
    dispatcher.listen("audit", lambda payload: False)
    dispatcher.listen("audit", lambda payload: "unreached")

    assert dispatcher.fire("audit", None) == ["a", None, False]


def test_listen_accepts_several_channels():
    dispatcher = EventDispatcher()
    seen = []
    dispatcher.listen(["created", "updated"], seen.append)

    dispatcher.fire("created", 1)
    dispatcher.fire("updated", 2)

    assert seen == [1, 2]


def test_wildcard_listeners_run_after_exact_listeners():
    dispatcher = EventDispatcher()
    calls = []
    dispatcher.listen("eloquent.saving: *", lambda payload: calls.append("wildcard"), priority=100)
    dispatcher.listen("eloquent.saving: app.User", lambda payload: calls.append("exact"))

    dispatcher.fire("eloquent.saving: app.User", None)
    dispatcher.fire("eloquent.saved: app.User", None)

    assert calls == ["exact", "wildcard"]
    assert dispatcher.has_listeners("eloquent.saving: app.Post")
    assert not dispatcher.has_listeners("eloquent.saved: app.Post")


def test_event_objects_are_published_on_their_class_name():
    dispatcher = EventDispatcher()
    received = []
    dispatcher.listen(qualified_name(Ping), received.append)
    event = Ping(model="payload")

    dispatcher.fire(event)

    assert received == [event]


def test_forget_removes_exact_and_wildcard_channels():
    dispatcher = EventDispatcher()
    dispatcher.listen("jobs", lambda payload: "job")
    dispatcher.listen("jobs.*", lambda payload: "any")

    dispatcher.forget("jobs")
    dispatcher.forget("jobs.*")

    assert dispatcher.fire("jobs", None) == []
    assert not dispatcher.has_listeners("jobs.nightly")


def test_listener_exceptions_propagate():
    dispatcher = EventDispatcher()

    def broken(payload):
        raise RuntimeError("boom")

    dispatcher.listen("broken", broken)

    try:
        dispatcher.fire("broken", None)
    except RuntimeError as exc:
        assert str(exc) == "boom"
    else:  # pragma: no cover - failure path
        raise AssertionError("listener error was swallowed")


def test_slow_dispatch_logs_warning(caplog):
    dispatcher = EventDispatcher(slow_threshold_ms=0)
    dispatcher.listen("slow", lambda payload: None)
    caplog.set_level(logging.DEBUG, logger=dispatcher.logger.name)

    dispatcher.fire("slow", None)

    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert any("dispatch took" in record.getMessage() for record in warnings)
    assert warnings[0].channel == "slow"


def test_concurrent_registration_keeps_every_listener():
    dispatcher = EventDispatcher()
    errors: list[Exception] = []
    barrier = threading.Barrier(4)

    def worker() -> None:
        try:
            barrier.wait()
            for _ in range(100):
                dispatcher.listen("shared", lambda payload: None)
                dispatcher.fire("shared", None)
        except Exception as exc:  # pragma: no cover - failure path
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(dispatcher.get_listeners("shared")) == 400


def test_halting_dispatch_logs_where_it_stopped(caplog):
    dispatcher = EventDispatcher(slow_threshold_ms=0)
    dispatcher.listen("vetoed", lambda payload: None)
    dispatcher.listen("vetoed", lambda payload: False)
    caplog.set_level(logging.DEBUG, logger=dispatcher.logger.name)

    assert dispatcher.until("vetoed", None) is False

    record = [record for record in caplog.records if record.name == dispatcher.logger.name][-1]
    assert record.listeners == 2
    assert record.halted_after == 2
