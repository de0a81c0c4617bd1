import pytest

from modelhooks import BUILTIN_EVENTS, Model, ModelEventRegistry, registry


@pytest.fixture(autouse=True)
def clear_registry():
    registry.clear()
    yield
    registry.clear()


class Invoice(Model):
    pass


class Subscription(Model):
    class Meta:
        observables = ["renewing", "renewed"]


def test_builtin_events_are_observable_by_default():
    events = Invoice().get_observable_events()
    assert events == list(BUILTIN_EVENTS)
    assert len(BUILTIN_EVENTS) == 10


def test_meta_observables_extend_builtin_events():
    events = Subscription().get_observable_events()
    assert events[: len(BUILTIN_EVENTS)] == list(BUILTIN_EVENTS)
    assert events[len(BUILTIN_EVENTS):] == ["renewing", "renewed"]


def test_add_observable_events_deduplicates():
    invoice = Invoice()
    invoice.add_observable_events(["archiving"])
    invoice.add_observable_events(["archiving"])
    invoice.add_observable_events("archived", "archiving")

    events = invoice.get_observable_events()
    assert events.count("archiving") == 1
    assert events[-2:] == ["archiving", "archived"]


def test_adding_builtin_name_does_not_duplicate_it():
    invoice = Invoice()
    invoice.add_observable_events("saving")
    assert invoice.get_observable_events().count("saving") == 1


def test_remove_observable_events():
    invoice = Invoice()
    invoice.add_observable_events("archiving", "archived")

    invoice.remove_observable_events(["archiving"])
    assert "archiving" not in invoice.get_observable_events()
    assert "archived" in invoice.get_observable_events()

    before = invoice.get_observable_events()
    invoice.remove_observable_events("never-added")
    assert invoice.get_observable_events() == before


def test_set_observable_events_replaces_extensions_and_chains():
    subscription = Subscription()
    returned = subscription.set_observable_events(["pausing"])

    assert returned is subscription
    events = subscription.get_observable_events()
    assert "pausing" in events
    assert "renewing" not in events


def test_observable_events_are_shared_per_class():
    Invoice().add_observable_events("voiding")

    assert "voiding" in Invoice().get_observable_events()
    assert "voiding" not in Subscription().get_observable_events()


def test_non_string_event_names_are_rejected():
    with pytest.raises(TypeError):
        Invoice().add_observable_events(["ok", 42])


def test_separate_registries_do_not_share_state():
    isolated = ModelEventRegistry()

    class Ledger(Model):
        class Meta:
            registry = isolated

    Ledger().add_observable_events("closing")

    assert "closing" in isolated.observable_events(Ledger)
    assert Ledger not in registry._observables
