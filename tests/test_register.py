"""Tests for handler registration, validation and introspection."""

from __future__ import annotations

import pytest

from emitter.domain.bus import EventBus


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


def _noop(event) -> None:
    pass


# ---------------------------------------------------------------------------
# register
# ---------------------------------------------------------------------------


def test_register_returns_true_and_is_visible(bus):
    """A fresh (type, handler) pair is added and reported by has()."""
    assert bus.register("change:name", _noop) is True
    assert bus.has("change:name", _noop) is True
    assert bus.has("change:name") is True


def test_register_same_pair_twice_is_noop(bus):
    """The second registration of an identical pair returns False."""
    assert bus.register("change:name", _noop) is True
    assert bus.register("change:name", _noop) is False
    assert bus.get_handlers("change:name") == [_noop]


def test_same_handler_under_different_types(bus):
    """Dedup is per type; one handler may listen to several types."""
    assert bus.register("a", _noop) is True
    assert bus.register("b", _noop) is True
    assert bus.get_handlers("a") == [_noop]
    assert bus.get_handlers("b") == [_noop]


def test_distinct_handlers_with_identical_bodies_are_different(bus):
    """Identity is by reference, so two lambdas both register."""
    assert bus.register("a", lambda e: None) is True
    assert bus.register("a", lambda e: None) is True
    assert len(bus.get_handlers("a")) == 2


@pytest.mark.parametrize("bad_type", ["", 123, True, {}, [], None, 1.5, b"bytes"])
def test_register_rejects_invalid_type(bus, bad_type):
    """Anything but a non-empty str is refused without raising."""
    assert bus.register(bad_type, _noop) is False
    assert bus.types() == []


@pytest.mark.parametrize("bad_handler", ["function", 123, True, {}, [], None])
def test_register_rejects_non_callable_handler(bus, bad_handler):
    assert bus.register("event", bad_handler) is False
    assert bus.get_handlers("event") == []
    assert bus.has("event") is False


def test_whitespace_type_is_valid(bus):
    """Emptiness is literal; no trimming is applied."""
    assert bus.register(" ", _noop) is True
    assert bus.has(" ") is True
    assert bus.has("") is False


def test_callable_object_handler(bus):
    """Any callable works, and dedup does not rely on __eq__."""

    class Recorder:
        def __init__(self) -> None:
            self.seen = []

        def __call__(self, event) -> None:
            self.seen.append(event.data)

        def __eq__(self, other) -> bool:
            return isinstance(other, Recorder)

        __hash__ = object.__hash__

    first, second = Recorder(), Recorder()
    assert bus.register("a", first) is True
    assert bus.register("a", second) is True
    bus.dispatch("a", 1)
    assert first.seen == [1]
    assert second.seen == [1]


def test_bound_methods_deduplicate_by_instance(bus):
    """A bound method re-accessed from the same object is the same handler."""

    class Listener:
        def on_change(self, event) -> None:
            pass

    one, two = Listener(), Listener()
    assert bus.register("a", one.on_change) is True
    assert bus.register("a", one.on_change) is False
    assert bus.register("a", two.on_change) is True
    assert bus.has("a", one.on_change) is True
    assert len(bus.get_handlers("a")) == 2


# ---------------------------------------------------------------------------
# get_handlers / has / types
# ---------------------------------------------------------------------------


def test_get_handlers_returns_in_registration_order(bus):
    h1, h2, h3 = (lambda e: None), (lambda e: None), (lambda e: None)
    bus.register("change:name", h1)
    bus.register("change:age", h2)
    bus.register("change:age", h3)

    assert bus.get_handlers("change:name") == [h1]
    assert bus.get_handlers("change:age") == [h2, h3]


def test_get_handlers_empty_for_unknown_or_invalid(bus):
    assert bus.get_handlers("event") == []
    assert bus.get_handlers() == []
    assert bus.get_handlers(42) == []


def test_get_handlers_returns_a_copy(bus):
    """Mutating the returned list must not touch the registry."""
    calls = []
    bus.register("a", lambda e: calls.append(e.data))

    handlers = bus.get_handlers("a")
    handlers.clear()
    handlers.append(_noop)

    assert len(bus.get_handlers("a")) == 1
    assert _noop not in bus.get_handlers("a")
    bus.dispatch("a", "x")
    assert calls == ["x"]


def test_has_for_unregistered(bus):
    assert bus.has("change:name", lambda e: None) is False
    assert bus.has("change:name") is False


def test_has_is_total_for_invalid_input(bus):
    bus.register("a", _noop)
    assert bus.has(None) is False
    assert bus.has("", _noop) is False
    assert bus.has(["a"], _noop) is False
    assert bus.has("a", "not callable") is False


def test_types_lists_registered_keys(bus):
    bus.register("b", _noop)
    bus.register("a", _noop)
    assert bus.types() == ["b", "a"]


def test_on_is_register(bus):
    assert bus.on("a", _noop) is True
    assert bus.on("a", _noop) is False
