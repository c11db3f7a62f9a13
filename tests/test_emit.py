"""
Unit tests for event delivery.

Covers delivery order, one-shot listeners, and listener lists being fixed for
the length of one emission even when callbacks attach or remove listeners.
"""

from typing import Any

import scoped_event


def test_emit_delivers_payload() -> None:
    """Test the basic claim, listen, emit, release round."""
    scoped_event.reset()
    received: list[Any] = []

    def callback(data: Any) -> None:
        received.append(data)

    emit = scoped_event.register_namespace("foo")
    scoped_event.on("foo", "bar", callback)
    emit("bar", 42)

    assert received == [42]
    assert scoped_event.listener_count("foo", "bar") == 1

    scoped_event.off("foo", "bar", callback)
    assert scoped_event.listener_count("foo", "bar") == 0

    emit.deregister()
    assert "foo" not in scoped_event.namespaces


def test_emit_method_matches_call() -> None:
    scoped_event.reset()
    received: list[Any] = []

    emit = scoped_event.register_namespace("foo")
    scoped_event.on("foo", "bar", received.append)
    emit("bar", 1)
    emit.emit("bar", 2)
    emit("bar")

    assert received == [1, 2, None]


def test_emit_without_listeners_is_noop() -> None:
    scoped_event.reset()

    emit = scoped_event.register_namespace("foo")
    emit("bar", 1)

    assert scoped_event.listener_count("foo") == 0


def test_emit_only_reaches_own_pair() -> None:
    """Test that namespaces and event types do not leak into each other."""
    scoped_event.reset()
    received: list[str] = []

    foo = scoped_event.register_namespace("foo")
    qux = scoped_event.register_namespace("qux")
    scoped_event.on("foo", "bar", lambda data: received.append(f"foo.bar:{data}"))
    scoped_event.on("foo", "baz", lambda data: received.append(f"foo.baz:{data}"))
    scoped_event.on("qux", "bar", lambda data: received.append(f"qux.bar:{data}"))

    foo("bar", 1)
    qux("bar", 2)

    assert received == ["foo.bar:1", "qux.bar:2"]


def test_listeners_run_in_subscription_order() -> None:
    """Test that A, subscribed before B, completes before B starts."""
    scoped_event.reset()
    calls: list[str] = []

    def a(_: Any) -> None:
        calls.append("a:start")
        calls.append("a:end")

    def b(_: Any) -> None:
        calls.append("b")

    def c(_: Any) -> None:
        calls.append("c")

    emit = scoped_event.register_namespace("foo")
    scoped_event.on("foo", "bar", a)
    scoped_event.once("foo", "bar", b)
    scoped_event.on("foo", "bar", c)
    emit("bar")

    assert calls == ["a:start", "a:end", "b", "c"]


def test_order_kept_after_removal() -> None:
    """Test that removing a listener keeps the others in their order."""
    scoped_event.reset()
    calls: list[str] = []

    def a(_: Any) -> None:
        calls.append("a")

    def b(_: Any) -> None:
        calls.append("b")

    def c(_: Any) -> None:
        calls.append("c")

    emit = scoped_event.register_namespace("foo")
    for callback in (a, b, c):
        scoped_event.on("foo", "bar", callback)
    scoped_event.off("foo", "bar", b)
    scoped_event.on("foo", "bar", b)
    emit("bar")

    assert calls == ["a", "c", "b"]


def test_once_fires_exactly_once() -> None:
    """Test that a once() listener removes itself after its first delivery."""
    scoped_event.reset()
    received: list[Any] = []

    def callback(data: Any) -> None:
        received.append(data)

    emit = scoped_event.register_namespace("foo")
    scoped_event.on("foo", "bar", received.append)
    before = scoped_event.listener_count("foo", "bar")
    scoped_event.once("foo", "bar", callback)

    emit("bar", 1)
    emit("bar", 2)

    assert received == [1, 1, 2]
    assert scoped_event.listener_count("foo", "bar") == before


def test_once_can_be_added_again_after_firing() -> None:
    scoped_event.reset()
    received: list[Any] = []

    emit = scoped_event.register_namespace("foo")
    scoped_event.once("foo", "bar", received.append)
    emit("bar", 1)
    scoped_event.once("foo", "bar", received.append)
    emit("bar", 2)
    emit("bar", 3)

    assert received == [1, 2]


def test_removed_sibling_still_fires_in_current_pass() -> None:
    """
    Test that a listener removed by an earlier listener still receives the
    emission already in progress, but not the next one.
    """
    scoped_event.reset()
    calls: list[str] = []

    def b(_: Any) -> None:
        calls.append("b")

    def a(_: Any) -> None:
        calls.append("a")
        scoped_event.off("foo", "bar", b)

    emit = scoped_event.register_namespace("foo")
    scoped_event.on("foo", "bar", a)
    scoped_event.on("foo", "bar", b)

    emit("bar")
    emit("bar")

    assert calls == ["a", "b", "a"]


def test_added_listener_waits_for_next_pass() -> None:
    """Test that a listener attached during an emission is not run by it."""
    scoped_event.reset()
    calls: list[str] = []

    def late(_: Any) -> None:
        calls.append("late")

    def a(_: Any) -> None:
        calls.append("a")
        if not scoped_event.is_subscribed("foo", "bar", late):
            scoped_event.on("foo", "bar", late)

    emit = scoped_event.register_namespace("foo")
    scoped_event.on("foo", "bar", a)

    emit("bar")
    assert calls == ["a"]

    emit("bar")
    assert calls == ["a", "a", "late"]


def test_resubscribed_sibling_does_not_fire_twice() -> None:
    """Test that removing and re-adding a sibling mid-pass runs it once."""
    scoped_event.reset()
    calls: list[str] = []

    def b(_: Any) -> None:
        calls.append("b")

    def a(_: Any) -> None:
        calls.append("a")
        scoped_event.off("foo", "bar", b)
        scoped_event.on("foo", "bar", b)

    emit = scoped_event.register_namespace("foo")
    scoped_event.on("foo", "bar", a)
    scoped_event.on("foo", "bar", b)

    emit("bar")

    assert calls == ["a", "b"]
    assert scoped_event.listener_count("foo", "bar") == 2


def test_once_removal_spares_new_subscription() -> None:
    """
    Test that the automatic removal after a once() delivery only drops that
    subscription, not a new one for the same callback made during the call.
    """
    scoped_event.reset()
    received: list[Any] = []

    def callback(data: Any) -> None:
        received.append(data)
        if data == 1:
            scoped_event.off("foo", "bar", callback)
            scoped_event.on("foo", "bar", callback)

    emit = scoped_event.register_namespace("foo")
    scoped_event.once("foo", "bar", callback)

    emit("bar", 1)
    emit("bar", 2)

    assert received == [1, 2]
    assert scoped_event.listener_count("foo", "bar") == 1


def test_once_removed_by_sibling_before_firing() -> None:
    """
    Test that a once() listener already removed by a sibling still runs for
    the current pass, and is not reported as removed a second time.
    """
    scoped_event.reset()
    calls: list[str] = []
    removed: list[scoped_event.Subscription] = []

    def b(_: Any) -> None:
        calls.append("b")

    def a(_: Any) -> None:
        calls.append("a")
        scoped_event.off("foo", "bar", b)

    emit = scoped_event.register_namespace("foo")
    scoped_event.on("foo", "bar", a)
    scoped_event.once("foo", "bar", b)
    scoped_event.on("event-core", "off", removed.append)

    emit("bar")

    assert calls == ["a", "b"]
    assert [sub.callback for sub in removed] == [b]


def test_registries_deliver_independently() -> None:
    """Test emission through an isolated registry."""
    scoped_event.reset()
    registry = scoped_event.EventRegistry()
    received: list[Any] = []

    emit = registry.register_namespace("foo")
    registry.on("foo", "bar", received.append)
    emit("bar", "isolated")

    assert received == ["isolated"]
    assert scoped_event.listener_count("foo", "bar") == 0
