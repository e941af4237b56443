"""Tests for ChangeNotifier delivery semantics."""

import pytest

from roxterm_profile.notifier import ChangeNotifier
from roxterm_profile.types import Domain, IntChanged, StringChanged


@pytest.fixture
def notifier() -> ChangeNotifier:
    return ChangeNotifier()


def test_publish_reaches_only_matching_channel(notifier) -> None:
    text_events, int_events = [], []
    notifier.subscribe(Domain.TEXT, text_events.append)
    notifier.subscribe(Domain.INTEGER, int_events.append)

    assert notifier.publish(IntChanged("rows", 24)) == 1

    assert text_events == []
    assert int_events == [IntChanged("rows", 24)]


def test_raising_handler_does_not_stop_delivery(notifier, caplog) -> None:
    calls = []

    def broken(event):
        calls.append("broken")
        raise RuntimeError("handler bug")

    notifier.subscribe(Domain.TEXT, broken)
    notifier.subscribe(Domain.TEXT, lambda event: calls.append("after"))

    event = StringChanged("font", "Mono")
    assert notifier.publish(event) == 1

    # Not retried
    assert calls == ["broken", "after"]
    assert len(notifier.failures) == 1
    failure = notifier.failures[0]
    assert failure.event == event
    assert failure.handler is broken
    assert isinstance(failure.error, RuntimeError)
    assert "Change handler" in caplog.text

    notifier.clear_failures()
    assert notifier.failures == ()


def test_duplicate_subscription_called_twice(notifier) -> None:
    received = []
    notifier.subscribe(Domain.TEXT, received.append)
    notifier.subscribe(Domain.TEXT, received.append)

    notifier.publish(StringChanged("k", "v"))
    assert len(received) == 2

    assert notifier.unsubscribe(Domain.TEXT, received.append)
    notifier.publish(StringChanged("k", "w"))
    assert len(received) == 3


def test_unsubscribe_unknown_handler(notifier) -> None:
    assert not notifier.unsubscribe(Domain.FLOAT, print)


def test_handler_changes_take_effect_next_event(notifier) -> None:
    calls = []

    def late(event):
        calls.append("late")

    def first(event):
        calls.append("first")
        notifier.subscribe(Domain.TEXT, late)

    notifier.subscribe(Domain.TEXT, first)
    notifier.publish(StringChanged("k", "1"))
    assert calls == ["first"]

    notifier.unsubscribe(Domain.TEXT, first)
    notifier.publish(StringChanged("k", "2"))
    assert calls == ["first", "late"]


def test_subscribe_rejects_non_callable(notifier) -> None:
    with pytest.raises(TypeError):
        notifier.subscribe(Domain.TEXT, "not callable")  # type: ignore[arg-type]
    assert notifier.handlers(Domain.TEXT) == ()
