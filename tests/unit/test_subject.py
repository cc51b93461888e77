"""Tests for Subject, the hot multicast source."""

import pytest

from rxlite import DisposedError, Observable, Subject, of
from rxlite.testing import Recorder


@pytest.mark.unit
@pytest.mark.observable
class TestSubjectMulticast:
    """Tests for pushing values to current subscribers."""

    def test_is_an_observable(self):
        assert isinstance(Subject(), Observable)

    def test_pushes_to_every_subscriber(self):
        subject = Subject()
        first, second = Recorder(), Recorder()
        subject.subscribe(first)
        subject.subscribe(second)

        subject.on_next(1)

        assert first.values == [1]
        assert second.values == [1]

    def test_late_subscriber_misses_earlier_values(self):
        subject = Subject()
        subject.on_next("missed")
        recorder = Recorder()

        subject.subscribe(recorder)
        subject.on_next("seen")

        assert recorder.values == ["seen"]

    def test_disposed_subscription_is_removed(self):
        subject = Subject()
        recorder = Recorder()
        subscription = subject.subscribe(recorder)

        subscription.dispose()
        subject.on_next(1)

        assert recorder.values == []
        assert not subject.has_observers

    def test_failing_subscriber_does_not_affect_others(self):
        # Arrange
        subject = Subject()
        healthy = Recorder()
        failures = []

        def explode(value):
            raise ValueError(value)

        subject.subscribe(explode, failures.append)
        subject.subscribe(healthy)

        # Act
        subject.on_next("x")
        subject.on_next("y")

        # Assert
        assert len(failures) == 1
        assert healthy.values == ["x", "y"]

    def test_can_subscribe_to_another_observable(self):
        subject = Subject()
        recorder = Recorder()
        subject.subscribe(recorder)

        of(1, 2).subscribe(subject)

        assert recorder.values == [1, 2]
        assert recorder.is_completed
        assert subject.is_stopped


@pytest.mark.unit
@pytest.mark.observable
class TestSubjectTermination:
    """Tests for terminal notifications and disposal."""

    def test_completion_reaches_subscribers_once(self):
        subject = Subject()
        recorder = Recorder()
        subject.subscribe(recorder)

        subject.on_completed()
        subject.on_completed()
        subject.on_next("after")

        assert recorder.terminal_count == 1
        assert recorder.values == []
        assert not subject.has_observers

    def test_late_subscriber_receives_completion(self):
        subject = Subject()
        subject.on_completed()
        recorder = Recorder()

        subject.subscribe(recorder)

        assert recorder.is_completed

    def test_late_subscriber_receives_error(self):
        subject = Subject()
        error = RuntimeError("closed")
        subject.on_error(error)
        recorder = Recorder()

        subject.subscribe(recorder)

        assert recorder.errors == [error]

    def test_error_after_completion_is_ignored(self):
        subject = Subject()
        recorder = Recorder()
        subject.subscribe(recorder)

        subject.on_completed()
        subject.on_error(RuntimeError("late"))

        assert recorder.errors == []

    def test_use_after_dispose_raises(self):
        subject = Subject()
        subject.dispose()

        assert subject.is_disposed
        with pytest.raises(DisposedError):
            subject.on_next(1)
        with pytest.raises(DisposedError):
            subject.on_completed()

    def test_subscribe_after_dispose_fails_subscriber(self):
        subject = Subject()
        subject.dispose()
        recorder = Recorder()

        subject.subscribe(recorder)

        assert isinstance(recorder.errors[0], DisposedError)

    def test_repr_shows_state(self):
        subject = Subject()
        subject.subscribe(Recorder())

        assert repr(subject) == "Subject(observers=1, stopped=False)"
