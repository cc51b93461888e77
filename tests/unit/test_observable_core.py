"""Tests for create/subscribe: laziness, re-subscription and error containment."""

import pytest

from rxlite import Disposable, InvalidArgumentError, Observable, create, of
from rxlite.config import set_unhandled_error_handler
from rxlite.testing import Recorder


@pytest.mark.unit
@pytest.mark.observable
class TestCreate:
    """Tests for building Observables from producer functions."""

    def test_producer_runs_only_on_subscribe(self):
        """Observables are lazy: nothing runs before subscribe."""
        # Arrange
        calls = []

        def producer(observer):
            calls.append("subscribed")
            observer.on_completed()

        # Act
        source = create(producer)

        # Assert
        assert calls == []
        source.subscribe()
        assert calls == ["subscribed"]

    def test_each_subscription_runs_producer_afresh(self):
        """The same Observable can be subscribed repeatedly and independently."""
        counter = {"runs": 0}

        def producer(observer):
            counter["runs"] += 1
            observer.on_next(counter["runs"])
            observer.on_completed()

        source = create(producer)
        first, second = Recorder(), Recorder()

        source.subscribe(first)
        source.subscribe(second)

        assert first.values == [1]
        assert second.values == [2]

    def test_non_callable_producer_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Observable(42)

    def test_teardown_callable_runs_on_dispose(self):
        released = []
        source = create(lambda observer: (lambda: released.append("done")))

        subscription = source.subscribe()
        subscription.dispose()
        subscription.dispose()

        assert released == ["done"]

    def test_teardown_disposable_runs_on_completion(self):
        """Terminal notifications release the producer's resources."""
        released = []

        def producer(observer):
            observer.on_next(1)
            observer.on_completed()
            return Disposable(lambda: released.append("done"))

        create(producer).subscribe()

        assert released == ["done"]


@pytest.mark.unit
@pytest.mark.observable
class TestSubscribeForms:
    """Tests for the accepted subscribe argument shapes."""

    def test_positional_callbacks(self):
        values, completions = [], []

        of(1, 2).subscribe(values.append, None, lambda: completions.append(True))

        assert values == [1, 2]
        assert completions == [True]

    def test_keyword_callbacks(self):
        values, completions = [], []

        of(1).subscribe(on_next=values.append, on_completed=lambda: completions.append(1))

        assert values == [1]
        assert completions == [1]

    def test_observer_object(self):
        recorder = Recorder()

        of("a").subscribe(recorder)

        assert recorder.values == ["a"]
        assert recorder.is_completed

    def test_for_each_is_subscribe(self):
        values = []

        of(1, 2, 3).for_each(values.append)

        assert values == [1, 2, 3]


@pytest.mark.unit
@pytest.mark.observable
class TestErrorContainment:
    """Tests that failures become on_error rather than exceptions."""

    def test_producer_exception_becomes_on_error(self):
        # Arrange
        def producer(observer):
            raise ConnectionError("offline")

        recorder = Recorder()

        # Act
        create(producer).subscribe(recorder)

        # Assert
        assert len(recorder.errors) == 1
        assert isinstance(recorder.errors[0], ConnectionError)

    def test_subscriber_on_next_exception_becomes_on_error(self):
        errors = []

        def on_next(value):
            if value == 2:
                raise ValueError("bad value")

        of(1, 2, 3).subscribe(on_next, errors.append)

        assert len(errors) == 1
        assert str(errors[0]) == "bad value"

    def test_subscriber_exception_stops_a_synchronous_source(self):
        seen = []

        def on_next(value):
            seen.append(value)
            raise ValueError("stop")

        of(1, 2, 3).subscribe(on_next, lambda error: None)

        assert seen == [1]

    def test_missing_on_error_does_not_raise(self):
        """Unhandled errors are dropped by default."""
        create(lambda observer: observer.on_error(RuntimeError("lost"))).subscribe()

    def test_missing_on_error_reaches_unhandled_hook(self):
        seen = []
        set_unhandled_error_handler(seen.append)
        error = RuntimeError("surface me")

        create(lambda observer: observer.on_error(error)).subscribe(lambda value: None)

        assert seen == [error]


@pytest.mark.unit
@pytest.mark.observable
class TestProtocolViolations:
    """Tests that misbehaving producers cannot break the observer grammar."""

    def test_notifications_after_completion_are_dropped(self):
        def producer(observer):
            observer.on_next(1)
            observer.on_completed()
            observer.on_next(2)
            observer.on_error(RuntimeError())
            observer.on_completed()

        recorder = Recorder()
        create(producer).subscribe(recorder)

        assert recorder.values == [1]
        assert recorder.terminal_count == 1

    def test_notifications_after_dispose_are_dropped(self):
        captured = {}

        def producer(observer):
            captured["observer"] = observer

        recorder = Recorder()
        subscription = create(producer).subscribe(recorder)
        captured["observer"].on_next(1)
        subscription.dispose()
        captured["observer"].on_next(2)
        captured["observer"].on_completed()

        assert recorder.values == [1]
        assert recorder.terminal_count == 0

    def test_dispose_from_inside_on_next(self):
        captured = {}

        def producer(observer):
            captured["observer"] = observer

        values = []
        subscription = None

        def on_next(value):
            values.append(value)
            subscription.dispose()

        subscription = create(producer).subscribe(on_next)
        captured["observer"].on_next(1)
        captured["observer"].on_next(2)

        assert values == [1]


@pytest.mark.unit
@pytest.mark.observable
@pytest.mark.operators
class TestOperatorSyntax:
    """Tests for the >> and & operator overloads."""

    def test_rshift_maps(self):
        recorder = Recorder()

        (of(1, 2) >> (lambda x: x * 10)).subscribe(recorder)

        assert recorder.values == [10, 20]

    def test_and_filters(self):
        recorder = Recorder()

        (of(1, 2, 3, 4) & (lambda x: x % 2 == 0)).subscribe(recorder)

        assert recorder.values == [2, 4]

    def test_operators_chain(self):
        recorder = Recorder()

        ((of(1, 2, 3, 4) & (lambda x: x > 1)) >> (lambda x: -x)).subscribe(recorder)

        assert recorder.values == [-2, -3, -4]

    def test_pipe_applies_functions_in_order(self):
        recorder = Recorder()

        of(1, 2, 3).pipe(
            lambda source: source.map(lambda x: x + 1),
            lambda source: source.take(2),
        ).subscribe(recorder)

        assert recorder.values == [2, 3]
