"""Tests for the per-value operators: map, filter and scan."""

import pytest

from rxlite import InvalidArgumentError, Subject, create, of, throw
from rxlite.operators import filter, map, scan
from rxlite.testing import Recorder


def released_on_dispose(log):
    """Source that never ends and records when it is torn down."""

    def producer(observer):
        observer.on_next(1)
        observer.on_next(2)
        return lambda: log.append("released")

    return create(producer)


@pytest.mark.unit
@pytest.mark.operators
class TestMap:
    """Tests for map."""

    def test_transforms_every_value(self):
        recorder = Recorder()

        of(1, 2, 3).map(lambda x: x * 2).subscribe(recorder)

        assert recorder.values == [2, 4, 6]
        assert recorder.is_completed

    def test_free_function_form(self):
        recorder = Recorder()

        map(of("a", "b"), str.upper).subscribe(recorder)

        assert recorder.values == ["A", "B"]

    def test_mapper_exception_becomes_single_on_error(self):
        # Arrange
        log = []
        recorder = Recorder()

        def mapper(value):
            if value == 2:
                raise ArithmeticError("no twos")
            return value

        # Act
        released_on_dispose(log).map(mapper).subscribe(recorder)

        # Assert
        assert recorder.values == [1]
        assert len(recorder.errors) == 1
        assert log == ["released"]

    def test_error_passes_through(self):
        recorder = Recorder()
        error = RuntimeError("upstream")

        throw(error).map(lambda x: x).subscribe(recorder)

        assert recorder.errors == [error]

    def test_non_callable_mapper_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            of(1).map(None)


@pytest.mark.unit
@pytest.mark.operators
class TestFilter:
    """Tests for filter."""

    def test_keeps_matching_values(self):
        recorder = Recorder()

        of(1, 2, 3, 4, 5).filter(lambda x: x % 2).subscribe(recorder)

        assert recorder.values == [1, 3, 5]
        assert recorder.is_completed

    def test_free_function_form(self):
        recorder = Recorder()

        filter(of(1, 2), lambda x: x > 1).subscribe(recorder)

        assert recorder.values == [2]

    def test_predicate_exception_becomes_on_error(self):
        recorder = Recorder()

        of(1, "two", 3).filter(lambda x: x > 0).subscribe(recorder)

        assert recorder.values == [1]
        assert isinstance(recorder.errors[0], TypeError)

    def test_waits_for_next_value_after_rejection(self):
        subject = Subject()
        recorder = Recorder()
        subject.filter(lambda x: x > 10).subscribe(recorder)

        subject.on_next(5)
        assert recorder.values == []
        subject.on_next(50)

        assert recorder.values == [50]


@pytest.mark.unit
@pytest.mark.operators
class TestScan:
    """Tests for scan."""

    def test_emits_running_accumulation(self):
        recorder = Recorder()

        of(1, 2, 3).scan(lambda acc, x: acc + x, 0).subscribe(recorder)

        assert recorder.values == [1, 3, 6]

    def test_seed_is_not_emitted(self):
        recorder = Recorder()

        of().scan(lambda acc, x: acc + x, 100).subscribe(recorder)

        assert recorder.values == []
        assert recorder.is_completed

    def test_first_emission_combines_seed_and_first_value(self):
        recorder = Recorder()

        scan(of(5), lambda acc, x: acc * x, 2).subscribe(recorder)

        assert recorder.values == [10]

    def test_state_is_per_subscription(self):
        """Accumulator state lives in each subscription, not in the Observable."""
        running_total = of(1, 1, 1).scan(lambda acc, x: acc + x, 0)
        first, second = Recorder(), Recorder()

        running_total.subscribe(first)
        running_total.subscribe(second)

        assert first.values == [1, 2, 3]
        assert second.values == [1, 2, 3]

    def test_accumulator_exception_becomes_on_error(self):
        recorder = Recorder()

        of(1, 0).scan(lambda acc, x: acc / x, 1).subscribe(recorder)

        assert recorder.values == [1.0]
        assert isinstance(recorder.errors[0], ZeroDivisionError)
