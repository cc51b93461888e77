"""Tests for Observer and the AutoDetachObserver safety wrapper."""

import logging

import pytest

from rxlite import AutoDetachObserver, Disposable, InvalidArgumentError, Observer
from rxlite.config import set_unhandled_error_handler
from rxlite.observer import to_observer


@pytest.mark.unit
class TestObserver:
    """Tests for the callback-based Observer."""

    def test_missing_callbacks_are_no_ops(self):
        """An Observer without callbacks accepts values and completion."""
        observer = Observer()

        observer.on_next(1)
        observer.on_completed()

    def test_missing_on_error_goes_to_unhandled_hook(self):
        """Errors without an on_error callback reach the unhandled-error hook."""
        # Arrange
        seen = []
        set_unhandled_error_handler(seen.append)
        error = ValueError("boom")

        # Act
        Observer().on_error(error)

        # Assert
        assert seen == [error]

    def test_is_stopped_follows_parent(self):
        """An observer linked to a parent stops when the parent stops."""
        parent = AutoDetachObserver(Observer())
        child = Observer(parent=parent)

        assert not child.is_stopped
        parent.on_completed()
        assert child.is_stopped


@pytest.mark.unit
class TestToObserver:
    """Tests for coercing subscribe arguments."""

    def test_callable_becomes_on_next(self):
        values = []

        to_observer(values.append).on_next(3)

        assert values == [3]

    def test_observer_like_object_is_wrapped(self):
        class Sink:
            def __init__(self):
                self.values = []

            def on_next(self, value):
                self.values.append(value)

        sink = Sink()
        observer = to_observer(sink)
        observer.on_next(1)
        observer.on_completed()

        assert sink.values == [1]

    def test_observer_instance_is_returned_as_is(self):
        observer = Observer()

        assert to_observer(observer) is observer

    def test_non_callable_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            to_observer(42)


@pytest.mark.unit
class TestAutoDetachObserver:
    """Tests for grammar enforcement and automatic teardown."""

    def test_nothing_is_delivered_after_completion(self):
        # Arrange
        values, completions = [], []
        safe = AutoDetachObserver(Observer(values.append, None, lambda: completions.append(1)))

        # Act
        safe.on_next(1)
        safe.on_completed()
        safe.on_next(2)
        safe.on_completed()
        safe.on_error(ValueError())

        # Assert
        assert values == [1]
        assert completions == [1]

    def test_on_next_exception_becomes_on_error(self):
        errors = []

        def explode(value):
            raise KeyError(value)

        safe = AutoDetachObserver(Observer(explode, errors.append))
        safe.on_next("x")

        assert len(errors) == 1
        assert isinstance(errors[0], KeyError)
        assert safe.is_stopped

    def test_terminal_notification_disposes_subscription(self):
        released = []
        safe = AutoDetachObserver(Observer())
        safe.set_subscription(Disposable(lambda: released.append(1)))

        safe.on_error(RuntimeError())

        assert released == [1]

    def test_subscription_assigned_after_termination_is_disposed(self):
        """A synchronous producer can finish before its teardown is known."""
        released = []
        safe = AutoDetachObserver(Observer())

        safe.on_completed()
        safe.set_subscription(Disposable(lambda: released.append(1)))

        assert released == [1]

    def test_dispose_blocks_further_notifications(self):
        values = []
        safe = AutoDetachObserver(Observer(values.append))

        safe.dispose()
        safe.on_next(1)

        assert values == []
        assert safe.is_stopped

    def test_exception_in_on_error_callback_is_logged_not_raised(self, caplog):
        def broken_handler(error):
            raise RuntimeError("handler failed")

        safe = AutoDetachObserver(Observer(None, broken_handler))

        with caplog.at_level(logging.ERROR, logger="rxlite"):
            safe.on_error(ValueError("original"))

        assert "Error in on_error callback" in caplog.text

    def test_exception_in_on_completed_callback_is_logged_not_raised(self, caplog):
        def broken_completion():
            raise RuntimeError("completion failed")

        safe = AutoDetachObserver(Observer(None, None, broken_completion))

        with caplog.at_level(logging.ERROR, logger="rxlite"):
            safe.on_completed()

        assert "Error in on_completed callback" in caplog.text
