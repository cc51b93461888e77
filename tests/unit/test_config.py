"""Tests for process-wide configuration in rxlite.config."""

import logging

import pytest

from rxlite import (
    AsyncIOScheduler,
    VirtualTimeScheduler,
    get_default_scheduler,
    get_unhandled_error_handler,
    set_default_scheduler,
    set_unhandled_error_handler,
    throw,
)
from rxlite.config import _drop_unhandled_error, _reset_config


@pytest.mark.unit
class TestUnhandledErrorHandler:
    """Tests for errors reaching observers without on_error."""

    def test_default_handler_logs_and_drops(self, caplog):
        error = RuntimeError("nobody listening")

        with caplog.at_level(logging.DEBUG, logger="rxlite"):
            throw(error).subscribe(lambda value: None)

        assert "Unhandled error dropped" in caplog.text

    def test_custom_handler_receives_error(self):
        received = []
        error = RuntimeError("report me")
        set_unhandled_error_handler(received.append)

        throw(error).subscribe(lambda value: None)

        assert received == [error]

    def test_explicit_on_error_bypasses_handler(self):
        received = []
        set_unhandled_error_handler(received.append)

        throw(RuntimeError("handled")).subscribe(lambda value: None, lambda error: None)

        assert received == []

    def test_none_restores_default(self):
        set_unhandled_error_handler(print)

        set_unhandled_error_handler(None)

        assert get_unhandled_error_handler() is _drop_unhandled_error


@pytest.mark.unit
@pytest.mark.scheduler
class TestDefaultScheduler:
    """Tests for the lazily created default scheduler."""

    def test_created_lazily_and_shared(self):
        first = get_default_scheduler()

        assert isinstance(first, AsyncIOScheduler)
        assert get_default_scheduler() is first

    def test_override_and_revert(self):
        virtual = VirtualTimeScheduler()

        set_default_scheduler(virtual)
        assert get_default_scheduler() is virtual

        set_default_scheduler(None)
        assert isinstance(get_default_scheduler(), AsyncIOScheduler)

    def test_reset_restores_every_default(self):
        set_default_scheduler(VirtualTimeScheduler())
        set_unhandled_error_handler(print)

        _reset_config()

        assert isinstance(get_default_scheduler(), AsyncIOScheduler)
        assert get_unhandled_error_handler() is _drop_unhandled_error
