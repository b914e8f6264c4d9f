"""Tests for hooks.py module."""

import pytest

from service_manager.hooks import EventManager


class TestTrigger:
    """Tests for EventManager.trigger."""

    def test_no_listener(self, hooks):
        """Test that an event nobody listens to is approved."""
        assert hooks.trigger("before_start_service", "nginx") == 0

    def test_handler_receives_arguments(self, hooks):
        """Test that handlers get the trigger arguments."""
        seen = []
        hooks.register("before_start_service", lambda service: seen.append(service))

        assert hooks.trigger("before_start_service", "nginx") == 0
        assert seen == ["nginx"]

    def test_nonzero_return_vetoes(self, hooks):
        """Test that a nonzero return stops the dispatch."""
        calls = []
        hooks.register("before_start_service", lambda service: 1, priority=10)
        hooks.register("before_start_service", lambda service: calls.append(service), priority=0)

        assert hooks.trigger("before_start_service", "nginx") == 1
        assert calls == []
        assert "before_start_service" in hooks.pop_last_error()

    def test_exception_vetoes(self, hooks):
        """Test that a raising handler vetoes and keeps its message."""
        def handler(service):
            raise RuntimeError("config check failed")

        hooks.register("before_restart_service", handler)

        assert hooks.trigger("before_restart_service", "postfix") != 0
        assert "config check failed" in hooks.pop_last_error()

    def test_pop_last_error_forgets(self, hooks):
        """Test that the last error is only returned once."""
        hooks.register("after_stop_service", lambda service: 2)
        hooks.trigger("after_stop_service", "nginx")

        assert hooks.pop_last_error() is not None
        assert hooks.pop_last_error() is None

    def test_priority_order(self, hooks):
        """Test that higher priority handlers run first, ties in registration order."""
        order = []
        hooks.register("ev", lambda: order.append("low"), priority=0)
        hooks.register("ev", lambda: order.append("high-1"), priority=5)
        hooks.register("ev", lambda: order.append("high-2"), priority=5)

        hooks.trigger("ev")

        assert order == ["high-1", "high-2", "low"]


class TestRegistration:
    """Tests for register/unregister."""

    def test_register_several_events(self, hooks):
        handler = lambda service: None  # noqa: E731
        hooks.register(["before_start_service", "before_stop_service"], handler)

        assert hooks.has_listener("before_start_service", handler)
        assert hooks.has_listener("before_stop_service", handler)

    def test_register_not_callable(self, hooks):
        with pytest.raises(TypeError):
            hooks.register("ev", "not a function")

    def test_one_time_handler(self, hooks):
        """Test that one-time handlers run once."""
        calls = []
        hooks.register_one_time("ev", lambda: calls.append(1))

        hooks.trigger("ev")
        hooks.trigger("ev")

        assert calls == [1]
        assert not hooks.has_listener("ev")

    def test_one_time_keeps_persistent_registration(self, hooks):
        """Test that dropping a one-time handler leaves its persistent twin."""
        calls = []

        def handler(service):
            calls.append(service)

        hooks.register("ev", handler)
        hooks.register_one_time("ev", handler)

        hooks.trigger("ev", "x")
        assert calls == ["x", "x"]
        assert hooks.has_listener("ev", handler)

        hooks.trigger("ev", "y")
        assert calls == ["x", "x", "y"]

    def test_unregister_handler(self, hooks):
        first = lambda: None  # noqa: E731
        second = lambda: None  # noqa: E731
        hooks.register("ev", first)
        hooks.register("ev", second)

        hooks.unregister("ev", first)

        assert not hooks.has_listener("ev", first)
        assert hooks.has_listener("ev", second)

    def test_unregister_all(self, hooks):
        hooks.register("ev", lambda: None)

        hooks.unregister("ev")

        assert not hooks.has_listener("ev")

    def test_clear(self):
        hooks = EventManager()
        hooks.register("a", lambda: None)
        hooks.register("b", lambda: None)

        hooks.clear()

        assert not hooks.has_listener("a")
        assert not hooks.has_listener("b")
