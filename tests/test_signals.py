"""Tests for SignalBus."""
import logging

import pytest

from data_colony import SignalBus


class TestDelivery:
    def test_publish_reaches_handlers_immediately(self):
        bus = SignalBus()
        received = []
        bus.subscribe("tick", lambda name, data: received.append(data))
        assert bus.publish("tick", tick=1) == 1
        assert received == [{"tick": 1}]

    def test_handlers_only_see_their_signal(self):
        bus = SignalBus()
        received = []
        bus.subscribe("placed", lambda name, data: received.append(name))
        bus.publish("removed", position=(0, 0))
        bus.publish("placed", position=(1, 1))
        assert received == ["placed"]

    def test_handlers_run_in_subscription_order(self):
        bus = SignalBus()
        order = []
        bus.subscribe("tick", lambda name, data: order.append("hud"))
        bus.subscribe("tick", lambda name, data: order.append("log"))
        bus.publish("tick")
        assert order == ["hud", "log"]

    def test_unsubscribe(self):
        bus = SignalBus()
        received = []

        def handler(name, data):
            received.append(name)

        bus.subscribe("tick", handler)
        assert bus.subscriber_count("tick") == 1
        bus.unsubscribe("tick", handler)
        bus.unsubscribe("tick", handler)
        bus.unsubscribe("never", handler)
        assert bus.publish("tick") == 0
        assert received == []

    def test_clear_drops_subscriptions(self):
        bus = SignalBus()
        bus.subscribe("tick", lambda name, data: None)
        bus.clear()
        assert bus.subscriber_count("tick") == 0


class TestHandlerErrors:
    def test_failing_handler_is_isolated(self, caplog):
        bus = SignalBus()
        received = []

        def broken(name, data):
            raise RuntimeError("hud crashed")

        bus.subscribe("placed", broken)
        bus.subscribe("placed", lambda name, data: received.append(data["position"]))
        with caplog.at_level(logging.ERROR, logger="data_colony.signals"):
            assert bus.publish("placed", position=(2, 3)) == 1
        assert received == [(2, 3)]
        assert bus.error_count == 1
        assert "hud crashed" in caplog.text

    def test_on_error_hook(self):
        seen = []
        bus = SignalBus(on_error=lambda name, handler, exc: seen.append((name, str(exc))))

        def broken(name, data):
            raise ValueError("bad")

        bus.subscribe("tick", broken)
        bus.publish("tick")
        assert seen == [("tick", "bad")]


class TestKnownSignals:
    def test_unknown_signal_rejected(self):
        bus = SignalBus(signals=["tick", "placed"])
        assert bus.signals == frozenset({"tick", "placed"})
        with pytest.raises(ValueError, match="unknown signal 'tik'"):
            bus.subscribe("tik", lambda name, data: None)
        with pytest.raises(ValueError):
            bus.publish("game_end")

    def test_open_bus_accepts_any_name(self):
        bus = SignalBus()
        assert bus.signals is None
        assert bus.publish("anything", value=1) == 0
