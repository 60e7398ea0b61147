"""Tests for the synchronous event bus and store notifications."""

from __future__ import annotations

import pytest

from drillbook.core.drill.store import FormationStore
from drillbook.core.events import ChartEvent, EventBus


class TestEventBus:
    def test_handlers_run_in_subscription_order(self):
        bus = EventBus()
        calls: list[str] = []
        bus.subscribe("ping", lambda v: calls.append(f"a{v}"))
        bus.subscribe("ping", lambda v: calls.append(f"b{v}"))

        bus.emit("ping", 1)

        assert calls == ["a1", "b1"]

    def test_enum_and_string_keys_match(self):
        bus = EventBus()
        calls: list[object] = []
        bus.subscribe(ChartEvent.CHART_CHANGED, calls.append)

        bus.emit("chart_changed", None)

        assert calls == [None]

    def test_cancel_is_idempotent(self):
        bus = EventBus()
        sub = bus.subscribe("ping", lambda: None)

        sub.cancel()
        sub.cancel()

        assert bus.handler_count("ping") == 0

    def test_clear(self):
        bus = EventBus()
        bus.subscribe("a", lambda: None)
        bus.subscribe("b", lambda: None)

        bus.clear("a")
        assert bus.handler_count("a") == 0
        assert bus.handler_count("b") == 1

        bus.clear()
        assert bus.handler_count("b") == 0

    def test_reentrant_emit_rejected(self):
        bus = EventBus()
        bus.subscribe("outer", lambda: bus.emit("inner"))

        with pytest.raises(RuntimeError, match="Re-entrant"):
            bus.emit("outer")
        assert not bus.is_emitting

    def test_handler_errors_propagate(self):
        bus = EventBus()

        def boom() -> None:
            raise KeyError("x")

        bus.subscribe("ping", boom)

        with pytest.raises(KeyError):
            bus.emit("ping")


class TestStoreNotifications:
    def test_add_formation_emits_added_then_chart_changed(self, store: FormationStore, event_log):
        f = store.add_formation(0, 4, "A")

        assert [e for e, _ in event_log] == ["formation_added", "chart_changed"]
        assert event_log[0][1] is f

    def test_mutation_from_handler_rejected(self, store: FormationStore):
        store.subscribe(ChartEvent.FORMATION_ADDED, lambda f: store.add_formation(8, 4, "B"))

        with pytest.raises(RuntimeError):
            store.add_formation(0, 4, "A")
