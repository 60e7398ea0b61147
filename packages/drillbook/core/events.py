"""Synchronous observer hub used for change notifications.

Handlers run in subscription order, on the caller's thread, at the end of
the mutating call that emitted the event. Emitting from inside a handler
is rejected: subscribers must not re-enter a mutation while a
notification is being delivered.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any

logger = logging.getLogger(__name__)


class ChartEvent(str, Enum):
    """Notifications emitted by ``FormationStore``."""

    FORMATION_ADDED = "formation_added"  # (formation)
    FORMATION_CHANGED = "formation_changed"  # (formation)
    FORMATION_REMOVED = "formation_removed"  # (formation_id)
    CHART_CHANGED = "chart_changed"  # (chart | None)
    CURRENT_FORMATION_CHANGED = "current_formation_changed"  # (index)
    AUDIO_TIMELINE_CHANGED = "audio_timeline_changed"  # (audio_timeline)


class HistoryEvent(str, Enum):
    """Notifications emitted by ``CommandHistory``."""

    CHANGED = "history_changed"  # ()


class ScoringEvent(str, Enum):
    """Notifications emitted by ``ScoringEngine``."""

    RUNNING_SCORE_UPDATED = "running_score_updated"  # (score)
    NOTABLE_EVENT = "notable_event"  # (note)


Handler = Callable[..., Any]


@dataclass
class Subscription:
    """Handle returned by ``EventBus.subscribe``; call ``cancel()`` to unsubscribe."""

    event: str
    handler_id: int
    bus: EventBus | None = None

    def cancel(self) -> None:
        if self.bus is not None:
            self.bus._remove(self.event, self.handler_id)
            self.bus = None


class EventBus:
    """Explicit subscription list keyed by event name.

    Example:
        >>> bus = EventBus()
        >>> seen = []
        >>> sub = bus.subscribe(ChartEvent.CHART_CHANGED, seen.append)
        >>> bus.emit(ChartEvent.CHART_CHANGED, None)
        >>> seen
        [None]
    """

    def __init__(self) -> None:
        self._handlers: dict[str, dict[int, Handler]] = {}
        self._next_id = 0
        self._emitting = False

    @property
    def is_emitting(self) -> bool:
        """True while handlers for some event are being run."""
        return self._emitting

    def subscribe(self, event: str | Enum, handler: Handler) -> Subscription:
        key = _key(event)
        handler_id = self._next_id
        self._next_id += 1
        self._handlers.setdefault(key, {})[handler_id] = handler
        return Subscription(event=key, handler_id=handler_id, bus=self)

    def clear(self, event: str | Enum | None = None) -> None:
        """Drop all handlers for ``event``, or every handler if None."""
        if event is None:
            self._handlers.clear()
        else:
            self._handlers.pop(_key(event), None)

    def handler_count(self, event: str | Enum) -> int:
        return len(self._handlers.get(_key(event), {}))

    def emit(self, event: str | Enum, *args: Any) -> None:
        """Deliver ``event`` to every handler in subscription order.

        Handler exceptions propagate to the emitter.

        Raises:
            RuntimeError: If called while another emission is in progress.
        """
        key = _key(event)
        if self._emitting:
            raise RuntimeError(f"Re-entrant emit of {key!r} from inside a notification handler")

        handlers = list(self._handlers.get(key, {}).values())
        if not handlers:
            return

        self._emitting = True
        try:
            for handler in handlers:
                handler(*args)
        finally:
            self._emitting = False

    def _remove(self, event: str, handler_id: int) -> None:
        handlers = self._handlers.get(event)
        if handlers is not None:
            handlers.pop(handler_id, None)


def _key(event: str | Enum) -> str:
    return str(event.value) if isinstance(event, Enum) else str(event)
