"""Progression event envelopes and sinks.

All events share a common envelope:
{
    "event": "<event_type>",
    "account": "<account id>",
    "ts": 1708617600.123456,
    "data": { ... type-specific fields ... }
}

Events are fire-and-forget. Operations publish them only after their state
changes are committed, and a failing sink never undoes a committed change.
A single battle can publish several level_up events.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from enum import Enum
from typing import Any, Protocol

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger()


class EventType(str, Enum):
    """All progression event types."""

    PROFILE_CREATED = "profile_created"
    LEVEL_UP = "level_up"
    NFT_MINTED = "nft_minted"
    CRATE_AWARDED = "crate_awarded"
    CRATE_CLAIMED = "crate_claimed"
    LEAGUE_CHANGED = "league_changed"


class GameEvent(BaseModel):
    """Common envelope for all events."""

    event: EventType
    account: str
    ts: float
    data: dict[str, Any] = Field(default_factory=dict)


def make_event(event_type: EventType, account: str, **data: Any) -> GameEvent:
    """Build an event stamped with the current wall-clock time."""
    return GameEvent(event=event_type, account=account, ts=time.time(), data=data)


class EventSink(Protocol):
    def emit(self, event: GameEvent) -> None: ...


class RecordingEventSink:
    """Keeps every event in memory, in emission order."""

    def __init__(self) -> None:
        self.events: list[GameEvent] = []

    def emit(self, event: GameEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        return [e for e in self.events if e.event == event_type]

    def clear(self) -> None:
        self.events.clear()


class LoggingEventSink:
    """Writes each event to the structured log."""

    def emit(self, event: GameEvent) -> None:
        logger.info(event.event.value, account=event.account, **event.data)


class FanoutEventSink:
    """Delivers each event to every registered sink."""

    def __init__(self, sinks: Iterable[EventSink] = ()) -> None:
        self._sinks: list[EventSink] = list(sinks)

    def add(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def emit(self, event: GameEvent) -> None:
        for sink in self._sinks:
            try:
                sink.emit(event)
            except Exception:
                logger.warning(
                    "event_delivery_failed",
                    event_type=event.event.value,
                    account=event.account,
                    sink=type(sink).__name__,
                    exc_info=True,
                )


def publish(sink: EventSink, events: Iterable[GameEvent]) -> None:
    """Emit buffered events in order."""
    for event in events:
        sink.emit(event)
