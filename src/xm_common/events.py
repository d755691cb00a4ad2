"""Append-only journal of market events (order-created, trade-matched, ...).

Events are for observability and indexing only; nothing in the engine reads
them back. Only successful operations record events: services append after
their fund movements and state changes have been applied.
"""
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime

from src.xm_common.datetime_utils import utc_now
from src.xm_common.enums import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarketEvent:
    seq: int
    event_type: EventType
    ref_id: int
    actor: str
    payload: dict[str, object]
    created_at: datetime = field(default_factory=utc_now)


class EventJournal:
    def __init__(self) -> None:
        self._events: list[MarketEvent] = []

    def emit(
        self, event_type: EventType, ref_id: int, actor: str, **payload: object
    ) -> MarketEvent:
        event = MarketEvent(
            seq=len(self._events) + 1,
            event_type=event_type,
            ref_id=ref_id,
            actor=actor,
            payload=dict(payload),
        )
        self._events.append(event)
        logger.info("%s id=%d actor=%s %s", event_type.value, ref_id, actor, payload)
        return event

    def truncate(self, length: int) -> None:
        """Drop events past ``length`` (used when an operation is rolled back)."""
        del self._events[length:]

    def of_type(self, event_type: EventType) -> list[MarketEvent]:
        return [e for e in self._events if e.event_type == event_type]

    def since(self, seq: int) -> list[MarketEvent]:
        return [e for e in self._events if e.seq > seq]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[MarketEvent]:
        return iter(self._events)
