"""
Library Ledger Event Log — Append-Only Notification Channel
=============================================================
Every accepted command records exactly one LedgerEvent here.

Rules:
- Append-only: no update, no delete, no reorder
- Sequence numbers start at 1 and are contiguous
- Events are frozen once recorded
- In-memory only, thread-safe

The log is the side output that external observers (and tests)
read notifications from. It is also the input to replay.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from threading import Lock
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from core.events.errors import EventSequenceError


@dataclass(frozen=True)
class LedgerEvent:
    """
    Immutable record of one accepted ledger mutation.

    Fields:
        sequence:       Position in the log (1-based, contiguous).
        event_type:     Versioned type (e.g. 'lending.book.borrowed.v1').
        actor_id:       Identity whose command produced the event.
        payload:        Event data built by the engine's payload builder.
                        Stored as a read-only copy.
        occurred_at:    Command issue time.
        command_id:     Command that produced the event (None for genesis).
        correlation_id: Story grouping (None for genesis).
    """

    sequence: int
    event_type: str
    actor_id: str
    payload: Mapping[str, Any]
    occurred_at: datetime
    command_id: Optional[uuid.UUID] = None
    correlation_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "event_type": self.event_type,
            "actor_id": self.actor_id,
            "payload": dict(self.payload),
            "occurred_at": self.occurred_at.isoformat(),
            "command_id": str(self.command_id) if self.command_id else None,
            "correlation_id": (
                str(self.correlation_id) if self.correlation_id else None
            ),
        }


class EventLog:
    """In-memory append-only log of LedgerEvents."""

    def __init__(self):
        self._events: List[LedgerEvent] = []
        self._lock = Lock()

    def record(
        self,
        event_type: str,
        payload: Mapping[str, Any],
        *,
        actor_id: str,
        occurred_at: datetime,
        command_id: Optional[uuid.UUID] = None,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> LedgerEvent:
        """Create the next event in sequence and append it."""
        with self._lock:
            event = LedgerEvent(
                sequence=len(self._events) + 1,
                event_type=event_type,
                actor_id=actor_id,
                payload=payload,
                occurred_at=occurred_at,
                command_id=command_id,
                correlation_id=correlation_id,
            )
            self._events.append(event)
        return event

    def append(self, event: LedgerEvent) -> LedgerEvent:
        """Append an already-built event (replay). Sequence must continue."""
        with self._lock:
            expected = len(self._events) + 1
            if event.sequence != expected:
                raise EventSequenceError(expected, event.sequence)
            self._events.append(event)
        return event

    def all(self) -> Tuple[LedgerEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def of_type(self, event_type: str) -> Tuple[LedgerEvent, ...]:
        with self._lock:
            return tuple(e for e in self._events if e.event_type == event_type)

    def last(self) -> Optional[LedgerEvent]:
        with self._lock:
            return self._events[-1] if self._events else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __iter__(self) -> Iterator[LedgerEvent]:
        return iter(self.all())
