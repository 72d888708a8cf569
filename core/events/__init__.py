"""
Library Ledger Event Bus — Public API
=======================================
The event log records truth. The dispatcher distributes it.
"""

from core.events.dispatcher import dispatch
from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    EventSequenceError,
    InvalidEventTypeFormat,
)
from core.events.log import EventLog, LedgerEvent
from core.events.registry import ALL_EVENTS, SubscriberRegistry

__all__ = [
    "dispatch",
    "EventLog",
    "LedgerEvent",
    "SubscriberRegistry",
    "ALL_EVENTS",
    "EventBusError",
    "EventSequenceError",
    "InvalidEventTypeFormat",
    "DuplicateSubscriberError",
]
