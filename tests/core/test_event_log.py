"""
Library Ledger Event Bus Tests
===============================
Append-only log, subscriber registry, and never-raising dispatch.
"""

from datetime import datetime, timezone

import pytest

from core.events import (
    ALL_EVENTS,
    DuplicateSubscriberError,
    EventLog,
    EventSequenceError,
    InvalidEventTypeFormat,
    LedgerEvent,
    SubscriberRegistry,
    dispatch,
)

NOW = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _record(log, event_type="catalog.book.added.v1", **payload):
    return log.record(event_type, payload, actor_id="0xadmin", occurred_at=NOW)


# ══════════════════════════════════════════════════════════════
# EVENT LOG
# ══════════════════════════════════════════════════════════════

class TestEventLog:
    def test_sequence_starts_at_one_and_is_contiguous(self):
        log = EventLog()
        first = _record(log, book_id=1)
        second = _record(log, book_id=2)
        assert (first.sequence, second.sequence) == (1, 2)
        assert len(log) == 2

    def test_all_returns_snapshot_in_order(self):
        log = EventLog()
        _record(log, book_id=1)
        snapshot = log.all()
        _record(log, book_id=2)
        assert len(snapshot) == 1
        assert [e.payload["book_id"] for e in log] == [1, 2]

    def test_of_type_filters(self):
        log = EventLog()
        _record(log, book_id=1)
        _record(log, "membership.member.registered.v1", address="0xa")
        assert len(log.of_type("membership.member.registered.v1")) == 1

    def test_last(self):
        log = EventLog()
        assert log.last() is None
        event = _record(log, book_id=1)
        assert log.last() == event

    def test_events_are_frozen(self):
        event = _record(EventLog(), book_id=1)
        with pytest.raises(Exception):
            event.sequence = 5

    def test_payload_is_a_read_only_copy(self):
        payload = {"book_id": 1, "stock": 5}
        event = EventLog().record(
            "catalog.book.added.v1", payload, actor_id="0xadmin", occurred_at=NOW)
        payload["stock"] = 999
        assert event.payload["stock"] == 5
        with pytest.raises(TypeError):
            event.payload["stock"] = 999
        with pytest.raises(TypeError):
            del event.payload["book_id"]

    def test_to_dict_payload_is_detached(self):
        event = _record(EventLog(), book_id=1)
        data = event.to_dict()
        data["payload"]["book_id"] = 7
        assert event.payload["book_id"] == 1

    def test_append_requires_next_sequence(self):
        log = EventLog()
        stray = LedgerEvent(
            sequence=2, event_type="catalog.book.added.v1",
            actor_id="0xadmin", payload={}, occurred_at=NOW,
        )
        with pytest.raises(EventSequenceError) as exc_info:
            log.append(stray)
        assert exc_info.value.expected == 1
        assert len(log) == 0

    def test_to_dict(self):
        event = _record(EventLog(), book_id=1)
        data = event.to_dict()
        assert data["sequence"] == 1
        assert data["occurred_at"] == NOW.isoformat()
        assert data["command_id"] is None


# ══════════════════════════════════════════════════════════════
# SUBSCRIBER REGISTRY
# ══════════════════════════════════════════════════════════════

class TestSubscriberRegistry:
    def test_register_and_lookup(self):
        registry = SubscriberRegistry()

        def handler(event):
            pass

        registry.register_subscriber("catalog.book.added.v1", handler, "audit")
        assert registry.get_subscribers("catalog.book.added.v1") == [(handler, "audit")]

    def test_wildcard_receives_every_type(self):
        registry = SubscriberRegistry()

        def handler(event):
            pass

        registry.register_subscriber(ALL_EVENTS, handler, "tap")
        assert registry.get_subscribers("lending.book.borrowed.v1") == [(handler, "tap")]

    def test_bad_event_type_format(self):
        with pytest.raises(InvalidEventTypeFormat):
            SubscriberRegistry().register_subscriber("borrowed", lambda e: None, "x")

    def test_duplicate_handler_rejected(self):
        registry = SubscriberRegistry()

        def handler(event):
            pass

        registry.register_subscriber("catalog.book.added.v1", handler, "a")
        with pytest.raises(DuplicateSubscriberError):
            registry.register_subscriber("catalog.book.added.v1", handler, "b")


# ══════════════════════════════════════════════════════════════
# DISPATCH
# ══════════════════════════════════════════════════════════════

class TestDispatch:
    def test_no_subscribers(self):
        event = _record(EventLog(), book_id=1)
        result = dispatch(event, SubscriberRegistry())
        assert result["subscribers_notified"] == 0

    def test_failing_subscriber_does_not_stop_others(self):
        registry = SubscriberRegistry()
        seen = []

        def broken(event):
            raise RuntimeError("subscriber down")

        def healthy(event):
            seen.append(event.sequence)

        registry.register_subscriber("catalog.book.added.v1", broken, "broken")
        registry.register_subscriber("catalog.book.added.v1", healthy, "healthy")

        result = dispatch(_record(EventLog(), book_id=1), registry)

        assert result["subscribers_notified"] == 1
        assert result["subscribers_failed"] == 1
        assert result["failures"][0]["error_type"] == "RuntimeError"
        assert seen == [1]
