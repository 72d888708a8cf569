"""
Library Ledger — Root State Object
====================================
Library composes the five components and is the only public surface
for ledger operations.

Every mutation follows one path:

    request → Command (stamped by the Clock) → CommandBus
            → engine service: policies, payload, record_event
            → EventLog.record → every projection applies the event
            → dispatch to subscribers

A single lock serializes mutations. Policies run before anything is
recorded, so a rejected command leaves no trace in state or log.
Reads take the same lock, so they never observe an event that is
recorded but not yet applied to every projection.
"""

from __future__ import annotations

import logging
import uuid
from threading import RLock
from typing import Callable, Iterable, Optional, Tuple

from core.bootstrap.invariants import check_ledger_invariants
from core.commands.base import Command
from core.commands.bus import CommandBus
from core.events.dispatcher import dispatch
from core.events.log import EventLog, LedgerEvent
from core.events.registry import SubscriberRegistry
from core.replay.errors import ReplayError
from core.replay.event_replayer import replay_events
from core.time.clock import Clock, SystemClock
from engines.admin.commands import ADMIN_COMMAND_TYPES, AdminTransferRequest
from engines.admin.events import (
    ADMIN_AUTHORITY_ESTABLISHED_V1,
    ADMIN_EVENT_TYPES,
    build_authority_established_payload,
)
from engines.admin.services import AdminProjectionStore, AdminService
from engines.catalog.commands import (
    CATALOG_COMMAND_TYPES,
    BookAddRequest,
    BookStockUpdateRequest,
)
from engines.catalog.events import CATALOG_EVENT_TYPES
from engines.catalog.services import (
    BookRecord,
    CatalogProjectionStore,
    CatalogService,
)
from engines.lending.commands import (
    LENDING_COMMAND_TYPES,
    BookBorrowRequest,
    BookReturnRequest,
)
from engines.lending.events import LENDING_EVENT_TYPES
from engines.lending.services import (
    BorrowRecord,
    LendingProjectionStore,
    LendingService,
)
from engines.membership.commands import (
    MEMBERSHIP_COMMAND_TYPES,
    MemberRegisterRequest,
)
from engines.membership.events import MEMBERSHIP_EVENT_TYPES
from engines.membership.services import (
    MemberRecord,
    MembershipProjectionStore,
    MembershipService,
)
from engines.reporting.services import LibraryStats, StatsService

logger = logging.getLogger("libledger.library")

LEDGER_EVENT_TYPES = frozenset(
    ADMIN_EVENT_TYPES
    + CATALOG_EVENT_TYPES
    + MEMBERSHIP_EVENT_TYPES
    + LENDING_EVENT_TYPES
)


class Library:
    """
    Access-controlled lending ledger.

    Args:
        admin_id:            Creator identity; becomes the initial admin.
                             None builds an empty ledger for replay only.
        clock:               Time source for command stamps.
        subscriber_registry: Observers notified of every recorded event.
    """

    def __init__(
        self,
        admin_id: Optional[str],
        *,
        clock: Optional[Clock] = None,
        subscriber_registry: Optional[SubscriberRegistry] = None,
    ):
        if admin_id is not None and (not admin_id or not isinstance(admin_id, str)):
            raise ValueError("admin_id must be a non-empty string.")

        self._clock = clock or SystemClock()
        self._subscribers = subscriber_registry or SubscriberRegistry()
        self._event_log = EventLog()
        self._lock = RLock()

        self._admin_store = AdminProjectionStore()
        self._catalog_store = CatalogProjectionStore()
        self._membership_store = MembershipProjectionStore()
        self._lending_store = LendingProjectionStore()
        self._projections = (
            self._admin_store,
            self._catalog_store,
            self._membership_store,
            self._lending_store,
        )

        self._admin_service = AdminService(
            record_event=self._record_event,
            projection_store=self._admin_store,
        )
        self._catalog_service = CatalogService(
            record_event=self._record_event,
            projection_store=self._catalog_store,
            admin_lookup=lambda: self._admin_store.admin_id,
        )
        self._membership_service = MembershipService(
            record_event=self._record_event,
            projection_store=self._membership_store,
        )
        self._lending_service = LendingService(
            record_event=self._record_event,
            projection_store=self._lending_store,
            is_member=self._membership_store.is_member,
            current_borrow_lookup=self._membership_store.get_current_borrow,
            book_lookup=self._catalog_store.get_book,
        )
        self._stats_service = StatsService(
            catalog_store=self._catalog_store,
            membership_store=self._membership_store,
            lending_store=self._lending_store,
        )

        self._bus = CommandBus()
        for command_types, service in (
            (ADMIN_COMMAND_TYPES, self._admin_service),
            (CATALOG_COMMAND_TYPES, self._catalog_service),
            (MEMBERSHIP_COMMAND_TYPES, self._membership_service),
            (LENDING_COMMAND_TYPES, self._lending_service),
        ):
            for ct in sorted(command_types):
                self._bus.register_handler(ct, service)

        if admin_id is not None:
            self._establish_admin(admin_id)

    # ══════════════════════════════════════════════════════════
    # CONSTRUCTION FROM HISTORY
    # ══════════════════════════════════════════════════════════

    @classmethod
    def from_events(
        cls,
        events: Iterable[LedgerEvent],
        *,
        clock: Optional[Clock] = None,
        subscriber_registry: Optional[SubscriberRegistry] = None,
    ) -> "Library":
        """
        Rebuild a Library by replaying a recorded event log.

        Replayed events are not dispatched to subscribers; only events
        recorded after the rebuild are.
        The rebuilt ledger is checked against every ledger invariant.
        """
        events = sorted(events, key=lambda e: e.sequence)
        if not events or events[0].event_type != ADMIN_AUTHORITY_ESTABLISHED_V1:
            raise ReplayError(
                "Event log must begin with "
                f"'{ADMIN_AUTHORITY_ESTABLISHED_V1}'."
            )
        library = cls(None, clock=clock, subscriber_registry=subscriber_registry)
        with library._lock:
            replay_events(
                events,
                apply=library._apply_replayed,
                known_event_types=LEDGER_EVENT_TYPES,
            )
        check_ledger_invariants(library)
        return library

    # ══════════════════════════════════════════════════════════
    # EVENT RECORDING (single write path)
    # ══════════════════════════════════════════════════════════

    def _record_event(self, *, command: Command, event_type: str,
                      payload: dict) -> LedgerEvent:
        event = self._event_log.record(
            event_type,
            payload,
            actor_id=command.actor_id,
            occurred_at=command.issued_at,
            command_id=command.command_id,
            correlation_id=command.correlation_id,
        )
        self._apply(event)
        return event

    def _apply(self, event: LedgerEvent) -> None:
        for projection in self._projections:
            projection.apply(event.event_type, event.payload)

    def _apply_replayed(self, event: LedgerEvent) -> None:
        self._event_log.append(event)
        self._apply(event)

    def _establish_admin(self, admin_id: str) -> None:
        with self._lock:
            now = self._clock.now_utc()
            event = self._event_log.record(
                ADMIN_AUTHORITY_ESTABLISHED_V1,
                build_authority_established_payload(admin_id, now),
                actor_id=admin_id,
                occurred_at=now,
            )
            self._apply(event)
            dispatch(event, self._subscribers)
        logger.info(f"Ledger created with admin {admin_id}")

    def _submit(self, request, caller: str) -> LedgerEvent:
        with self._lock:
            command = request.to_command(
                actor_id=caller,
                command_id=uuid.uuid4(),
                correlation_id=uuid.uuid4(),
                issued_at=self._clock.now_utc(),
            )
            result = self._bus.handle(command)
            event = result.execution_result
            dispatch(event, self._subscribers)
        return event

    # ══════════════════════════════════════════════════════════
    # ADMIN AUTHORITY
    # ══════════════════════════════════════════════════════════

    @property
    def admin(self) -> Optional[str]:
        with self._lock:
            return self._admin_store.admin_id

    def transfer_admin(self, new_admin_id: str, *, caller: str) -> None:
        self._submit(AdminTransferRequest(new_admin_id=new_admin_id), caller)

    # ══════════════════════════════════════════════════════════
    # BOOK CATALOG
    # ══════════════════════════════════════════════════════════

    def add_book(self, content_id: str, stock: int, *, caller: str) -> int:
        event = self._submit(
            BookAddRequest(content_id=content_id, stock=stock), caller)
        return event.payload["book_id"]

    def update_book_stock(self, book_id: int, new_stock: int, *, caller: str) -> None:
        self._submit(
            BookStockUpdateRequest(book_id=book_id, new_stock=new_stock), caller)

    def get_book(self, book_id: int) -> Optional[BookRecord]:
        with self._lock:
            return self._catalog_store.get_book(book_id)

    def get_all_book_ids(self) -> Tuple[int, ...]:
        with self._lock:
            return self._catalog_store.get_all_book_ids()

    @property
    def book_count(self) -> int:
        with self._lock:
            return self._catalog_store.book_count

    # ══════════════════════════════════════════════════════════
    # MEMBER REGISTRY
    # ══════════════════════════════════════════════════════════

    def register_member(self, name: str, *, caller: str) -> None:
        self._submit(MemberRegisterRequest(name=name), caller)

    def get_member(self, address: str) -> Optional[MemberRecord]:
        with self._lock:
            return self._membership_store.get_member(address)

    def is_member(self, address: str) -> bool:
        with self._lock:
            return self._membership_store.is_member(address)

    def get_all_members(self) -> Tuple[MemberRecord, ...]:
        with self._lock:
            return self._membership_store.all_members()

    @property
    def member_count(self) -> int:
        with self._lock:
            return self._membership_store.member_count

    # ══════════════════════════════════════════════════════════
    # LOAN LEDGER
    # ══════════════════════════════════════════════════════════

    def borrow_book(self, book_id: int, *, caller: str) -> int:
        event = self._submit(BookBorrowRequest(book_id=book_id), caller)
        return event.payload["record_id"]

    def return_book(self, book_id: int, *, caller: str) -> None:
        self._submit(BookReturnRequest(book_id=book_id), caller)

    def get_current_borrow(self, address: str) -> int:
        with self._lock:
            return self._membership_store.get_current_borrow(address)

    def get_all_borrow_history(self) -> Tuple[BorrowRecord, ...]:
        with self._lock:
            return self._lending_store.get_all_borrow_history()

    def get_member_borrow_history(self, address: str) -> Tuple[BorrowRecord, ...]:
        with self._lock:
            return self._lending_store.get_member_borrow_history(address)

    def get_book_borrow_history(self, book_id: int) -> Tuple[BorrowRecord, ...]:
        with self._lock:
            return self._lending_store.get_book_borrow_history(book_id)

    @property
    def borrow_count(self) -> int:
        with self._lock:
            return self._lending_store.borrow_count

    # ══════════════════════════════════════════════════════════
    # STATISTICS
    # ══════════════════════════════════════════════════════════

    def get_library_stats(self) -> LibraryStats:
        with self._lock:
            return self._stats_service.get_library_stats()

    # ══════════════════════════════════════════════════════════
    # NOTIFICATIONS
    # ══════════════════════════════════════════════════════════

    @property
    def events(self) -> Tuple[LedgerEvent, ...]:
        """Every recorded event, in sequence order."""
        with self._lock:
            return self._event_log.all()

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    def subscribe(self, event_type: str, handler: Callable[[LedgerEvent], None],
                  subscriber_name: str) -> None:
        self._subscribers.register_subscriber(event_type, handler, subscriber_name)
