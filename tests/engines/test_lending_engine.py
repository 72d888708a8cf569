"""
Library Ledger Lending Engine Tests
====================================
LoanLedger: borrow/return preconditions, history records and indices.

The service is wired to real Catalog and Membership projections so
stock and member borrow state move with each recorded event.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.commands import AuthorizationError, StateConflictError
from core.events import EventLog

NOW = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)
LATER = NOW + timedelta(hours=2)


def kw(actor_id, issued_at=NOW):
    return dict(
        actor_id=actor_id, command_id=uuid.uuid4(),
        correlation_id=uuid.uuid4(), issued_at=issued_at,
    )


class Recorder:
    def __init__(self, *stores):
        self.log = EventLog()
        self.stores = stores

    def __call__(self, *, command, event_type, payload):
        event = self.log.record(
            event_type, payload, actor_id=command.actor_id,
            occurred_at=command.issued_at,
        )
        for store in self.stores:
            store.apply(event_type, payload)
        return event


class Harness:
    def __init__(self, stocks=(2,), members=("0xalice",)):
        from engines.catalog.events import CATALOG_BOOK_ADDED_V1
        from engines.catalog.services import CatalogProjectionStore
        from engines.lending.services import LendingProjectionStore, LendingService
        from engines.membership.events import MEMBERSHIP_MEMBER_REGISTERED_V1
        from engines.membership.services import MembershipProjectionStore

        self.catalog = CatalogProjectionStore()
        self.members = MembershipProjectionStore()
        self.lending = LendingProjectionStore()
        for book_id, stock in enumerate(stocks, start=1):
            self.catalog.apply(CATALOG_BOOK_ADDED_V1, {
                "book_id": book_id, "content_id": f"QmBook{book_id}", "stock": stock,
            })
        for address in members:
            self.members.apply(MEMBERSHIP_MEMBER_REGISTERED_V1, {
                "address": address, "name": address[2:].title(),
            })

        self.recorder = Recorder(self.catalog, self.members, self.lending)
        self.svc = LendingService(
            record_event=self.recorder,
            projection_store=self.lending,
            is_member=self.members.is_member,
            current_borrow_lookup=self.members.get_current_borrow,
            book_lookup=self.catalog.get_book,
        )

    def borrow(self, book_id, actor_id="0xalice", issued_at=NOW):
        from engines.lending.commands import BookBorrowRequest
        return self.svc.execute(
            BookBorrowRequest(book_id=book_id).to_command(**kw(actor_id, issued_at)))

    def give_back(self, book_id, actor_id="0xalice", issued_at=LATER):
        from engines.lending.commands import BookReturnRequest
        return self.svc.execute(
            BookReturnRequest(book_id=book_id).to_command(**kw(actor_id, issued_at)))


# ══════════════════════════════════════════════════════════════
# COMMANDS
# ══════════════════════════════════════════════════════════════

class TestLendingRequests:
    def test_borrow_to_command(self):
        from engines.lending.commands import BookBorrowRequest
        cmd = BookBorrowRequest(book_id=1).to_command(**kw("0xalice"))
        assert cmd.command_type == "lending.book.borrow.request"
        assert cmd.source_engine == "lending"

    def test_book_id_must_be_int(self):
        from engines.lending.commands import BookReturnRequest
        with pytest.raises(TypeError, match="book_id"):
            BookReturnRequest(book_id="1")


# ══════════════════════════════════════════════════════════════
# BORROW
# ══════════════════════════════════════════════════════════════

class TestBorrow:
    def test_borrow_moves_state(self):
        h = Harness(stocks=(2,))
        event = h.borrow(1)

        assert event.event_type == "lending.book.borrowed.v1"
        assert event.payload["record_id"] == 1
        assert h.catalog.get_book(1).stock == 1
        assert h.members.get_current_borrow("0xalice") == 1
        assert h.members.get_member("0xalice").total_borrowed == 1

        record = h.lending.get_record(1)
        assert record.borrower == "0xalice"
        assert record.borrow_time == NOW
        assert record.returned is False
        assert record.return_time is None

    def test_non_member_rejected(self):
        h = Harness()
        with pytest.raises(AuthorizationError, match="registered member"):
            h.borrow(1, actor_id="0xstranger")
        assert h.catalog.get_book(1).stock == 2

    def test_second_loan_rejected(self):
        h = Harness(stocks=(2, 2))
        h.borrow(1)
        with pytest.raises(StateConflictError, match="not yet returned"):
            h.borrow(2)
        assert h.catalog.get_book(2).stock == 2
        assert h.lending.borrow_count == 1

    def test_out_of_stock_rejected(self):
        h = Harness(stocks=(1,), members=("0xalice", "0xbob"))
        h.borrow(1)
        with pytest.raises(StateConflictError, match="out of stock"):
            h.borrow(1, actor_id="0xbob")
        assert h.members.get_current_borrow("0xbob") == 0

    def test_nonexistent_book_is_out_of_stock(self):
        h = Harness()
        with pytest.raises(StateConflictError) as exc_info:
            h.borrow(42)
        assert exc_info.value.code == "OUT_OF_STOCK"

    def test_membership_checked_first(self):
        h = Harness(stocks=(0,))
        with pytest.raises(AuthorizationError):
            h.borrow(1, actor_id="0xstranger")


# ══════════════════════════════════════════════════════════════
# RETURN
# ══════════════════════════════════════════════════════════════

class TestReturn:
    def test_return_restores_state(self):
        h = Harness(stocks=(2,))
        h.borrow(1)
        event = h.give_back(1)

        assert event.event_type == "lending.book.returned.v1"
        assert h.catalog.get_book(1).stock == 2
        assert h.members.get_current_borrow("0xalice") == 0
        record = h.lending.get_record(1)
        assert record.returned is True
        assert record.return_time == LATER

    def test_idle_member_cannot_return(self):
        h = Harness()
        with pytest.raises(StateConflictError, match="not currently borrowing"):
            h.give_back(1)

    def test_wrong_book_rejected(self):
        h = Harness(stocks=(1, 1))
        h.borrow(1)
        with pytest.raises(StateConflictError):
            h.give_back(2)
        assert h.lending.get_record(1).returned is False

    def test_double_return_rejected(self):
        h = Harness()
        h.borrow(1)
        h.give_back(1)
        with pytest.raises(StateConflictError):
            h.give_back(1)
        assert h.catalog.get_book(1).stock == 2

    def test_unregistered_caller_cannot_return(self):
        h = Harness()
        with pytest.raises(StateConflictError):
            h.give_back(1, actor_id="0xstranger")


# ══════════════════════════════════════════════════════════════
# HISTORY & INDICES
# ══════════════════════════════════════════════════════════════

class TestHistory:
    def test_indices_filter_by_member_and_book(self):
        h = Harness(stocks=(3, 3), members=("0xalice", "0xbob"))
        h.borrow(1)
        h.borrow(2, actor_id="0xbob")
        h.give_back(1)
        h.borrow(2)

        assert [r.record_id for r in h.lending.get_all_borrow_history()] == [1, 2, 3]
        assert [r.record_id for r in h.lending.get_member_borrow_history("0xalice")] == [1, 3]
        assert [r.record_id for r in h.lending.get_book_borrow_history(2)] == [2, 3]
        assert h.lending.get_member_borrow_history("0xnobody") == ()
        assert h.lending.get_book_borrow_history(99) == ()

    def test_active_loan_count_tracks_open_records(self):
        h = Harness(stocks=(3,), members=("0xalice", "0xbob"))
        h.borrow(1)
        h.borrow(1, actor_id="0xbob")
        assert h.lending.active_loan_count == 2
        h.give_back(1)
        assert h.lending.active_loan_count == 1
        assert h.lending.active_loan_count == sum(
            1 for r in h.lending.get_all_borrow_history() if not r.returned)

    def test_record_to_dict(self):
        h = Harness()
        h.borrow(1)
        assert h.lending.get_record(1).to_dict() == {
            "record_id": 1, "borrower": "0xalice", "book_id": 1,
            "borrow_time": NOW.isoformat(), "return_time": None, "returned": False,
        }

    def test_unknown_record(self):
        assert Harness().lending.get_record(1) is None

    @pytest.mark.parametrize("key", [True, "1", 1.0, None])
    def test_lookups_only_match_integer_ids(self, key):
        h = Harness()
        h.borrow(1)
        assert h.lending.get_book_borrow_history(key) == ()
        assert h.lending.get_record(key) is None
        assert h.catalog.get_book(key) is None
