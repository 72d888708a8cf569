"""
Library Ledger Lending Engine — Application Service
=====================================================
LoanLedger: borrow/return orchestration and the borrow history.

Per-member state machine: Idle → Borrowed → Idle, cycling
indefinitely. Each cycle produces exactly one BorrowRecord.

History is an arena (record_id - 1 indexes the list) and is
append-only. The only in-place change a record ever sees is the
single returned=False → True transition. Per-member and per-book
views are secondary indices of record ids, maintained at append
time, so filtered queries cost O(k) in matching records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from functools import partial
from typing import Dict, List, Optional, Protocol, Tuple

from core.commands.base import Command
from core.commands.policy import enforce_policies
from core.events.log import LedgerEvent
from engines.lending.commands import (
    LENDING_BOOK_BORROW_REQUEST,
    LENDING_BOOK_RETURN_REQUEST,
)
from engines.lending.events import (
    LENDING_BOOK_BORROWED_V1,
    LENDING_BOOK_RETURNED_V1,
    build_book_borrowed_payload,
    build_book_returned_payload,
    resolve_lending_event_type,
)
from engines.lending.policies import (
    book_must_be_in_stock_policy,
    borrower_must_be_member_policy,
    must_be_borrowing_book_policy,
    no_unreturned_loan_policy,
)

logger = logging.getLogger("libledger.lending")


class RecordEventProtocol(Protocol):
    def __call__(self, *, command: Command, event_type: str, payload: dict) -> LedgerEvent: ...


@dataclass(frozen=True)
class BorrowRecord:
    record_id: int
    borrower: str
    book_id: int
    borrow_time: datetime
    return_time: Optional[datetime] = None
    returned: bool = False

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "borrower": self.borrower,
            "book_id": self.book_id,
            "borrow_time": self.borrow_time.isoformat(),
            "return_time": (
                self.return_time.isoformat() if self.return_time else None
            ),
            "returned": self.returned,
        }


class LendingProjectionStore:
    def __init__(self):
        self._records: List[BorrowRecord] = []
        self._by_member: Dict[str, List[int]] = {}
        self._by_book: Dict[int, List[int]] = {}
        self._open_by_member: Dict[str, int] = {}  # borrower → open record_id

    def apply(self, event_type: str, payload: dict) -> None:
        if event_type == LENDING_BOOK_BORROWED_V1:
            record = BorrowRecord(
                record_id=payload["record_id"],
                borrower=payload["borrower"],
                book_id=payload["book_id"],
                borrow_time=payload["borrow_time"],
            )
            self._records.append(record)
            self._by_member.setdefault(record.borrower, []).append(record.record_id)
            self._by_book.setdefault(record.book_id, []).append(record.record_id)
            self._open_by_member[record.borrower] = record.record_id

        elif event_type == LENDING_BOOK_RETURNED_V1:
            index = payload["record_id"] - 1
            self._records[index] = replace(
                self._records[index],
                returned=True,
                return_time=payload["return_time"],
            )
            self._open_by_member.pop(payload["borrower"], None)

    def _resolve(self, record_ids: List[int]) -> Tuple[BorrowRecord, ...]:
        return tuple(self._records[rid - 1] for rid in record_ids)

    def get_record(self, record_id: int) -> Optional[BorrowRecord]:
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            return None
        if 1 <= record_id <= len(self._records):
            return self._records[record_id - 1]
        return None

    def get_all_borrow_history(self) -> Tuple[BorrowRecord, ...]:
        return tuple(self._records)

    def get_member_borrow_history(self, address: str) -> Tuple[BorrowRecord, ...]:
        return self._resolve(self._by_member.get(address, []))

    def get_book_borrow_history(self, book_id: int) -> Tuple[BorrowRecord, ...]:
        if isinstance(book_id, bool) or not isinstance(book_id, int):
            return ()
        return self._resolve(self._by_book.get(book_id, []))

    def open_record_for(self, address: str) -> Optional[BorrowRecord]:
        record_id = self._open_by_member.get(address)
        if record_id is None:
            return None
        return self._records[record_id - 1]

    @property
    def borrow_count(self) -> int:
        return len(self._records)

    @property
    def active_loan_count(self) -> int:
        # One open record per member at most, so open records == members holding a loan.
        return len(self._open_by_member)

    @property
    def next_record_id(self) -> int:
        return len(self._records) + 1


class LendingService:
    """
    Lookups into Membership and Catalog are injected read-only
    callables. Lending never mutates another engine's state; stock and
    member borrow state follow from the recorded event.
    """

    def __init__(self, *, record_event: RecordEventProtocol,
                 projection_store: LendingProjectionStore,
                 is_member, current_borrow_lookup, book_lookup):
        self._record_event = record_event
        self._projection_store = projection_store
        self._is_member = is_member
        self._current_borrow_lookup = current_borrow_lookup
        self._book_lookup = book_lookup

    def policies_for(self, command: Command) -> tuple:
        if command.command_type == LENDING_BOOK_BORROW_REQUEST:
            return (
                partial(borrower_must_be_member_policy, is_member=self._is_member),
                partial(no_unreturned_loan_policy,
                        current_borrow_lookup=self._current_borrow_lookup),
                partial(book_must_be_in_stock_policy,
                        book_lookup=self._book_lookup),
            )
        if command.command_type == LENDING_BOOK_RETURN_REQUEST:
            return (
                partial(must_be_borrowing_book_policy,
                        current_borrow_lookup=self._current_borrow_lookup),
            )
        raise ValueError(f"Unsupported: {command.command_type}")

    def execute(self, command: Command) -> LedgerEvent:
        event_type = resolve_lending_event_type(command.command_type)
        if event_type is None:
            raise ValueError(f"Unsupported: {command.command_type}")
        enforce_policies(command, self.policies_for(command))

        if event_type == LENDING_BOOK_BORROWED_V1:
            payload = build_book_borrowed_payload(
                command, record_id=self._projection_store.next_record_id)
        else:
            open_record = self._projection_store.open_record_for(command.actor_id)
            payload = build_book_returned_payload(
                command, record_id=open_record.record_id)

        event = self._record_event(
            command=command, event_type=event_type, payload=payload)
        logger.info(
            f"{event_type}: record {payload['record_id']} "
            f"book {payload['book_id']} by {payload['borrower']}")
        return event

    @property
    def projection_store(self) -> LendingProjectionStore:
        return self._projection_store
