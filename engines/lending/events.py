"""
Library Ledger Lending Engine — Event Types and Payload Builders
==================================================================
Engine: Lending (loan lifecycle and borrow history)

Catalog and Membership projections subscribe to these event types to
move stock and member borrow state. Lending owns only the history.
"""

from __future__ import annotations

from core.commands.base import Command

LENDING_BOOK_BORROWED_V1 = "lending.book.borrowed.v1"
LENDING_BOOK_RETURNED_V1 = "lending.book.returned.v1"

LENDING_EVENT_TYPES = (
    LENDING_BOOK_BORROWED_V1,
    LENDING_BOOK_RETURNED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "lending.book.borrow.request": LENDING_BOOK_BORROWED_V1,
    "lending.book.return.request": LENDING_BOOK_RETURNED_V1,
}

# current_borrow value for a member with no active loan. Book ids start at 1.
NO_ACTIVE_LOAN = 0


def resolve_lending_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def build_book_borrowed_payload(command: Command, *, record_id: int) -> dict:
    return {
        "record_id": record_id,
        "borrower": command.actor_id,
        "book_id": command.payload["book_id"],
        "borrow_time": command.issued_at,
    }


def build_book_returned_payload(command: Command, *, record_id: int) -> dict:
    return {
        "record_id": record_id,
        "borrower": command.actor_id,
        "book_id": command.payload["book_id"],
        "return_time": command.issued_at,
    }
