"""
Library Ledger Lending Engine — Request Commands
"""

from __future__ import annotations

from dataclasses import dataclass

from core.commands.base import Command

LENDING_BOOK_BORROW_REQUEST = "lending.book.borrow.request"
LENDING_BOOK_RETURN_REQUEST = "lending.book.return.request"

LENDING_COMMAND_TYPES = frozenset({
    LENDING_BOOK_BORROW_REQUEST,
    LENDING_BOOK_RETURN_REQUEST,
})


def _cmd(ct, payload, *, actor_id, command_id, correlation_id, issued_at):
    return Command(
        command_id=command_id, command_type=ct,
        actor_id=actor_id, payload=payload, issued_at=issued_at,
        correlation_id=correlation_id, source_engine="lending",
    )


def _require_book_id(book_id) -> None:
    if isinstance(book_id, bool) or not isinstance(book_id, int):
        raise TypeError("book_id must be an integer.")


@dataclass(frozen=True)
class BookBorrowRequest:
    book_id: int

    def __post_init__(self):
        _require_book_id(self.book_id)

    def to_command(self, **kw) -> Command:
        return _cmd(LENDING_BOOK_BORROW_REQUEST, {
            "book_id": self.book_id,
        }, **kw)


@dataclass(frozen=True)
class BookReturnRequest:
    book_id: int

    def __post_init__(self):
        _require_book_id(self.book_id)

    def to_command(self, **kw) -> Command:
        return _cmd(LENDING_BOOK_RETURN_REQUEST, {
            "book_id": self.book_id,
        }, **kw)
