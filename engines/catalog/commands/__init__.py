"""
Library Ledger Catalog Engine — Request Commands
"""

from __future__ import annotations

from dataclasses import dataclass

from core.commands.base import Command

CATALOG_BOOK_ADD_REQUEST = "catalog.book.add.request"
CATALOG_BOOK_UPDATE_STOCK_REQUEST = "catalog.book.update_stock.request"

CATALOG_COMMAND_TYPES = frozenset({
    CATALOG_BOOK_ADD_REQUEST,
    CATALOG_BOOK_UPDATE_STOCK_REQUEST,
})


def _cmd(ct, payload, *, actor_id, command_id, correlation_id, issued_at):
    return Command(
        command_id=command_id, command_type=ct,
        actor_id=actor_id, payload=payload, issued_at=issued_at,
        correlation_id=correlation_id, source_engine="catalog",
    )


def _require_int(value, field_name: str) -> None:
    # bool is an int subclass; a stock of True is a caller bug.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be an integer.")


@dataclass(frozen=True)
class BookAddRequest:
    """
    Content checks (non-empty id, positive stock) are policies, not
    __post_init__ checks: the admin check must reject first.
    """
    content_id: str
    stock: int

    def __post_init__(self):
        if not isinstance(self.content_id, str):
            raise TypeError("content_id must be a string.")
        _require_int(self.stock, "stock")

    def to_command(self, **kw) -> Command:
        return _cmd(CATALOG_BOOK_ADD_REQUEST, {
            "content_id": self.content_id, "stock": self.stock,
        }, **kw)


@dataclass(frozen=True)
class BookStockUpdateRequest:
    book_id: int
    new_stock: int

    def __post_init__(self):
        _require_int(self.book_id, "book_id")
        _require_int(self.new_stock, "new_stock")

    def to_command(self, **kw) -> Command:
        return _cmd(CATALOG_BOOK_UPDATE_STOCK_REQUEST, {
            "book_id": self.book_id, "new_stock": self.new_stock,
        }, **kw)
