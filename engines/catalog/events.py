"""
Library Ledger Catalog Engine — Event Types and Payload Builders
==================================================================
Engine: Catalog (book records and stock)

The content identifier is opaque: it is carried into the payload
verbatim and never fetched, parsed, or validated beyond non-emptiness.
"""

from __future__ import annotations

from core.commands.base import Command

CATALOG_BOOK_ADDED_V1 = "catalog.book.added.v1"
CATALOG_BOOK_STOCK_UPDATED_V1 = "catalog.book.stock_updated.v1"

CATALOG_EVENT_TYPES = (
    CATALOG_BOOK_ADDED_V1,
    CATALOG_BOOK_STOCK_UPDATED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "catalog.book.add.request": CATALOG_BOOK_ADDED_V1,
    "catalog.book.update_stock.request": CATALOG_BOOK_STOCK_UPDATED_V1,
}


def resolve_catalog_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def build_book_added_payload(command: Command, *, book_id: int) -> dict:
    return {
        "book_id": book_id,
        "content_id": command.payload["content_id"],
        "stock": command.payload["stock"],
        "added_at": command.issued_at,
    }


def build_book_stock_updated_payload(
    command: Command, *, previous_stock: int,
) -> dict:
    return {
        "book_id": command.payload["book_id"],
        "previous_stock": previous_stock,
        "new_stock": command.payload["new_stock"],
        "updated_at": command.issued_at,
    }
