"""
Library Ledger Catalog Engine — Application Service
=====================================================
BookCatalog: owns book records and their stock counters.

Books live in an arena: an ordered list indexed by book_id - 1 plus
the implicit counter len(list). Nothing is ever removed, so ids are
sequential from 1 and never reused.

Stock reacts to lending events (borrow −1, return +1). The lending
engine never touches a BookRecord directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import partial
from typing import List, Optional, Protocol, Tuple

from core.commands.base import Command
from core.commands.policy import enforce_policies
from core.events.log import LedgerEvent
from engines.admin.policies import caller_must_be_admin_policy
from engines.catalog.commands import (
    CATALOG_BOOK_ADD_REQUEST,
    CATALOG_BOOK_UPDATE_STOCK_REQUEST,
)
from engines.catalog.events import (
    CATALOG_BOOK_ADDED_V1,
    CATALOG_BOOK_STOCK_UPDATED_V1,
    build_book_added_payload,
    build_book_stock_updated_payload,
    resolve_catalog_event_type,
)
from engines.catalog.policies import (
    book_must_exist_policy,
    content_id_required_policy,
    initial_stock_must_be_positive_policy,
    new_stock_must_not_be_negative_policy,
)
from engines.lending.events import (
    LENDING_BOOK_BORROWED_V1,
    LENDING_BOOK_RETURNED_V1,
)

logger = logging.getLogger("libledger.catalog")


class RecordEventProtocol(Protocol):
    def __call__(self, *, command: Command, event_type: str, payload: dict) -> LedgerEvent: ...


@dataclass(frozen=True)
class BookRecord:
    book_id: int
    content_id: str
    stock: int
    exists: bool = True

    def to_dict(self) -> dict:
        return {
            "book_id": self.book_id,
            "content_id": self.content_id,
            "stock": self.stock,
            "exists": self.exists,
        }


class CatalogProjectionStore:
    def __init__(self):
        self._books: List[BookRecord] = []

    def apply(self, event_type: str, payload: dict) -> None:
        if event_type == CATALOG_BOOK_ADDED_V1:
            self._books.append(BookRecord(
                book_id=payload["book_id"],
                content_id=payload["content_id"],
                stock=payload["stock"],
            ))
        elif event_type == CATALOG_BOOK_STOCK_UPDATED_V1:
            self._set_stock(payload["book_id"], payload["new_stock"])
        elif event_type == LENDING_BOOK_BORROWED_V1:
            book = self._books[payload["book_id"] - 1]
            self._set_stock(book.book_id, book.stock - 1)
        elif event_type == LENDING_BOOK_RETURNED_V1:
            book = self._books[payload["book_id"] - 1]
            self._set_stock(book.book_id, book.stock + 1)

    def _set_stock(self, book_id: int, stock: int) -> None:
        index = book_id - 1
        self._books[index] = replace(self._books[index], stock=stock)

    def get_book(self, book_id: int) -> Optional[BookRecord]:
        if isinstance(book_id, bool) or not isinstance(book_id, int):
            return None
        if 1 <= book_id <= len(self._books):
            return self._books[book_id - 1]
        return None

    def get_all_book_ids(self) -> Tuple[int, ...]:
        return tuple(book.book_id for book in self._books)

    @property
    def book_count(self) -> int:
        return len(self._books)

    @property
    def next_book_id(self) -> int:
        return len(self._books) + 1


class CatalogService:
    def __init__(self, *, record_event: RecordEventProtocol,
                 projection_store: CatalogProjectionStore,
                 admin_lookup):
        self._record_event = record_event
        self._projection_store = projection_store
        self._admin_lookup = admin_lookup

    def policies_for(self, command: Command) -> tuple:
        admin_policy = partial(
            caller_must_be_admin_policy, admin_lookup=self._admin_lookup)
        if command.command_type == CATALOG_BOOK_ADD_REQUEST:
            return (
                admin_policy,
                content_id_required_policy,
                initial_stock_must_be_positive_policy,
            )
        if command.command_type == CATALOG_BOOK_UPDATE_STOCK_REQUEST:
            return (
                admin_policy,
                partial(book_must_exist_policy,
                        book_lookup=self._projection_store.get_book),
                new_stock_must_not_be_negative_policy,
            )
        raise ValueError(f"Unsupported: {command.command_type}")

    def execute(self, command: Command) -> LedgerEvent:
        event_type = resolve_catalog_event_type(command.command_type)
        if event_type is None:
            raise ValueError(f"Unsupported: {command.command_type}")
        enforce_policies(command, self.policies_for(command))

        if event_type == CATALOG_BOOK_ADDED_V1:
            payload = build_book_added_payload(
                command, book_id=self._projection_store.next_book_id)
        else:
            book = self._projection_store.get_book(command.payload["book_id"])
            payload = build_book_stock_updated_payload(
                command, previous_stock=book.stock)

        event = self._record_event(
            command=command, event_type=event_type, payload=payload)
        logger.info(f"{event_type}: book {payload['book_id']}")
        return event

    @property
    def projection_store(self) -> CatalogProjectionStore:
        return self._projection_store
