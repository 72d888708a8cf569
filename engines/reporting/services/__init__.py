"""
Library Ledger Reporting Engine — Library Statistics
======================================================
StatsAggregator: read-only summary counts.

This engine has no commands, no events, and no state of its own.
Every figure is read from the owning projection:

    total_books    ← Catalog
    total_members  ← Membership
    total_borrows  ← Lending (all records)
    active_loans   ← Lending (records with returned=False)

active_loans is maintained incrementally by Lending, so a stats call
costs O(1) regardless of history length.
"""

from __future__ import annotations

from typing import NamedTuple


class LibraryStats(NamedTuple):
    total_books: int
    total_members: int
    total_borrows: int
    active_loans: int

    def to_dict(self) -> dict:
        return self._asdict()


class StatsService:
    def __init__(self, *, catalog_store, membership_store, lending_store):
        self._catalog_store = catalog_store
        self._membership_store = membership_store
        self._lending_store = lending_store

    def get_library_stats(self) -> LibraryStats:
        return LibraryStats(
            total_books=self._catalog_store.book_count,
            total_members=self._membership_store.member_count,
            total_borrows=self._lending_store.borrow_count,
            active_loans=self._lending_store.active_loan_count,
        )
