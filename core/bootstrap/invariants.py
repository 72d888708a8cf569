"""
Library Ledger Bootstrap — Invariant Checks
=============================================
Each function verifies one ledger law against a Library.
If any check fails → LedgerInvariantError is raised.

These checks do NOT:
- Auto-fix anything
- Mutate the ledger
- Silence failures

Run after replay, and from tests after every scenario.
"""

import logging

from core.bootstrap.errors import LedgerInvariantError

logger = logging.getLogger("libledger.bootstrap")

NO_ACTIVE_LOAN = 0


# ══════════════════════════════════════════════════════════════
# CHECK 1: Admin Exists
# ══════════════════════════════════════════════════════════════

def check_admin_present(library) -> None:
    if not library.admin:
        raise LedgerInvariantError(
            invariant="ADMIN_PRESENT",
            detail="Ledger has no admin.",
        )


# ══════════════════════════════════════════════════════════════
# CHECK 2: Dense Identifiers
# ══════════════════════════════════════════════════════════════

def check_dense_ids(library) -> None:
    """Book ids and borrow record ids run 1..count with no gaps."""
    book_ids = library.get_all_book_ids()
    if book_ids != tuple(range(1, library.book_count + 1)):
        raise LedgerInvariantError(
            invariant="DENSE_BOOK_IDS",
            detail=f"Book ids {book_ids} are not 1..{library.book_count}.",
        )

    record_ids = tuple(r.record_id for r in library.get_all_borrow_history())
    if record_ids != tuple(range(1, library.borrow_count + 1)):
        raise LedgerInvariantError(
            invariant="DENSE_RECORD_IDS",
            detail=(
                f"Borrow record ids are not 1..{library.borrow_count}."
            ),
        )


# ══════════════════════════════════════════════════════════════
# CHECK 3: Stock Never Negative
# ══════════════════════════════════════════════════════════════

def check_stock_non_negative(library) -> None:
    for book_id in library.get_all_book_ids():
        book = library.get_book(book_id)
        if book.stock < 0:
            raise LedgerInvariantError(
                invariant="STOCK_NON_NEGATIVE",
                detail=f"Book {book_id} has stock {book.stock}.",
            )


# ══════════════════════════════════════════════════════════════
# CHECK 4: Record Shape
# ══════════════════════════════════════════════════════════════

def check_record_shape(library) -> None:
    """Returned records carry a return time; open records do not."""
    for record in library.get_all_borrow_history():
        if record.returned:
            if record.return_time is None:
                raise LedgerInvariantError(
                    invariant="RETURN_TIME",
                    detail=(
                        f"Record {record.record_id} is returned with "
                        f"return_time {record.return_time}."
                    ),
                )
        elif record.return_time is not None:
            raise LedgerInvariantError(
                invariant="RETURN_TIME",
                detail=(
                    f"Record {record.record_id} is open but has "
                    f"return_time {record.return_time}."
                ),
            )


# ══════════════════════════════════════════════════════════════
# CHECK 5: Member Loan Consistency
# ══════════════════════════════════════════════════════════════

def check_member_loans(library) -> None:
    """
    A member's current borrow names a book iff exactly one of their
    records for that book is open, and total_borrowed counts every
    record they ever created.
    """
    for member in library.get_all_members():
        history = library.get_member_borrow_history(member.address)
        open_records = [r for r in history if not r.returned]

        if member.total_borrowed != len(history):
            raise LedgerInvariantError(
                invariant="TOTAL_BORROWED",
                detail=(
                    f"Member {member.address} total_borrowed "
                    f"{member.total_borrowed} != {len(history)} record(s)."
                ),
            )

        if member.current_borrow == NO_ACTIVE_LOAN:
            if open_records:
                raise LedgerInvariantError(
                    invariant="SINGLE_LOAN",
                    detail=(
                        f"Member {member.address} is idle with "
                        f"{len(open_records)} open record(s)."
                    ),
                )
        elif (
            len(open_records) != 1
            or open_records[0].book_id != member.current_borrow
        ):
            raise LedgerInvariantError(
                invariant="SINGLE_LOAN",
                detail=(
                    f"Member {member.address} borrows book "
                    f"{member.current_borrow} but has "
                    f"{len(open_records)} open record(s)."
                ),
            )


# ══════════════════════════════════════════════════════════════
# CHECK 6: Statistics Agree With State
# ══════════════════════════════════════════════════════════════

def check_stats(library) -> None:
    stats = library.get_library_stats()
    history = library.get_all_borrow_history()
    expected = (
        library.book_count,
        library.member_count,
        len(history),
        sum(1 for r in history if not r.returned),
    )
    actual = (
        stats.total_books,
        stats.total_members,
        stats.total_borrows,
        stats.active_loans,
    )
    if actual != expected:
        raise LedgerInvariantError(
            invariant="STATS_CONSISTENT",
            detail=f"Stats {actual} != recomputed {expected}.",
        )


# ══════════════════════════════════════════════════════════════
# RUN ALL
# ══════════════════════════════════════════════════════════════

LEDGER_CHECKS = (
    check_admin_present,
    check_dense_ids,
    check_stock_non_negative,
    check_record_shape,
    check_member_loans,
    check_stats,
)


def check_ledger_invariants(library) -> None:
    """Run every ledger check. First failure raises."""
    for check in LEDGER_CHECKS:
        check(library)
    logger.debug("All ledger invariants hold.")
