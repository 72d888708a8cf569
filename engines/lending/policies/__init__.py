"""
Library Ledger Lending Engine — Policies

Borrow policies run in this order: membership, open loan, stock.
"""

from __future__ import annotations

from typing import Callable, Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from engines.lending.events import NO_ACTIVE_LOAN


def borrower_must_be_member_policy(
    command: Command, is_member: Callable[[str], bool],
) -> Optional[RejectionReason]:
    if not is_member(command.actor_id):
        return RejectionReason(
            code=ReasonCode.MEMBER_NOT_REGISTERED,
            message="Caller must be a registered member.",
            policy_name="borrower_must_be_member_policy")
    return None


def no_unreturned_loan_policy(
    command: Command, current_borrow_lookup: Callable[[str], int],
) -> Optional[RejectionReason]:
    current = current_borrow_lookup(command.actor_id)
    if current != NO_ACTIVE_LOAN:
        return RejectionReason(
            code=ReasonCode.LOAN_NOT_RETURNED,
            message=f"Previous loan not yet returned (book {current}).",
            policy_name="no_unreturned_loan_policy")
    return None


def book_must_be_in_stock_policy(
    command: Command, book_lookup: Callable[[int], object],
) -> Optional[RejectionReason]:
    book = book_lookup(command.payload.get("book_id"))
    if book is None or not book.exists or book.stock <= 0:
        return RejectionReason(
            code=ReasonCode.OUT_OF_STOCK,
            message="Book is out of stock.",
            policy_name="book_must_be_in_stock_policy")
    return None


def must_be_borrowing_book_policy(
    command: Command, current_borrow_lookup: Callable[[str], int],
) -> Optional[RejectionReason]:
    book_id = command.payload.get("book_id")
    current = current_borrow_lookup(command.actor_id)
    if current == NO_ACTIVE_LOAN or current != book_id:
        return RejectionReason(
            code=ReasonCode.NOT_BORROWING_BOOK,
            message="Caller is not currently borrowing this book.",
            policy_name="must_be_borrowing_book_policy")
    return None
