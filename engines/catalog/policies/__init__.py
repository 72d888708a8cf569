"""
Library Ledger Catalog Engine — Policies
"""

from __future__ import annotations

from typing import Callable, Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason


def content_id_required_policy(command: Command) -> Optional[RejectionReason]:
    content_id = command.payload.get("content_id")
    if not content_id or not content_id.strip():
        return RejectionReason(
            code=ReasonCode.EMPTY_CONTENT_ID,
            message="Content identifier must not be empty.",
            policy_name="content_id_required_policy")
    return None


def initial_stock_must_be_positive_policy(
    command: Command,
) -> Optional[RejectionReason]:
    if command.payload.get("stock", 0) <= 0:
        return RejectionReason(
            code=ReasonCode.INVALID_STOCK,
            message="Stock must be greater than 0.",
            policy_name="initial_stock_must_be_positive_policy")
    return None


def book_must_exist_policy(
    command: Command, book_lookup: Callable[[int], object],
) -> Optional[RejectionReason]:
    book_id = command.payload.get("book_id")
    if book_lookup(book_id) is None:
        return RejectionReason(
            code=ReasonCode.BOOK_NOT_FOUND,
            message=f"Book {book_id} does not exist.",
            policy_name="book_must_exist_policy")
    return None


def new_stock_must_not_be_negative_policy(
    command: Command,
) -> Optional[RejectionReason]:
    if command.payload.get("new_stock", 0) < 0:
        return RejectionReason(
            code=ReasonCode.INVALID_STOCK,
            message="Stock must not be negative.",
            policy_name="new_stock_must_not_be_negative_policy")
    return None
