"""
Library Ledger HTTP API - Framework-Agnostic Handlers
=====================================================
Pure handler functions over contracts and an injected Library.

Every handler returns a response envelope. Ledger rejections become
error envelopes carrying the rejection code; nothing here raises for
a rejected command.
"""

from __future__ import annotations

import logging
from typing import Any

from core.commands.errors import LedgerError
from core.http_api.contracts import (
    AdminTransferHttpRequest,
    BookAddHttpRequest,
    BookStockUpdateHttpRequest,
    LoanHttpRequest,
    MemberRegisterHttpRequest,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    NOT_FOUND,
    error_response,
    rejection_response,
    success_response,
)

logger = logging.getLogger("libledger.http_api")


def _run_write(write_call) -> dict[str, Any]:
    try:
        data = write_call()
    except LedgerError as exc:
        return rejection_response(exc.reason)
    except (TypeError, ValueError) as exc:
        return error_response(code=INVALID_REQUEST, message=str(exc))
    return success_response(data)


def _serialize_records(records) -> dict[str, Any]:
    return {
        "items": [record.to_dict() for record in records],
        "count": len(records),
    }


# ══════════════════════════════════════════════════════════════
# BOOKS
# ══════════════════════════════════════════════════════════════

def list_books(library) -> dict[str, Any]:
    books = [library.get_book(book_id) for book_id in library.get_all_book_ids()]
    return success_response(_serialize_records(books))


def get_book_detail(book_id: int, library) -> dict[str, Any]:
    book = library.get_book(book_id)
    if book is None:
        return error_response(
            code=NOT_FOUND,
            message=f"Book {book_id} does not exist.",
            details={"book_id": book_id},
        )
    return success_response(book.to_dict())


def get_book_history(book_id: int, library) -> dict[str, Any]:
    return success_response(
        _serialize_records(library.get_book_borrow_history(book_id))
    )


def post_book_add(request: BookAddHttpRequest, library) -> dict[str, Any]:
    def _call():
        book_id = library.add_book(
            request.content_id, request.stock, caller=request.caller)
        return {"book_id": book_id}

    return _run_write(_call)


def post_book_stock_update(
    request: BookStockUpdateHttpRequest,
    library,
) -> dict[str, Any]:
    def _call():
        library.update_book_stock(
            request.book_id, request.new_stock, caller=request.caller)
        return library.get_book(request.book_id).to_dict()

    return _run_write(_call)


# ══════════════════════════════════════════════════════════════
# MEMBERS
# ══════════════════════════════════════════════════════════════

def get_member_detail(address: str, library) -> dict[str, Any]:
    member = library.get_member(address)
    return success_response({
        "address": address,
        "is_member": member is not None and member.is_registered,
        "current_borrow": member.current_borrow if member is not None else 0,
        "member": member.to_dict() if member is not None else None,
    })


def get_member_history(address: str, library) -> dict[str, Any]:
    return success_response(
        _serialize_records(library.get_member_borrow_history(address))
    )


def post_member_register(
    request: MemberRegisterHttpRequest,
    library,
) -> dict[str, Any]:
    def _call():
        library.register_member(request.name, caller=request.caller)
        return library.get_member(request.caller).to_dict()

    return _run_write(_call)


# ══════════════════════════════════════════════════════════════
# LOANS
# ══════════════════════════════════════════════════════════════

def list_loans(library) -> dict[str, Any]:
    return success_response(
        _serialize_records(library.get_all_borrow_history())
    )


def post_loan_borrow(request: LoanHttpRequest, library) -> dict[str, Any]:
    def _call():
        record_id = library.borrow_book(request.book_id, caller=request.caller)
        return {"record_id": record_id, "book_id": request.book_id}

    return _run_write(_call)


def post_loan_return(request: LoanHttpRequest, library) -> dict[str, Any]:
    def _call():
        library.return_book(request.book_id, caller=request.caller)
        return {"book_id": request.book_id, "returned": True}

    return _run_write(_call)


# ══════════════════════════════════════════════════════════════
# STATS & ADMIN
# ══════════════════════════════════════════════════════════════

def get_stats(library) -> dict[str, Any]:
    return success_response(library.get_library_stats().to_dict())


def get_admin(library) -> dict[str, Any]:
    return success_response({"admin": library.admin})


def post_admin_transfer(
    request: AdminTransferHttpRequest,
    library,
) -> dict[str, Any]:
    def _call():
        previous = library.admin
        library.transfer_admin(request.new_admin_id, caller=request.caller)
        logger.info(f"Admin transferred over HTTP: {previous} -> {library.admin}")
        return {"admin": library.admin}

    return _run_write(_call)
