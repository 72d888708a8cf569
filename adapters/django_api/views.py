"""
Library Ledger Django Adapter Views
===================================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import get_ledger_settings, get_library
from core.http_api.contracts import (
    AdminTransferHttpRequest,
    BookAddHttpRequest,
    BookStockUpdateHttpRequest,
    LoanHttpRequest,
    MemberRegisterHttpRequest,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    error_response,
    http_status_for,
)
from core.http_api.handlers import (
    get_admin,
    get_book_detail,
    get_book_history,
    get_member_detail,
    get_member_history,
    get_stats,
    list_books,
    list_loans,
    post_admin_transfer,
    post_book_add,
    post_book_stock_update,
    post_loan_borrow,
    post_loan_return,
    post_member_register,
)


def _respond(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=http_status_for(payload))


def _json_error(code: str, message: str) -> JsonResponse:
    return _respond(error_response(code=code, message=message, details={}))


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        METHOD_NOT_ALLOWED,
        "Method not allowed for this endpoint.",
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _caller_from_request(request: HttpRequest) -> str:
    header = get_ledger_settings().actor_header
    caller = request.headers.get(header, "").strip()
    if not caller:
        raise ValueError(f"{header} header is required.")
    return caller


def _dispatch_read(read_handler, request: HttpRequest, *args) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(read_handler(*args, get_library()))


def _dispatch_write(write_handler, request_contract_factory, request: HttpRequest,
                    **route_kwargs) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        caller = _caller_from_request(request)
        contract = request_contract_factory(body=body, caller=caller, **route_kwargs)
    except (ValueError, KeyError) as exc:
        message = (
            f"Missing field: {exc.args[0]}." if isinstance(exc, KeyError) else str(exc)
        )
        return _json_error(INVALID_REQUEST, message)

    return _respond(write_handler(contract, get_library()))


def _book_add_contract_factory(*, body, caller):
    return BookAddHttpRequest(
        caller=caller,
        content_id=body["content_id"],
        stock=body["stock"],
    )


def _book_stock_contract_factory(*, body, caller, book_id):
    return BookStockUpdateHttpRequest(
        caller=caller,
        book_id=book_id,
        new_stock=body["new_stock"],
    )


def _member_register_contract_factory(*, body, caller):
    return MemberRegisterHttpRequest(caller=caller, name=body["name"])


def _loan_contract_factory(*, body, caller):
    return LoanHttpRequest(caller=caller, book_id=body["book_id"])


def _admin_transfer_contract_factory(*, body, caller):
    return AdminTransferHttpRequest(
        caller=caller,
        new_admin_id=body["new_admin_id"],
    )


# ── Books ─────────────────────────────────────────────────────

@csrf_exempt
def books_list_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_read(list_books, request)


@csrf_exempt
def books_add_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(post_book_add, _book_add_contract_factory, request)


@csrf_exempt
def book_detail_view(request: HttpRequest, book_id: int) -> JsonResponse:
    return _dispatch_read(get_book_detail, request, book_id)


@csrf_exempt
def book_stock_view(request: HttpRequest, book_id: int) -> JsonResponse:
    return _dispatch_write(
        post_book_stock_update,
        _book_stock_contract_factory,
        request,
        book_id=book_id,
    )


@csrf_exempt
def book_history_view(request: HttpRequest, book_id: int) -> JsonResponse:
    return _dispatch_read(get_book_history, request, book_id)


# ── Members ───────────────────────────────────────────────────

@csrf_exempt
def members_register_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        post_member_register,
        _member_register_contract_factory,
        request,
    )


@csrf_exempt
def member_detail_view(request: HttpRequest, address: str) -> JsonResponse:
    return _dispatch_read(get_member_detail, request, address)


@csrf_exempt
def member_history_view(request: HttpRequest, address: str) -> JsonResponse:
    return _dispatch_read(get_member_history, request, address)


# ── Loans ─────────────────────────────────────────────────────

@csrf_exempt
def loans_borrow_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(post_loan_borrow, _loan_contract_factory, request)


@csrf_exempt
def loans_return_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(post_loan_return, _loan_contract_factory, request)


@csrf_exempt
def loans_history_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_read(list_loans, request)


# ── Stats & Admin ─────────────────────────────────────────────

@csrf_exempt
def stats_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_read(get_stats, request)


@csrf_exempt
def admin_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_read(get_admin, request)


@csrf_exempt
def admin_transfer_view(request: HttpRequest) -> JsonResponse:
    return _dispatch_write(
        post_admin_transfer,
        _admin_transfer_contract_factory,
        request,
    )
