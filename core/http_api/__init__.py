"""
Library Ledger HTTP API - Public API
=====================================
"""

from core.http_api.contracts import (
    AdminTransferHttpRequest,
    BookAddHttpRequest,
    BookStockUpdateHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    LoanHttpRequest,
    MemberRegisterHttpRequest,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    NOT_FOUND,
    error_response,
    http_status_for,
    map_rejection_reason,
    rejection_response,
    success_response,
)

__all__ = [
    "AdminTransferHttpRequest",
    "BookAddHttpRequest",
    "BookStockUpdateHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "LoanHttpRequest",
    "MemberRegisterHttpRequest",
    "INVALID_REQUEST",
    "METHOD_NOT_ALLOWED",
    "NOT_FOUND",
    "error_response",
    "http_status_for",
    "map_rejection_reason",
    "rejection_response",
    "success_response",
]
