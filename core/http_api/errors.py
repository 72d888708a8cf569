"""
Library Ledger HTTP API - Error Mapping
=======================================
Stable transport error mapping for command rejections and handler failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import (
    AUTHORIZATION_CODES,
    STATE_CONFLICT_CODES,
    VALIDATION_CODES,
    RejectionReason,
)
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

INVALID_REQUEST = "INVALID_REQUEST"
NOT_FOUND = "NOT_FOUND"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

_TRANSPORT_STATUS = {
    INVALID_REQUEST: 400,
    NOT_FOUND: 404,
    METHOD_NOT_ALLOWED: 405,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details={"policy_name": reason.policy_name},
    )


def rejection_response(reason: RejectionReason) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
    )


def http_status_for(response: dict[str, Any]) -> int:
    """
    Status code for a response envelope.

    Authorization → 403, validation → 400, state conflict → 409.
    Unknown error codes are server faults.
    """
    if response.get("ok"):
        return 200
    code = response["error"]["code"]
    if code in _TRANSPORT_STATUS:
        return _TRANSPORT_STATUS[code]
    if code in AUTHORIZATION_CODES:
        return 403
    if code in VALIDATION_CODES:
        return 400
    if code in STATE_CONFLICT_CODES:
        return 409
    return 500
