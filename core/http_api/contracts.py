"""
Library Ledger HTTP API - Contracts
===================================
Framework-agnostic request/response DTOs for ledger endpoints.

Request contracts check transport shape only (types, caller present).
Business rules stay in the engine policies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


def _require_caller(caller) -> None:
    if not caller or not isinstance(caller, str):
        raise ValueError("caller must be a non-empty string.")


def _require_int(value, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer.")


def _require_str(value, field_name: str) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string.")


@dataclass(frozen=True)
class BookAddHttpRequest:
    caller: str
    content_id: str
    stock: int

    def __post_init__(self):
        _require_caller(self.caller)
        _require_str(self.content_id, "content_id")
        _require_int(self.stock, "stock")


@dataclass(frozen=True)
class BookStockUpdateHttpRequest:
    caller: str
    book_id: int
    new_stock: int

    def __post_init__(self):
        _require_caller(self.caller)
        _require_int(self.book_id, "book_id")
        _require_int(self.new_stock, "new_stock")


@dataclass(frozen=True)
class MemberRegisterHttpRequest:
    caller: str
    name: str

    def __post_init__(self):
        _require_caller(self.caller)
        _require_str(self.name, "name")


@dataclass(frozen=True)
class LoanHttpRequest:
    """Borrow or return: both act on one book for the caller."""

    caller: str
    book_id: int

    def __post_init__(self):
        _require_caller(self.caller)
        _require_int(self.book_id, "book_id")


@dataclass(frozen=True)
class AdminTransferHttpRequest:
    caller: str
    new_admin_id: str

    def __post_init__(self):
        _require_caller(self.caller)
        _require_str(self.new_admin_id, "new_admin_id")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
