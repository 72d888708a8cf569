"""
Library Ledger Command Layer — Rejection Model
================================================
Structured rejection reasons for denied commands.

This is NOT an event. It is an explanation structure carried by
the error raised for the rejected command.

Every rejection must be:
- Deterministic (same state + input → same rejection)
- Auditable (code + message + policy)
- Machine-readable (code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for command rejection.

    Fields:
        code:        Machine-readable rejection code (e.g. 'OUT_OF_STOCK').
        message:     Human-readable explanation.
        policy_name: Name of the policy that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Authorization ─────────────────────────────────────────
    ADMIN_ONLY = "ADMIN_ONLY"
    MEMBER_NOT_REGISTERED = "MEMBER_NOT_REGISTERED"

    # ── Validation ────────────────────────────────────────────
    EMPTY_CONTENT_ID = "EMPTY_CONTENT_ID"
    INVALID_STOCK = "INVALID_STOCK"
    EMPTY_NAME = "EMPTY_NAME"
    BOOK_NOT_FOUND = "BOOK_NOT_FOUND"
    INVALID_ADMIN_ID = "INVALID_ADMIN_ID"

    # ── State conflict ────────────────────────────────────────
    MEMBER_ALREADY_REGISTERED = "MEMBER_ALREADY_REGISTERED"
    LOAN_NOT_RETURNED = "LOAN_NOT_RETURNED"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    NOT_BORROWING_BOOK = "NOT_BORROWING_BOOK"


AUTHORIZATION_CODES = frozenset({
    ReasonCode.ADMIN_ONLY,
    ReasonCode.MEMBER_NOT_REGISTERED,
})

VALIDATION_CODES = frozenset({
    ReasonCode.EMPTY_CONTENT_ID,
    ReasonCode.INVALID_STOCK,
    ReasonCode.EMPTY_NAME,
    ReasonCode.BOOK_NOT_FOUND,
    ReasonCode.INVALID_ADMIN_ID,
})

STATE_CONFLICT_CODES = frozenset({
    ReasonCode.MEMBER_ALREADY_REGISTERED,
    ReasonCode.LOAN_NOT_RETURNED,
    ReasonCode.OUT_OF_STOCK,
    ReasonCode.NOT_BORROWING_BOOK,
})
