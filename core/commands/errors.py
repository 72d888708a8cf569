"""
Library Ledger Command Layer — Errors
=======================================
Every rejected command surfaces as one of three error kinds:

    AuthorizationError  — caller lacks the required privilege
    ValidationError     — malformed input
    StateConflictError  — operation violates a lifecycle invariant

All three reject the operation with zero state mutation and carry
the RejectionReason that caused them.
"""

from __future__ import annotations

from core.commands.rejection import (
    AUTHORIZATION_CODES,
    STATE_CONFLICT_CODES,
    VALIDATION_CODES,
    RejectionReason,
)


class LedgerError(Exception):
    """Base error for rejected ledger commands."""

    def __init__(self, reason: RejectionReason):
        self.reason = reason
        super().__init__(reason.message)

    @property
    def code(self) -> str:
        return self.reason.code


class AuthorizationError(LedgerError):
    """Caller is not admin, or not a registered member."""


class ValidationError(LedgerError):
    """Malformed input or reference to a nonexistent book."""


class StateConflictError(LedgerError):
    """Duplicate registration, open loan, out of stock, or book not held."""


def rejection_error(reason: RejectionReason) -> LedgerError:
    """Build the error matching the category of a rejection code."""
    if reason.code in AUTHORIZATION_CODES:
        return AuthorizationError(reason)
    if reason.code in VALIDATION_CODES:
        return ValidationError(reason)
    if reason.code in STATE_CONFLICT_CODES:
        return StateConflictError(reason)
    return LedgerError(reason)
