"""
Library Ledger Command Layer — System Governance
==================================================
Every mutation begins as a Command.
Every Command produces exactly one Outcome.
Every rejection is raised as a typed LedgerError.
"""

from core.commands.base import (
    Command,
    derive_source_engine,
)
from core.commands.bus import (
    CommandBus,
    CommandBusError,
    CommandResult,
    NoHandlerRegistered,
)
from core.commands.errors import (
    AuthorizationError,
    LedgerError,
    StateConflictError,
    ValidationError,
    rejection_error,
)
from core.commands.policy import (
    PolicyEvaluator,
    enforce_policies,
    first_rejection,
)
from core.commands.outcomes import (
    CommandOutcome,
    CommandStatus,
)
from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    # ── Base ──────────────────────────────────────────────────
    "Command",
    "derive_source_engine",
    # ── Outcomes ──────────────────────────────────────────────
    "CommandOutcome",
    "CommandStatus",
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
    # ── Errors ────────────────────────────────────────────────
    "LedgerError",
    "AuthorizationError",
    "ValidationError",
    "StateConflictError",
    "rejection_error",
    # ── Policy ────────────────────────────────────────────────
    "PolicyEvaluator",
    "enforce_policies",
    "first_rejection",
    # ── Bus ────────────────────────────────────────────────────
    "CommandBus",
    "CommandBusError",
    "CommandResult",
    "NoHandlerRegistered",
]
