"""
Library Ledger Command Layer — Policy Enforcement
===================================================
Policies are pluggable callables:

    (Command) → Optional[RejectionReason]

Returns None if the policy passes, a RejectionReason if it rejects.
Policies run in declared order; the first rejection wins and no
later policy is consulted. Policies never mutate state.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from core.commands.base import Command
from core.commands.errors import rejection_error
from core.commands.rejection import RejectionReason

PolicyEvaluator = Callable[[Command], Optional[RejectionReason]]


def first_rejection(
    command: Command, policies: Iterable[PolicyEvaluator],
) -> Optional[RejectionReason]:
    for policy in policies:
        reason = policy(command)
        if reason is not None:
            return reason
    return None


def enforce_policies(
    command: Command, policies: Iterable[PolicyEvaluator],
) -> None:
    """Raise the typed LedgerError for the first rejecting policy."""
    reason = first_rejection(command, policies)
    if reason is not None:
        raise rejection_error(reason)
