"""
Library Ledger Admin Engine — Policies

caller_must_be_admin_policy is the single authority check for every
privileged command in the ledger. Other engines import it; none
re-implement it.
"""

from __future__ import annotations

from typing import Callable, Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason

ADMIN_ONLY_MESSAGE = "Only admin may perform this action."


def caller_must_be_admin_policy(
    command: Command, admin_lookup: Callable[[], Optional[str]],
) -> Optional[RejectionReason]:
    if command.actor_id != admin_lookup():
        return RejectionReason(
            code=ReasonCode.ADMIN_ONLY,
            message=ADMIN_ONLY_MESSAGE,
            policy_name="caller_must_be_admin_policy")
    return None


def new_admin_must_be_valid_policy(command: Command) -> Optional[RejectionReason]:
    new_admin_id = command.payload.get("new_admin_id")
    if not new_admin_id or not new_admin_id.strip():
        return RejectionReason(
            code=ReasonCode.INVALID_ADMIN_ID,
            message="New admin identity must not be empty.",
            policy_name="new_admin_must_be_valid_policy")
    return None
