"""
Library Ledger Membership Engine — Policies
"""

from __future__ import annotations

from typing import Callable, Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason


def name_required_policy(command: Command) -> Optional[RejectionReason]:
    name = command.payload.get("name")
    if not name or not name.strip():
        return RejectionReason(
            code=ReasonCode.EMPTY_NAME,
            message="Name must not be empty.",
            policy_name="name_required_policy")
    return None


def caller_must_not_be_registered_policy(
    command: Command, is_member: Callable[[str], bool],
) -> Optional[RejectionReason]:
    if is_member(command.actor_id):
        return RejectionReason(
            code=ReasonCode.MEMBER_ALREADY_REGISTERED,
            message=f"Member '{command.actor_id}' is already registered.",
            policy_name="caller_must_not_be_registered_policy")
    return None
