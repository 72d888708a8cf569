"""
Library Ledger Membership Engine — Event Types and Payload Builders
=====================================================================
Engine: Membership (registered borrowers)
"""

from __future__ import annotations

from core.commands.base import Command

MEMBERSHIP_MEMBER_REGISTERED_V1 = "membership.member.registered.v1"

MEMBERSHIP_EVENT_TYPES = (
    MEMBERSHIP_MEMBER_REGISTERED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "membership.member.register.request": MEMBERSHIP_MEMBER_REGISTERED_V1,
}


def resolve_membership_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def build_member_registered_payload(command: Command) -> dict:
    # The member's address is always the caller; it is never taken
    # from the payload.
    return {
        "address": command.actor_id,
        "name": command.payload["name"],
        "registered_at": command.issued_at,
    }
