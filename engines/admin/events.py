"""
Library Ledger Admin Engine — Event Types and Payload Builders
================================================================
Engine: Admin (single privileged identity)
"""

from __future__ import annotations

from datetime import datetime

from core.commands.base import Command

ADMIN_AUTHORITY_ESTABLISHED_V1 = "admin.authority.established.v1"
ADMIN_AUTHORITY_TRANSFERRED_V1 = "admin.authority.transferred.v1"

ADMIN_EVENT_TYPES = (
    ADMIN_AUTHORITY_ESTABLISHED_V1,
    ADMIN_AUTHORITY_TRANSFERRED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "admin.authority.transfer.request": ADMIN_AUTHORITY_TRANSFERRED_V1,
}


def resolve_admin_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def build_authority_established_payload(
    admin_id: str, established_at: datetime,
) -> dict:
    return {
        "admin_id": admin_id,
        "established_at": established_at,
    }


def build_authority_transferred_payload(
    command: Command, *, previous_admin_id: str,
) -> dict:
    return {
        "previous_admin_id": previous_admin_id,
        "new_admin_id": command.payload["new_admin_id"],
        "transferred_at": command.issued_at,
    }
