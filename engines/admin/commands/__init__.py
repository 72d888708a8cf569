"""
Library Ledger Admin Engine — Request Commands
"""

from __future__ import annotations

from dataclasses import dataclass

from core.commands.base import Command

ADMIN_AUTHORITY_TRANSFER_REQUEST = "admin.authority.transfer.request"

ADMIN_COMMAND_TYPES = frozenset({
    ADMIN_AUTHORITY_TRANSFER_REQUEST,
})


def _cmd(ct, payload, *, actor_id, command_id, correlation_id, issued_at):
    return Command(
        command_id=command_id, command_type=ct,
        actor_id=actor_id, payload=payload, issued_at=issued_at,
        correlation_id=correlation_id, source_engine="admin",
    )


@dataclass(frozen=True)
class AdminTransferRequest:
    new_admin_id: str

    def __post_init__(self):
        if not isinstance(self.new_admin_id, str):
            raise TypeError("new_admin_id must be a string.")

    def to_command(self, **kw) -> Command:
        return _cmd(ADMIN_AUTHORITY_TRANSFER_REQUEST, {
            "new_admin_id": self.new_admin_id,
        }, **kw)
