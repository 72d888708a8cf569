"""
Library Ledger Membership Engine — Request Commands
"""

from __future__ import annotations

from dataclasses import dataclass

from core.commands.base import Command

MEMBERSHIP_MEMBER_REGISTER_REQUEST = "membership.member.register.request"

MEMBERSHIP_COMMAND_TYPES = frozenset({
    MEMBERSHIP_MEMBER_REGISTER_REQUEST,
})


def _cmd(ct, payload, *, actor_id, command_id, correlation_id, issued_at):
    return Command(
        command_id=command_id, command_type=ct,
        actor_id=actor_id, payload=payload, issued_at=issued_at,
        correlation_id=correlation_id, source_engine="membership",
    )


@dataclass(frozen=True)
class MemberRegisterRequest:
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise TypeError("name must be a string.")

    def to_command(self, **kw) -> Command:
        return _cmd(MEMBERSHIP_MEMBER_REGISTER_REQUEST, {
            "name": self.name,
        }, **kw)
