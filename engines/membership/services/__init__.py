"""
Library Ledger Membership Engine — Application Service
========================================================
MemberRegistry: one record per identity, created once, never deleted.

Borrow state (current_borrow, total_borrowed) is owned here and
changes only in reaction to lending events.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import partial
from typing import Dict, Optional, Protocol, Tuple

from core.commands.base import Command
from core.commands.policy import enforce_policies
from core.events.log import LedgerEvent
from engines.lending.events import (
    LENDING_BOOK_BORROWED_V1,
    LENDING_BOOK_RETURNED_V1,
    NO_ACTIVE_LOAN,
)
from engines.membership.commands import MEMBERSHIP_MEMBER_REGISTER_REQUEST
from engines.membership.events import (
    MEMBERSHIP_MEMBER_REGISTERED_V1,
    build_member_registered_payload,
    resolve_membership_event_type,
)
from engines.membership.policies import (
    caller_must_not_be_registered_policy,
    name_required_policy,
)

logger = logging.getLogger("libledger.membership")


class RecordEventProtocol(Protocol):
    def __call__(self, *, command: Command, event_type: str, payload: dict) -> LedgerEvent: ...


@dataclass(frozen=True)
class MemberRecord:
    address: str
    name: str
    is_registered: bool = True
    total_borrowed: int = 0
    current_borrow: int = NO_ACTIVE_LOAN

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "name": self.name,
            "is_registered": self.is_registered,
            "total_borrowed": self.total_borrowed,
            "current_borrow": self.current_borrow,
        }


class MembershipProjectionStore:
    def __init__(self):
        self._members: Dict[str, MemberRecord] = {}

    def apply(self, event_type: str, payload: dict) -> None:
        if event_type == MEMBERSHIP_MEMBER_REGISTERED_V1:
            address = payload["address"]
            self._members[address] = MemberRecord(
                address=address, name=payload["name"])
        elif event_type == LENDING_BOOK_BORROWED_V1:
            member = self._members[payload["borrower"]]
            self._members[member.address] = replace(
                member,
                current_borrow=payload["book_id"],
                total_borrowed=member.total_borrowed + 1,
            )
        elif event_type == LENDING_BOOK_RETURNED_V1:
            member = self._members[payload["borrower"]]
            self._members[member.address] = replace(
                member, current_borrow=NO_ACTIVE_LOAN)

    def get_member(self, address: str) -> Optional[MemberRecord]:
        return self._members.get(address)

    def is_member(self, address: str) -> bool:
        member = self._members.get(address)
        return member is not None and member.is_registered

    def get_current_borrow(self, address: str) -> int:
        member = self._members.get(address)
        if member is None:
            return NO_ACTIVE_LOAN
        return member.current_borrow

    def all_members(self) -> Tuple[MemberRecord, ...]:
        return tuple(self._members.values())

    @property
    def member_count(self) -> int:
        return len(self._members)


class MembershipService:
    def __init__(self, *, record_event: RecordEventProtocol,
                 projection_store: MembershipProjectionStore):
        self._record_event = record_event
        self._projection_store = projection_store

    def policies_for(self, command: Command) -> tuple:
        if command.command_type == MEMBERSHIP_MEMBER_REGISTER_REQUEST:
            return (
                name_required_policy,
                partial(caller_must_not_be_registered_policy,
                        is_member=self._projection_store.is_member),
            )
        raise ValueError(f"Unsupported: {command.command_type}")

    def execute(self, command: Command) -> LedgerEvent:
        event_type = resolve_membership_event_type(command.command_type)
        if event_type is None:
            raise ValueError(f"Unsupported: {command.command_type}")
        enforce_policies(command, self.policies_for(command))

        payload = build_member_registered_payload(command)
        event = self._record_event(
            command=command, event_type=event_type, payload=payload)
        logger.info(f"Member registered: {payload['address']}")
        return event

    @property
    def projection_store(self) -> MembershipProjectionStore:
        return self._projection_store
