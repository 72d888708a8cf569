"""
Library Ledger Admin Engine — Application Service
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional, Protocol

from core.commands.base import Command
from core.commands.policy import enforce_policies
from core.events.log import LedgerEvent
from engines.admin.commands import ADMIN_AUTHORITY_TRANSFER_REQUEST
from engines.admin.events import (
    ADMIN_AUTHORITY_ESTABLISHED_V1,
    ADMIN_AUTHORITY_TRANSFERRED_V1,
    build_authority_transferred_payload,
    resolve_admin_event_type,
)
from engines.admin.policies import (
    caller_must_be_admin_policy,
    new_admin_must_be_valid_policy,
)

logger = logging.getLogger("libledger.admin")


class RecordEventProtocol(Protocol):
    def __call__(self, *, command: Command, event_type: str, payload: dict) -> LedgerEvent: ...


class AdminProjectionStore:
    """Holds the one current admin identity."""

    def __init__(self):
        self._admin_id: Optional[str] = None

    def apply(self, event_type: str, payload: dict) -> None:
        if event_type == ADMIN_AUTHORITY_ESTABLISHED_V1:
            self._admin_id = payload["admin_id"]
        elif event_type == ADMIN_AUTHORITY_TRANSFERRED_V1:
            self._admin_id = payload["new_admin_id"]

    @property
    def admin_id(self) -> Optional[str]:
        return self._admin_id

    def is_admin(self, identity: str) -> bool:
        return self._admin_id is not None and identity == self._admin_id


class AdminService:
    """AdminAuthority: gates privileged commands, transfers authority."""

    def __init__(self, *, record_event: RecordEventProtocol,
                 projection_store: AdminProjectionStore):
        self._record_event = record_event
        self._projection_store = projection_store

    def policies_for(self, command: Command) -> tuple:
        if command.command_type == ADMIN_AUTHORITY_TRANSFER_REQUEST:
            return (
                partial(caller_must_be_admin_policy,
                        admin_lookup=lambda: self._projection_store.admin_id),
                new_admin_must_be_valid_policy,
            )
        raise ValueError(f"Unsupported: {command.command_type}")

    def execute(self, command: Command) -> LedgerEvent:
        event_type = resolve_admin_event_type(command.command_type)
        if event_type is None:
            raise ValueError(f"Unsupported: {command.command_type}")
        enforce_policies(command, self.policies_for(command))

        previous = self._projection_store.admin_id
        payload = build_authority_transferred_payload(
            command, previous_admin_id=previous)
        event = self._record_event(
            command=command, event_type=event_type, payload=payload)
        logger.info(
            f"Admin authority transferred: {previous} → "
            f"{payload['new_admin_id']}")
        return event

    @property
    def projection_store(self) -> AdminProjectionStore:
        return self._projection_store
