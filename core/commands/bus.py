"""
Library Ledger Command Layer — Command Bus
============================================
Routes a command to the engine service that owns its command_type.

Flow:
    1. Look up handler by command_type
    2. handler.execute(command) evaluates policies, records the event
    3. ACCEPTED → CommandResult carrying the recorded event
    4. REJECTED → the LedgerError propagates to the caller unchanged

The CommandBus:
- Orchestrates, does not decide
- Contains no engine-specific logic
- Never swallows a rejection
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Protocol

from core.commands.base import Command
from core.commands.errors import LedgerError
from core.commands.outcomes import CommandOutcome, CommandStatus

logger = logging.getLogger("libledger.commands")


class EngineServiceProtocol(Protocol):
    """Engine handler: executes a command and returns the recorded event."""

    def execute(self, command: Command) -> Any:
        ...


class CommandBusError(Exception):
    """Base error for command bus operations."""
    pass


class NoHandlerRegistered(CommandBusError):
    """No engine service handler registered for command type."""

    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(
            f"No engine service handler registered for "
            f"command type '{command_type}'."
        )


class CommandResult:
    """Result of CommandBus.handle() — outcome + execution result."""

    def __init__(self, outcome: CommandOutcome, execution_result: Any = None):
        self.outcome = outcome
        self.execution_result = execution_result

    @property
    def is_accepted(self) -> bool:
        return self.outcome.is_accepted


class CommandBus:
    """
    Usage:
        bus = CommandBus()
        bus.register_handler("catalog.book.add.request", catalog_service)
        result = bus.handle(command)
    """

    def __init__(self):
        self._handlers: Dict[str, Any] = {}

    def register_handler(self, command_type: str, handler: Any) -> None:
        if not command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{command_type}' must end with '.request'."
            )

        if not hasattr(handler, "execute") or not callable(handler.execute):
            raise ValueError(
                f"Handler for '{command_type}' must implement execute()."
            )

        if command_type in self._handlers:
            raise CommandBusError(
                f"Handler already registered for '{command_type}'."
            )

        self._handlers[command_type] = handler

    def has_handler(self, command_type: str) -> bool:
        return command_type in self._handlers

    def handle(self, command: Command) -> CommandResult:
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise NoHandlerRegistered(command.command_type)

        try:
            execution_result = handler.execute(command)
        except LedgerError as exc:
            # Build the outcome for the audit log line, then propagate.
            outcome = CommandOutcome(
                command_id=command.command_id,
                status=CommandStatus.REJECTED,
                reason=exc.reason,
                occurred_at=command.issued_at,
            )
            logger.info(
                f"Command {command.command_id} ({command.command_type}) "
                f"{outcome.status.value} by {exc.reason.policy_name}: "
                f"{exc.reason.code}"
            )
            raise

        outcome = CommandOutcome(
            command_id=command.command_id,
            status=CommandStatus.ACCEPTED,
            reason=None,
            occurred_at=command.issued_at,
        )
        logger.info(
            f"Command {command.command_id} ({command.command_type}) ACCEPTED"
        )
        return CommandResult(outcome=outcome, execution_result=execution_result)
