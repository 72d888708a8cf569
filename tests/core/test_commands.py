"""
Library Ledger Command Layer Tests
===================================
Command validation, rejection mapping, policy ordering, CommandBus.
"""

import uuid
from datetime import datetime, timezone

import pytest

from core.commands import (
    AuthorizationError,
    Command,
    CommandBus,
    CommandBusError,
    LedgerError,
    NoHandlerRegistered,
    ReasonCode,
    RejectionReason,
    StateConflictError,
    ValidationError,
    derive_source_engine,
    enforce_policies,
    first_rejection,
    rejection_error,
)

NOW = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _command(**overrides):
    fields = dict(
        command_id=uuid.uuid4(),
        command_type="catalog.book.add.request",
        actor_id="0xadmin",
        payload={"content_id": "QmBook", "stock": 3},
        issued_at=NOW,
        correlation_id=uuid.uuid4(),
        source_engine="catalog",
    )
    fields.update(overrides)
    return Command(**fields)


def _reason(code, policy_name="test_policy"):
    return RejectionReason(code=code, message=f"{code} happened.", policy_name=policy_name)


# ══════════════════════════════════════════════════════════════
# COMMAND VALIDATION
# ══════════════════════════════════════════════════════════════

class TestCommand:
    def test_valid_command(self):
        cmd = _command()
        assert cmd.source_engine == "catalog"
        assert cmd.actor_id == "0xadmin"

    def test_command_is_frozen(self):
        cmd = _command()
        with pytest.raises(Exception):
            cmd.actor_id = "someone-else"

    def test_command_type_must_end_with_request(self):
        with pytest.raises(ValueError, match=".request"):
            _command(command_type="catalog.book.add")

    def test_command_type_needs_four_segments(self):
        with pytest.raises(ValueError, match="minimum 4 segments"):
            _command(command_type="catalog.add.request")

    def test_source_engine_must_match_namespace(self):
        with pytest.raises(ValueError, match="does not match"):
            _command(source_engine="lending")

    def test_empty_actor_rejected(self):
        with pytest.raises(ValueError, match="actor_id"):
            _command(actor_id="")

    def test_payload_must_be_dict(self):
        with pytest.raises(TypeError, match="payload"):
            _command(payload=["not", "a", "dict"])

    def test_naive_issued_at_rejected(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            _command(issued_at=datetime(2026, 3, 1))

    def test_command_id_must_be_uuid(self):
        with pytest.raises(ValueError, match="command_id"):
            _command(command_id="not-a-uuid")

    def test_derive_source_engine(self):
        assert derive_source_engine("lending.book.borrow.request") == "lending"


# ══════════════════════════════════════════════════════════════
# REJECTION MAPPING
# ══════════════════════════════════════════════════════════════

class TestRejectionError:
    @pytest.mark.parametrize("code", [
        ReasonCode.ADMIN_ONLY,
        ReasonCode.MEMBER_NOT_REGISTERED,
    ])
    def test_authorization_codes(self, code):
        assert isinstance(rejection_error(_reason(code)), AuthorizationError)

    @pytest.mark.parametrize("code", [
        ReasonCode.EMPTY_CONTENT_ID,
        ReasonCode.INVALID_STOCK,
        ReasonCode.EMPTY_NAME,
        ReasonCode.BOOK_NOT_FOUND,
        ReasonCode.INVALID_ADMIN_ID,
    ])
    def test_validation_codes(self, code):
        assert isinstance(rejection_error(_reason(code)), ValidationError)

    @pytest.mark.parametrize("code", [
        ReasonCode.MEMBER_ALREADY_REGISTERED,
        ReasonCode.LOAN_NOT_RETURNED,
        ReasonCode.OUT_OF_STOCK,
        ReasonCode.NOT_BORROWING_BOOK,
    ])
    def test_state_conflict_codes(self, code):
        assert isinstance(rejection_error(_reason(code)), StateConflictError)

    def test_unknown_code_is_plain_ledger_error(self):
        err = rejection_error(_reason("SOMETHING_ELSE"))
        assert type(err) is LedgerError

    def test_error_carries_reason(self):
        reason = _reason(ReasonCode.OUT_OF_STOCK)
        err = rejection_error(reason)
        assert err.reason is reason
        assert err.code == "OUT_OF_STOCK"
        assert str(err) == reason.message

    def test_reason_requires_all_fields(self):
        with pytest.raises(ValueError, match="policy_name"):
            RejectionReason(code="X", message="x", policy_name="")

    def test_reason_to_dict(self):
        assert _reason("X", "p").to_dict() == {
            "code": "X", "message": "X happened.", "policy_name": "p",
        }


# ══════════════════════════════════════════════════════════════
# POLICY ORDERING
# ══════════════════════════════════════════════════════════════

class TestPolicies:
    def test_no_rejection_when_all_pass(self):
        assert first_rejection(_command(), [lambda c: None, lambda c: None]) is None

    def test_first_rejection_wins(self):
        consulted = []

        def auth(cmd):
            consulted.append("auth")
            return _reason(ReasonCode.ADMIN_ONLY, "auth")

        def validate(cmd):
            consulted.append("validate")
            return _reason(ReasonCode.EMPTY_CONTENT_ID, "validate")

        reason = first_rejection(_command(), [auth, validate])
        assert reason.policy_name == "auth"
        assert consulted == ["auth"]

    def test_enforce_raises_typed_error(self):
        with pytest.raises(StateConflictError) as exc_info:
            enforce_policies(
                _command(), [lambda c: _reason(ReasonCode.OUT_OF_STOCK)])
        assert exc_info.value.code == ReasonCode.OUT_OF_STOCK


# ══════════════════════════════════════════════════════════════
# COMMAND BUS
# ══════════════════════════════════════════════════════════════

class EchoService:
    def __init__(self):
        self.calls = []

    def execute(self, command):
        self.calls.append(command)
        return {"handled": command.command_type}


class RejectingService:
    def execute(self, command):
        raise rejection_error(_reason(ReasonCode.ADMIN_ONLY))


class TestCommandBus:
    def test_handle_routes_to_registered_service(self):
        bus = CommandBus()
        service = EchoService()
        bus.register_handler("catalog.book.add.request", service)

        result = bus.handle(_command())

        assert result.is_accepted
        assert result.execution_result == {"handled": "catalog.book.add.request"}
        assert len(service.calls) == 1

    def test_unknown_command_type(self):
        with pytest.raises(NoHandlerRegistered):
            CommandBus().handle(_command())

    def test_duplicate_registration_rejected(self):
        bus = CommandBus()
        bus.register_handler("catalog.book.add.request", EchoService())
        with pytest.raises(CommandBusError, match="already registered"):
            bus.register_handler("catalog.book.add.request", EchoService())

    def test_registration_requires_request_suffix(self):
        with pytest.raises(ValueError, match=".request"):
            CommandBus().register_handler("catalog.book.add", EchoService())

    def test_registration_requires_execute(self):
        with pytest.raises(ValueError, match="execute"):
            CommandBus().register_handler("catalog.book.add.request", object())

    def test_rejection_propagates(self):
        bus = CommandBus()
        bus.register_handler("catalog.book.add.request", RejectingService())
        with pytest.raises(AuthorizationError):
            bus.handle(_command())

    def test_has_handler(self):
        bus = CommandBus()
        bus.register_handler("catalog.book.add.request", EchoService())
        assert bus.has_handler("catalog.book.add.request")
        assert not bus.has_handler("lending.book.borrow.request")
