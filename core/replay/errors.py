"""
Library Ledger Replay — Errors
================================
Error types for rebuilding state from a recorded event log.
"""


class ReplayError(Exception):
    """Base error for all replay operations."""
    pass


class ReplaySequenceError(ReplayError):
    """Event log has a gap or duplicate — replay refused."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Replay refused — expected event sequence {expected}, "
            f"got {actual}."
        )


class UnknownEventTypeError(ReplayError):
    """Event type has no projection that understands it."""

    def __init__(self, sequence: int, event_type: str):
        self.sequence = sequence
        self.event_type = event_type
        super().__init__(
            f"Replay refused — event {sequence} has unknown type "
            f"'{event_type}'."
        )
