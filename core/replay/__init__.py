"""
Library Ledger Replay - Public API
===================================
Event Log = truth archive.
Replay = time machine.
Time machine must never change history.
"""

from core.replay.errors import (
    ReplayError,
    ReplaySequenceError,
    UnknownEventTypeError,
)
from core.replay.event_replayer import (
    ReplayResult,
    replay_events,
    verify_sequence,
)

__all__ = [
    "ReplayError",
    "ReplaySequenceError",
    "UnknownEventTypeError",
    "ReplayResult",
    "replay_events",
    "verify_sequence",
]
