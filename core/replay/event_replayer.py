"""
Library Ledger Replay — Event Replayer
========================================
Feeds a recorded event log back into projections.

Replay doctrine:
- Never modify events
- Deterministic order: sequence ASC
- Refuse the whole log on a gap or an unknown event type,
  before anything is applied
- Never dispatch to subscribers (history already happened)

Event Log = truth archive
Replay = time machine
Time machine must never change history.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from core.events.log import LedgerEvent
from core.replay.errors import ReplaySequenceError, UnknownEventTypeError

logger = logging.getLogger("libledger.replay")


@dataclass
class ReplayResult:
    """Structured result of a replay operation."""

    events_processed: int = 0
    last_sequence: Optional[int] = None


def verify_sequence(events) -> None:
    """
    Check the log is contiguous from 1.
    Raises ReplaySequenceError on the first gap or duplicate.
    """
    for expected, event in enumerate(events, start=1):
        if event.sequence != expected:
            raise ReplaySequenceError(expected, event.sequence)


def replay_events(
    events: Iterable[LedgerEvent],
    *,
    apply: Callable[[LedgerEvent], None],
    known_event_types: Iterable[str],
) -> ReplayResult:
    """
    Replay events in sequence order through `apply`.

    The whole log is validated first, so a refused replay applies
    nothing.
    """
    ordered = sorted(events, key=lambda e: e.sequence)
    known = frozenset(known_event_types)

    verify_sequence(ordered)
    for event in ordered:
        if event.event_type not in known:
            raise UnknownEventTypeError(event.sequence, event.event_type)

    result = ReplayResult()
    for event in ordered:
        apply(event)
        result.events_processed += 1
        result.last_sequence = event.sequence

    logger.info(
        f"Replay complete: {result.events_processed} event(s), "
        f"last sequence {result.last_sequence}"
    )
    return result
