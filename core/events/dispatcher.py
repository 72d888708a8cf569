"""
Library Ledger Event Bus — Dispatcher
=======================================
Routes recorded events to registered subscribers.

Dispatch behavior:
1. Look up subscribers by event_type
2. Execute handlers sequentially
3. Catch subscriber exceptions per handler
4. Log failure
5. Continue to next subscriber
6. NEVER roll back the ledger

Truth must exist before it is heard: dispatch only happens after
the event is in the log and every projection has applied it.
"""

import logging

from core.events.log import LedgerEvent
from core.events.registry import SubscriberRegistry

logger = logging.getLogger("libledger.events")


def dispatch(event: LedgerEvent, registry: SubscriberRegistry) -> dict:
    """
    Dispatch a recorded event to all registered subscribers.

    Returns:
        {
            'event_type': str,
            'sequence': int,
            'subscribers_notified': int,
            'subscribers_failed': int,
            'failures': list[dict]
        }

    This function NEVER raises for handler failures.
    """
    event_type = event.event_type
    subscribers = registry.get_subscribers(event_type)

    result = {
        "event_type": event_type,
        "sequence": event.sequence,
        "subscribers_notified": 0,
        "subscribers_failed": 0,
        "failures": [],
    }

    if not subscribers:
        logger.debug(
            f"No subscribers for event type '{event_type}' "
            f"(sequence: {event.sequence})"
        )
        return result

    for handler, subscriber_name in subscribers:
        handler_name = getattr(handler, "__qualname__", str(handler))

        try:
            handler(event)
            result["subscribers_notified"] += 1
            logger.debug(
                f"Dispatched {event_type} → {handler_name} "
                f"(subscriber: {subscriber_name})"
            )

        except Exception as exc:
            result["subscribers_failed"] += 1
            result["failures"].append({
                "handler": handler_name,
                "subscriber": subscriber_name,
                "error": str(exc),
                "error_type": type(exc).__name__,
            })

            logger.error(
                f"Subscriber failed: {handler_name} for "
                f"{event_type} (sequence: {event.sequence}): {exc}",
                exc_info=True,
            )

    return result
