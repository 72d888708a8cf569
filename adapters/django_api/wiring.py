"""
Library Ledger Django Adapter Wiring
====================================
Builds the process-wide Library served by the HTTP adapter.

This module is adapter-only glue:
- no engine or policy logic
- in-memory ledger, one per process
- settings come from Django's LEDGER_SETTINGS (itself read from env)
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings

from core.config.settings import LedgerSettings
from engines.library import Library

logger = logging.getLogger("libledger.adapters")

_LIBRARY_LOCK = threading.Lock()
_LIBRARY: Library | None = None


def get_ledger_settings() -> LedgerSettings:
    configured = getattr(settings, "LEDGER_SETTINGS", None)
    if isinstance(configured, LedgerSettings):
        return configured
    return LedgerSettings.from_env()


def get_library() -> Library:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _LIBRARY
    with _LIBRARY_LOCK:
        if _LIBRARY is None:
            ledger_settings = get_ledger_settings()
            _LIBRARY = Library(ledger_settings.admin_id)
            logger.info(
                f"HTTP ledger wired with admin {ledger_settings.admin_id}"
            )
        return _LIBRARY


def reset_library() -> None:
    """Drop the wired Library. The next request builds a fresh one."""
    global _LIBRARY
    with _LIBRARY_LOCK:
        _LIBRARY = None
