"""
Library Ledger Core Config — Public API
=========================================
"""

from core.config.settings import (
    DEFAULT_ACTOR_HEADER,
    DEFAULT_ADMIN_ID,
    DEFAULT_LOG_LEVEL,
    LedgerSettings,
)

__all__ = [
    "LedgerSettings",
    "DEFAULT_ADMIN_ID",
    "DEFAULT_ACTOR_HEADER",
    "DEFAULT_LOG_LEVEL",
]
