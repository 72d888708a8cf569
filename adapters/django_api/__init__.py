"""
Library Ledger Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    get_ledger_settings,
    get_library,
    reset_library,
)

__all__ = [
    "get_ledger_settings",
    "get_library",
    "reset_library",
]
