"""
Library Ledger Bootstrap — Public API
=======================================
"""

from core.bootstrap.errors import LedgerInvariantError
from core.bootstrap.invariants import LEDGER_CHECKS, check_ledger_invariants

__all__ = [
    "LedgerInvariantError",
    "LEDGER_CHECKS",
    "check_ledger_invariants",
]
