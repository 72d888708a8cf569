"""
Library Ledger — Public API
============================
"""

from engines.catalog.services import BookRecord
from engines.lending.services import BorrowRecord
from engines.library.ledger import LEDGER_EVENT_TYPES, Library
from engines.membership.services import MemberRecord
from engines.reporting.services import LibraryStats

__all__ = [
    "Library",
    "LEDGER_EVENT_TYPES",
    "BookRecord",
    "MemberRecord",
    "BorrowRecord",
    "LibraryStats",
]
