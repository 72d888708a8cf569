"""
Library Ledger Bootstrap — Invariant Errors
=============================================
If a ledger invariant is violated, the ledger must refuse to live.
"""


class LedgerInvariantError(Exception):
    """
    Raised when a ledger invariant does not hold.

    If this exception is raised:
    - The ledger state MUST NOT be served
    - No fallback
    - No warning-only mode
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"LEDGER INVARIANT FAILURE — {invariant}: {detail}"
        )
