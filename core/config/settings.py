"""
Library Ledger Core Config — Ledger Settings
==============================================
Runtime settings for wiring a Library outside of tests.

Values come from the environment so deployments never edit
source code:

    LIBLEDGER_ADMIN_ID       identity that creates the ledger (initial admin)
    LIBLEDGER_ACTOR_HEADER   HTTP header carrying the caller identity
    LIBLEDGER_LOG_LEVEL      level for the 'libledger' logger tree
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_ADMIN_ID = "ledger-admin"
DEFAULT_ACTOR_HEADER = "X-Actor-Id"
DEFAULT_LOG_LEVEL = "INFO"

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class LedgerSettings:
    admin_id: str = DEFAULT_ADMIN_ID
    actor_header: str = DEFAULT_ACTOR_HEADER
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if not self.admin_id or not isinstance(self.admin_id, str):
            raise ValueError("admin_id must be a non-empty string.")
        if not self.actor_header or not isinstance(self.actor_header, str):
            raise ValueError("actor_header must be a non-empty string.")
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level '{self.log_level}' not valid. "
                f"Must be one of: {sorted(VALID_LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LedgerSettings":
        env = os.environ if environ is None else environ
        return cls(
            admin_id=env.get("LIBLEDGER_ADMIN_ID", DEFAULT_ADMIN_ID),
            actor_header=env.get("LIBLEDGER_ACTOR_HEADER", DEFAULT_ACTOR_HEADER),
            log_level=env.get("LIBLEDGER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
