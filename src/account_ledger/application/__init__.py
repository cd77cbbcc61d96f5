"""Application layer - services and use cases."""

from account_ledger.application.services import (
    LedgerService,
    OpenAccountCommand,
)


__all__ = [
    "LedgerService",
    "OpenAccountCommand",
]
