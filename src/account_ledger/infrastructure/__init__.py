"""Infrastructure layer - in-memory account storage and metrics."""

from account_ledger.infrastructure.registry import AccountRegistry


__all__ = [
    "AccountRegistry",
]
