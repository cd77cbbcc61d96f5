"""Shared pytest fixtures for account ledger tests."""

from collections.abc import Generator
from decimal import Decimal

import pytest
import structlog

from account_ledger.application.services import LedgerService, OpenAccountCommand
from account_ledger.domain.models import (
    Account,
    AccountKind,
    InterestTerms,
    OverdraftTerms,
    StandardTerms,
)
from account_ledger.infrastructure.registry import AccountRegistry


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Keep structlog configuration from leaking between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def registry() -> AccountRegistry:
    """Create an empty registry."""
    return AccountRegistry()


@pytest.fixture
def service(registry: AccountRegistry) -> LedgerService:
    """Create LedgerService with lenient amount handling."""
    return LedgerService(registry)


@pytest.fixture
def strict_service() -> LedgerService:
    """Create LedgerService that rejects non-positive amounts."""
    return LedgerService(AccountRegistry(), strict_amounts=True)


@pytest.fixture
def standard_account() -> Account:
    """Standard account holding 100."""
    return Account(1, "Alice", Decimal("100"), StandardTerms())


@pytest.fixture
def interest_account() -> Account:
    """Interest account holding 100 at 5%."""
    return Account(2, "Bob", Decimal("100"), InterestTerms(rate=Decimal("0.05")))


@pytest.fixture
def overdraft_account() -> Account:
    """Overdraft account holding 50 with a fee of 10."""
    return Account(3, "Carol", Decimal("50"), OverdraftTerms(fee=Decimal("10")))


def open_command(
    owner: str = "Alice",
    initial_balance: str = "100",
    kind: AccountKind = AccountKind.STANDARD,
    interest_rate: str | None = None,
    overdraft_fee: str | None = None,
) -> OpenAccountCommand:
    """Helper to build OpenAccountCommand with string amounts."""
    return OpenAccountCommand(
        owner=owner,
        initial_balance=Decimal(initial_balance),
        kind=kind,
        interest_rate=Decimal(interest_rate) if interest_rate is not None else None,
        overdraft_fee=Decimal(overdraft_fee) if overdraft_fee is not None else None,
    )
