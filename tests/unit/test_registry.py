"""Unit tests for AccountRegistry."""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from account_ledger.domain.exceptions import AccountNotFoundError
from account_ledger.domain.models import AccountKind, InterestTerms, OverdraftTerms
from account_ledger.infrastructure.registry import AccountRegistry


class TestAccountRegistryCreate:
    """Tests for AccountRegistry.create."""

    def test_first_id_defaults_to_one(self, registry: AccountRegistry) -> None:
        """A fresh registry hands out id 1 first."""
        assert registry.create("Alice", Decimal("100")) == 1

    def test_ids_strictly_increase(self, registry: AccountRegistry) -> None:
        """Three creates yield three distinct, increasing ids."""
        ids = [registry.create(owner, Decimal("10")) for owner in ("Alice", "Bob", "Carol")]

        assert ids == sorted(ids)
        assert len(set(ids)) == 3
        assert ids[0] < ids[1] < ids[2]

    def test_ids_not_reused_after_close(self, registry: AccountRegistry) -> None:
        """Closing an account does not free its id."""
        first = registry.create("Alice", Decimal("10"))
        registry.close(first)
        second = registry.create("Bob", Decimal("10"))

        assert second > first

    def test_registries_have_independent_counters(self) -> None:
        """Separate registries do not share id state."""
        left = AccountRegistry()
        right = AccountRegistry()
        left.create("Alice", Decimal("1"))
        left.create("Bob", Decimal("1"))

        assert right.create("Carol", Decimal("1")) == 1

    def test_custom_first_id(self) -> None:
        """Counter starts at the configured first id."""
        registry = AccountRegistry(first_id=1000)
        assert registry.create("Alice", Decimal("1")) == 1000
        assert registry.next_id == 1001

    def test_default_variant_is_standard(self, registry: AccountRegistry) -> None:
        """Accounts without terms are standard accounts."""
        account_id = registry.create("Alice", Decimal("100"))
        assert registry.lookup(account_id).kind == AccountKind.STANDARD

    def test_create_variants(self, registry: AccountRegistry) -> None:
        """Terms select the account variant."""
        interest_id = registry.create("Bob", Decimal("100"), InterestTerms(rate=Decimal("0.05")))
        overdraft_id = registry.create("Carol", Decimal("50"), OverdraftTerms(fee=Decimal("10")))

        assert registry.lookup(interest_id).kind == AccountKind.INTEREST
        assert registry.lookup(overdraft_id).kind == AccountKind.OVERDRAFT

    def test_initial_balance_not_validated(self, registry: AccountRegistry) -> None:
        """Negative opening balances are stored as given."""
        account_id = registry.create("Dave", Decimal("-5"))
        assert registry.lookup(account_id).balance == Decimal("-5")

    def test_create_logs_account_opened(self, registry: AccountRegistry) -> None:
        """Opening an account emits a structured log event."""
        with capture_logs() as logs:
            account_id = registry.create("Alice", Decimal("100"))

        assert logs[0]["event"] == "account_opened"
        assert logs[0]["account_id"] == account_id
        assert logs[0]["kind"] == "STANDARD"


class TestAccountRegistryLookup:
    """Tests for AccountRegistry lookup and membership."""

    def test_lookup_returns_stored_account(self, registry: AccountRegistry) -> None:
        """Lookup returns the same account on every call."""
        account_id = registry.create("Alice", Decimal("100"))
        account = registry.lookup(account_id)

        account.deposit(Decimal("5"))

        assert registry.lookup(account_id) is account
        assert registry.lookup(account_id).balance == Decimal("105")

    def test_lookup_unknown_raises_not_found(self, registry: AccountRegistry) -> None:
        """Unknown ids raise AccountNotFoundError."""
        with pytest.raises(AccountNotFoundError) as exc_info:
            registry.lookup(404)
        assert exc_info.value.account_id == 404

    def test_get_unknown_returns_none(self, registry: AccountRegistry) -> None:
        """get is the non-raising lookup."""
        assert registry.get(404) is None

    def test_len_contains_and_iteration(self, registry: AccountRegistry) -> None:
        """Registry reports its size and iterates in id order."""
        first = registry.create("Alice", Decimal("1"))
        second = registry.create("Bob", Decimal("2"))

        assert len(registry) == 2
        assert first in registry
        assert 999 not in registry
        assert [account.id for account in registry] == [first, second]


class TestAccountRegistryClose:
    """Tests for AccountRegistry.close and close_all."""

    def test_close_then_lookup_is_not_found(self, registry: AccountRegistry) -> None:
        """A closed account can no longer be looked up."""
        account_id = registry.create("Alice", Decimal("100"))
        closed = registry.close(account_id)

        assert closed.id == account_id
        assert registry.get(account_id) is None
        with pytest.raises(AccountNotFoundError):
            registry.lookup(account_id)

    def test_close_unknown_raises_not_found(self, registry: AccountRegistry) -> None:
        """Closing an unknown id raises AccountNotFoundError."""
        with pytest.raises(AccountNotFoundError):
            registry.close(7)

    def test_close_twice_raises_not_found(self, registry: AccountRegistry) -> None:
        """An account can only be closed once."""
        account_id = registry.create("Alice", Decimal("100"))
        registry.close(account_id)

        with pytest.raises(AccountNotFoundError):
            registry.close(account_id)

    def test_close_all_releases_everything(self, registry: AccountRegistry) -> None:
        """close_all empties the registry and reports the count."""
        for owner in ("Alice", "Bob", "Carol"):
            registry.create(owner, Decimal("1"))

        with capture_logs() as logs:
            closed = registry.close_all()

        assert closed == 3
        assert len(registry) == 0
        assert [log["event"] for log in logs] == ["account_closed"] * 3

    def test_close_all_on_empty_registry(self, registry: AccountRegistry) -> None:
        """close_all on an empty registry is a no-op."""
        assert registry.close_all() == 0

    def test_counter_survives_close_all(self, registry: AccountRegistry) -> None:
        """close_all does not reset id allocation."""
        registry.create("Alice", Decimal("1"))
        registry.close_all()

        assert registry.create("Bob", Decimal("1")) == 2
