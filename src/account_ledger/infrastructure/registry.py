from collections.abc import Iterator
from decimal import Decimal

import structlog

from account_ledger.domain.exceptions import AccountNotFoundError
from account_ledger.domain.models import Account, AccountTerms, StandardTerms


logger = structlog.get_logger()


class AccountRegistry:
    """
    In-memory owner of every account.

    Ids come from a counter scoped to this registry, start at ``first_id``
    and are never reused, even after the account holding one is closed.
    """

    def __init__(self, first_id: int = 1) -> None:
        self._accounts: dict[int, Account] = {}
        self._next_id = first_id

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def __iter__(self) -> Iterator[Account]:
        return iter([self._accounts[account_id] for account_id in sorted(self._accounts)])

    @property
    def next_id(self) -> int:
        return self._next_id

    def create(
        self,
        owner: str,
        initial_balance: Decimal | int | str,
        terms: AccountTerms | None = None,
    ) -> int:
        account_id = self._next_id
        self._next_id += 1

        account = Account(account_id, owner, initial_balance, terms or StandardTerms())
        self._accounts[account_id] = account

        logger.info(
            "account_opened",
            account_id=account_id,
            owner=owner,
            kind=account.kind.value,
            balance=str(account.balance),
        )
        return account_id

    def get(self, account_id: int) -> Account | None:
        return self._accounts.get(account_id)

    def lookup(self, account_id: int) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def close(self, account_id: int) -> Account:
        account = self._accounts.pop(account_id, None)
        if account is None:
            raise AccountNotFoundError(account_id)

        logger.info(
            "account_closed",
            account_id=account_id,
            owner=account.owner,
            balance=str(account.balance),
        )
        return account

    def close_all(self) -> int:
        closed = 0
        for account_id in sorted(self._accounts):
            self.close(account_id)
            closed += 1
        return closed
