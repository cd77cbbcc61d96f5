from dataclasses import dataclass
from decimal import Decimal

import structlog

from account_ledger.config import Settings
from account_ledger.domain.exceptions import (
    DomainError,
    InvalidAmountError,
    OverdraftFeeUncollectedError,
)
from account_ledger.domain.models import (
    AccountKind,
    AccountSnapshot,
    AmountLike,
    WithdrawalOutcome,
    WithdrawalResult,
    build_terms,
    to_decimal,
)
from account_ledger.infrastructure.metrics import (
    LEDGER_OPERATIONS_TOTAL,
    OPEN_ACCOUNTS,
    OVERDRAFT_EVENTS_TOTAL,
    track_operation_duration,
)
from account_ledger.infrastructure.registry import AccountRegistry


logger = structlog.get_logger()


@dataclass
class OpenAccountCommand:
    owner: str
    initial_balance: Decimal
    kind: AccountKind = AccountKind.STANDARD
    interest_rate: Decimal | None = None
    overdraft_fee: Decimal | None = None


class LedgerService:
    """
    Operations a dispatcher runs against the ledger.

    Every call resolves the account through the registry, so an unknown id
    raises ``AccountNotFoundError`` before anything else happens. Domain
    errors are logged, counted and re-raised to the caller unchanged.
    """

    def __init__(
        self,
        registry: AccountRegistry,
        strict_amounts: bool = False,
        metrics_enabled: bool = True,
    ) -> None:
        self.registry = registry
        self.strict_amounts = strict_amounts
        self.metrics_enabled = metrics_enabled

    @classmethod
    def from_settings(cls, settings: Settings) -> "LedgerService":
        return cls(
            AccountRegistry(first_id=settings.first_account_id),
            strict_amounts=settings.strict_amounts,
            metrics_enabled=settings.metrics_enabled,
        )

    @track_operation_duration("open_account")
    def open_account(self, cmd: OpenAccountCommand) -> int:
        terms = build_terms(
            cmd.kind,
            interest_rate=cmd.interest_rate,
            overdraft_fee=cmd.overdraft_fee,
        )
        account_id = self.registry.create(cmd.owner, cmd.initial_balance, terms)

        self._record("open_account", cmd.kind.value)
        self._refresh_open_accounts()
        return account_id

    @track_operation_duration("deposit")
    def deposit(self, account_id: int, amount: AmountLike) -> Decimal:
        log = logger.bind(account_id=account_id, amount=str(amount))
        try:
            account = self.registry.lookup(account_id)
            amount = self._check_amount(amount)
        except DomainError as exc:
            self._fail("deposit", exc, log)
            raise

        if not account.deposit(amount):
            log.warning("deposit_ignored", reason="non_positive_amount")
            self._record("deposit", "IGNORED")
            return account.balance

        log.info("deposit_completed", balance_after=str(account.balance))
        self._record("deposit", "COMPLETED")
        return account.balance

    @track_operation_duration("withdraw")
    def withdraw(self, account_id: int, amount: AmountLike) -> WithdrawalResult:
        log = logger.bind(account_id=account_id, amount=str(amount))
        try:
            account = self.registry.lookup(account_id)
            amount = self._check_amount(amount)
            balance_before = account.balance
            result = account.withdraw(amount)
        except OverdraftFeeUncollectedError as exc:
            log.warning(
                "overdraft_fee_uncollected",
                drawn=str(exc.drawn),
                fee=str(exc.fee),
            )
            self._record_overdraft(fee_collected=False)
            self._fail("withdraw", exc, log)
            raise
        except DomainError as exc:
            self._fail("withdraw", exc, log)
            raise

        if result.outcome is WithdrawalOutcome.IGNORED:
            log.warning("withdrawal_ignored", reason="non_positive_amount")
        elif result.outcome is WithdrawalOutcome.OVERDRAWN:
            log.warning(
                "account_overdrawn",
                balance_before=str(balance_before),
                fee_charged=str(result.fee_charged),
            )
            self._record_overdraft(fee_collected=True)
        else:
            log.info("withdrawal_completed", balance_after=str(result.balance_after))

        self._record("withdraw", result.outcome.value)
        return result

    @track_operation_duration("apply_interest")
    def apply_interest(self, account_id: int) -> Decimal:
        log = logger.bind(account_id=account_id)
        try:
            account = self.registry.lookup(account_id)
            interest = account.apply_interest()
        except DomainError as exc:
            self._fail("apply_interest", exc, log)
            raise

        log.info("interest_applied", interest=str(interest), balance_after=str(account.balance))
        self._record("apply_interest", "COMPLETED")
        return interest

    def describe(self, account_id: int) -> AccountSnapshot:
        return self.registry.lookup(account_id).describe()

    def list_accounts(self) -> list[AccountSnapshot]:
        return [account.describe() for account in self.registry]

    @track_operation_duration("close_account")
    def close_account(self, account_id: int) -> None:
        log = logger.bind(account_id=account_id)
        try:
            self.registry.close(account_id)
        except DomainError as exc:
            self._fail("close_account", exc, log)
            raise

        self._record("close_account", "COMPLETED")
        self._refresh_open_accounts()

    def close_all(self) -> int:
        closed = self.registry.close_all()
        logger.info("ledger_closed", accounts_closed=closed)
        self._refresh_open_accounts()
        return closed

    def _check_amount(self, amount: AmountLike) -> Decimal:
        amount = to_decimal(amount)
        if self.strict_amounts and amount <= 0:
            raise InvalidAmountError(amount, "Amount must be positive")
        return amount

    def _fail(self, operation: str, exc: DomainError, log: structlog.stdlib.BoundLogger) -> None:
        log.info("operation_declined", operation=operation, error_code=exc.code, reason=str(exc))
        self._record(operation, exc.code)

    def _record(self, operation: str, outcome: str) -> None:
        if self.metrics_enabled:
            LEDGER_OPERATIONS_TOTAL.labels(operation=operation, outcome=outcome).inc()

    def _record_overdraft(self, fee_collected: bool) -> None:
        if self.metrics_enabled:
            OVERDRAFT_EVENTS_TOTAL.labels(fee_collected=str(fee_collected).lower()).inc()

    def _refresh_open_accounts(self) -> None:
        if self.metrics_enabled:
            OPEN_ACCOUNTS.set(len(self.registry))
