from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar

from account_ledger.domain.exceptions import (
    InsufficientFundsError,
    NotApplicableError,
    OverdraftFeeUncollectedError,
)


type AmountLike = Decimal | int | float | str


def to_decimal(value: AmountLike) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Go through str so 0.1 stays 0.1 rather than its binary expansion
        return Decimal(str(value))
    return Decimal(value)


class AccountKind(Enum):
    STANDARD = "STANDARD"
    INTEREST = "INTEREST"
    OVERDRAFT = "OVERDRAFT"


class WithdrawalOutcome(Enum):
    COMPLETED = "COMPLETED"
    OVERDRAWN = "OVERDRAWN"
    IGNORED = "IGNORED"


@dataclass(frozen=True)
class StandardTerms:
    kind: ClassVar[AccountKind] = AccountKind.STANDARD


@dataclass(frozen=True)
class InterestTerms:
    rate: Decimal
    kind: ClassVar[AccountKind] = AccountKind.INTEREST

    def __post_init__(self) -> None:
        object.__setattr__(self, "rate", to_decimal(self.rate))
        if self.rate < 0:
            raise ValueError("Interest rate cannot be negative")


@dataclass(frozen=True)
class OverdraftTerms:
    fee: Decimal
    kind: ClassVar[AccountKind] = AccountKind.OVERDRAFT

    def __post_init__(self) -> None:
        object.__setattr__(self, "fee", to_decimal(self.fee))
        if self.fee < 0:
            raise ValueError("Overdraft fee cannot be negative")


type AccountTerms = StandardTerms | InterestTerms | OverdraftTerms


def build_terms(
    kind: AccountKind,
    interest_rate: AmountLike | None = None,
    overdraft_fee: AmountLike | None = None,
) -> AccountTerms:
    match kind:
        case AccountKind.STANDARD:
            return StandardTerms()
        case AccountKind.INTEREST:
            if interest_rate is None:
                raise ValueError("Interest account requires an interest rate")
            return InterestTerms(rate=to_decimal(interest_rate))
        case AccountKind.OVERDRAFT:
            if overdraft_fee is None:
                raise ValueError("Overdraft account requires an overdraft fee")
            return OverdraftTerms(fee=to_decimal(overdraft_fee))
    raise ValueError(f"Unknown account kind: {kind!r}")


@dataclass(frozen=True)
class AccountSnapshot:
    id: int
    owner: str
    kind: AccountKind
    balance: Decimal
    interest_rate_percent: Decimal | None = None
    overdraft_fee: Decimal | None = None

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "owner": self.owner,
            "kind": self.kind.value,
            "balance": self.balance,
        }
        if self.interest_rate_percent is not None:
            data["interest_rate_percent"] = self.interest_rate_percent
        if self.overdraft_fee is not None:
            data["overdraft_fee"] = self.overdraft_fee
        return data


@dataclass(frozen=True)
class WithdrawalResult:
    account_id: int
    outcome: WithdrawalOutcome
    requested: Decimal
    withdrawn: Decimal = Decimal(0)
    fee_charged: Decimal = Decimal(0)
    balance_after: Decimal = Decimal(0)


class Account:
    """
    A single ledger account.

    Identity and owner are fixed at creation. The variant (standard, interest
    or overdraft) is carried by an immutable terms value; ``kind`` is derived
    from it. Accounts are created and released only by ``AccountRegistry``.
    """

    def __init__(self, account_id: int, owner: str, balance: AmountLike, terms: AccountTerms) -> None:
        self._id = account_id
        self._owner = owner
        self._balance = to_decimal(balance)
        self._terms = terms

    def __repr__(self) -> str:
        return f"Account(id={self._id!r}, owner={self._owner!r}, kind={self.kind.value}, balance={self._balance})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def terms(self) -> AccountTerms:
        return self._terms

    @property
    def kind(self) -> AccountKind:
        return self._terms.kind

    def deposit(self, amount: AmountLike) -> bool:
        """Credit a positive amount. Non-positive amounts are ignored; returns whether the balance changed."""
        amount = to_decimal(amount)
        if amount <= 0:
            return False
        self._balance += amount
        return True

    def withdraw(self, amount: AmountLike) -> WithdrawalResult:
        """
        Debit ``amount`` from the account.

        Standard and interest accounts reject amounts above the balance with
        ``InsufficientFundsError``. Overdraft accounts treat such a request as
        an overdraft event: the balance is drawn down to zero, then the
        overdraft fee is withdrawn under the same rule. A non-zero fee can
        never be covered by a zero balance, so the event ends with
        ``OverdraftFeeUncollectedError`` and the drawdown kept.
        """
        amount = to_decimal(amount)
        if amount <= 0:
            return WithdrawalResult(
                account_id=self._id,
                outcome=WithdrawalOutcome.IGNORED,
                requested=amount,
                balance_after=self._balance,
            )

        match self._terms:
            case OverdraftTerms(fee=fee) if amount > self._balance:
                return self._overdraw(amount, fee)

        self._debit(amount)
        return WithdrawalResult(
            account_id=self._id,
            outcome=WithdrawalOutcome.COMPLETED,
            requested=amount,
            withdrawn=amount,
            balance_after=self._balance,
        )

    def apply_interest(self) -> Decimal:
        """Credit ``balance * rate``; returns the amount actually credited."""
        match self._terms:
            case InterestTerms(rate=rate):
                interest = self._balance * rate
                if self.deposit(interest):
                    return interest
                return Decimal(0)
            case _:
                raise NotApplicableError(self._id, self.kind, "apply_interest")

    def describe(self) -> AccountSnapshot:
        interest_rate_percent: Decimal | None = None
        overdraft_fee: Decimal | None = None
        match self._terms:
            case InterestTerms(rate=rate):
                interest_rate_percent = rate * 100
            case OverdraftTerms(fee=fee):
                overdraft_fee = fee

        return AccountSnapshot(
            id=self._id,
            owner=self._owner,
            kind=self.kind,
            balance=self._balance,
            interest_rate_percent=interest_rate_percent,
            overdraft_fee=overdraft_fee,
        )

    def _debit(self, amount: Decimal) -> None:
        if amount > self._balance:
            raise InsufficientFundsError(self._id, required=amount, available=self._balance)
        self._balance -= amount

    def _overdraw(self, amount: Decimal, fee: Decimal) -> WithdrawalResult:
        drawn = self._balance
        self._debit(drawn)
        try:
            self._debit(fee)
        except InsufficientFundsError as exc:
            raise OverdraftFeeUncollectedError(self._id, requested=amount, drawn=drawn, fee=fee) from exc

        return WithdrawalResult(
            account_id=self._id,
            outcome=WithdrawalOutcome.OVERDRAWN,
            requested=amount,
            withdrawn=drawn,
            fee_charged=fee,
            balance_after=self._balance,
        )
