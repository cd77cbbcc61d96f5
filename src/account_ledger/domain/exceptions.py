from decimal import Decimal
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from account_ledger.domain.models import AccountKind


class DomainError(Exception):
    """Base exception for domain errors."""

    code = "DOMAIN_ERROR"


class InsufficientFundsError(DomainError):
    """Raised when account has insufficient funds for a withdrawal."""

    code = "INSUFFICIENT_FUNDS"

    def __init__(self, account_id: int, required: Decimal, available: Decimal) -> None:
        self.account_id = account_id
        self.required = required
        self.available = available
        super().__init__(f"Account {account_id} has insufficient funds: required {required}, available {available}")


class OverdraftFeeUncollectedError(InsufficientFundsError):
    """Raised when an overdraft event zeroed the balance but the fee could not be withdrawn.

    The drawdown stays committed: the account balance is 0 afterwards and the
    fee was never charged.
    """

    code = "OVERDRAFT_FEE_UNCOLLECTED"

    def __init__(self, account_id: int, requested: Decimal, drawn: Decimal, fee: Decimal) -> None:
        self.account_id = account_id
        self.requested = requested
        self.drawn = drawn
        self.fee = fee
        self.required = fee
        self.available = Decimal(0)
        DomainError.__init__(
            self,
            f"Account {account_id} overdrawn: requested {requested}, drew {drawn} to zero, "
            f"overdraft fee {fee} not collected",
        )


class AccountNotFoundError(DomainError):
    """Raised when an account cannot be found."""

    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: int) -> None:
        self.account_id = account_id
        super().__init__(f"Account {account_id} not found")


class NotApplicableError(DomainError):
    """Raised when an operation does not apply to the account's kind."""

    code = "NOT_APPLICABLE"

    def __init__(self, account_id: int, kind: "AccountKind", operation: str) -> None:
        self.account_id = account_id
        self.kind = kind
        self.operation = operation
        super().__init__(f"Operation {operation} is not applicable to {kind.value} account {account_id}")


class InvalidAmountError(DomainError):
    """Raised when an amount is rejected by the strict amount policy."""

    code = "INVALID_AMOUNT"

    def __init__(self, amount: Decimal, reason: str) -> None:
        self.amount = amount
        self.reason = reason
        super().__init__(f"Invalid amount {amount}: {reason}")
