"""Domain layer - account variants and balance rules."""

from account_ledger.domain.exceptions import (
    AccountNotFoundError,
    DomainError,
    InsufficientFundsError,
    InvalidAmountError,
    NotApplicableError,
    OverdraftFeeUncollectedError,
)
from account_ledger.domain.models import (
    Account,
    AccountKind,
    AccountSnapshot,
    AccountTerms,
    InterestTerms,
    OverdraftTerms,
    StandardTerms,
    WithdrawalOutcome,
    WithdrawalResult,
    build_terms,
)


__all__ = [
    "Account",
    "AccountKind",
    "AccountNotFoundError",
    "AccountSnapshot",
    "AccountTerms",
    "DomainError",
    "InsufficientFundsError",
    "InterestTerms",
    "InvalidAmountError",
    "NotApplicableError",
    "OverdraftFeeUncollectedError",
    "OverdraftTerms",
    "StandardTerms",
    "WithdrawalOutcome",
    "WithdrawalResult",
    "build_terms",
]
