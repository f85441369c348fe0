"""Banking domain models."""

from pix_bank.models.account import (
    ACCOUNT_TYPES,
    Account,
    CheckingAccount,
    SavingsAccount,
    SpecialAccount,
)
from pix_bank.models.capabilities import Correctable, PixCapable, Withdrawable
from pix_bank.models.enums import AccountKind, TransactionKind
from pix_bank.models.transaction import Transaction

__all__ = [
    "ACCOUNT_TYPES",
    "Account",
    "AccountKind",
    "CheckingAccount",
    "Correctable",
    "PixCapable",
    "SavingsAccount",
    "SpecialAccount",
    "Transaction",
    "TransactionKind",
    "Withdrawable",
]
