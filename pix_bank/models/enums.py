"""Enumeration types for banking domain entities."""

from enum import Enum


class AccountKind(str, Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    SPECIAL = "SPECIAL"

    @property
    def label(self) -> str:
        return _ACCOUNT_LABELS[self]


class TransactionKind(str, Enum):
    WITHDRAWAL = "WITHDRAWAL"
    DEPOSIT = "DEPOSIT"
    PIX_OUT = "PIX_OUT"
    PIX_IN = "PIX_IN"
    CORRECTION = "CORRECTION"

    @property
    def label(self) -> str:
        return _TRANSACTION_LABELS[self]


_ACCOUNT_LABELS = {
    AccountKind.CHECKING: "Checking",
    AccountKind.SAVINGS: "Savings",
    AccountKind.SPECIAL: "Special",
}

_TRANSACTION_LABELS = {
    TransactionKind.WITHDRAWAL: "Withdrawal",
    TransactionKind.DEPOSIT: "Deposit",
    TransactionKind.PIX_OUT: "Pix Out",
    TransactionKind.PIX_IN: "Pix In",
    TransactionKind.CORRECTION: "Rate Correction",
}
