"""Account variants and their balance rules.

Three variants share the fields and bookkeeping of ``Account``:

- ``CheckingAccount``: plain debit/credit plus Pix transfers
- ``SavingsAccount``: plain debit/credit plus percentage corrections
- ``SpecialAccount``: checking behaviour backed by a one-shot overdraft limit

Variants are tagged with ``AccountKind``; optional behaviour is exposed
through the protocols in ``pix_bank.models.capabilities``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException, InvalidOperation
from typing import TYPE_CHECKING, ClassVar, Iterator

from pix_bank.exceptions import (
    AlreadyRegisteredError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidRateError,
)
from pix_bank.models.enums import AccountKind, TransactionKind
from pix_bank.models.transaction import Transaction

if TYPE_CHECKING:
    from pix_bank.pix import PixKeyRegistry

ZERO = Decimal("0")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a user-supplied number to ``Decimal``.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")``.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from exc


def require_positive(amount: Decimal | int | float | str, action: str) -> Decimal:
    """Return ``amount`` as a finite positive ``Decimal`` or raise."""
    value = to_decimal(amount)
    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(f"The amount to {action} must be positive.")
    return value


def require_positive_rate(rate_percent: Decimal | int | float | str) -> Decimal:
    """Return a correction rate as a finite positive ``Decimal`` or raise."""
    try:
        rate = to_decimal(rate_percent)
    except InvalidAmountError as exc:
        raise InvalidRateError(f"Invalid correction rate: {rate_percent!r}") from exc
    if not rate.is_finite() or rate <= 0:
        raise InvalidRateError("The correction rate must be positive.")
    return rate


@contextmanager
def balance_arithmetic() -> Iterator[None]:
    """Report balance arithmetic that leaves the decimal range as a bad amount."""
    try:
        yield
    except DecimalException as exc:
        raise InvalidAmountError("The resulting balance is out of range.") from exc


@dataclass(eq=False)
class Account(ABC):
    """Bank account entity.

    Accounts compare by identity; ``account_number`` is assigned by the
    ledger service and is unique within it.
    """

    account_number: int
    owner_name: str
    owner_id: str
    balance: Decimal = ZERO
    transactions: list[Transaction] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.balance = to_decimal(self.balance)
        if not self.balance.is_finite():
            raise InvalidAmountError(f"Invalid initial balance: {self.balance}")
        if self.balance < 0:
            self.balance = ZERO

    @property
    @abstractmethod
    def kind(self) -> AccountKind:
        """Variant tag; each concrete account sets it as a class attribute."""

    def deposit(self, amount: Decimal | int | str) -> Transaction:
        """Credit ``amount`` and log a deposit."""
        value = require_positive(amount, "deposit")
        with balance_arithmetic():
            self.balance += value
        return self._record(TransactionKind.DEPOSIT, value)

    def withdraw(self, amount: Decimal | int | str) -> Transaction:
        """Debit ``amount`` and log a withdrawal.

        Raises
        ------
        InvalidAmountError
            If ``amount`` is not positive.
        InsufficientFundsError
            If the account cannot cover ``amount``.
        """
        value = require_positive(amount, "withdraw")
        if not self.can_cover(value):
            raise InsufficientFundsError("Insufficient balance for this withdrawal.")
        self._debit(value)
        return self._record(TransactionKind.WITHDRAWAL, value)

    def available(self) -> Decimal:
        """Funds that a debit may draw on."""
        return self.balance

    def can_cover(self, amount: Decimal) -> bool:
        return self.available() >= amount

    def _debit(self, amount: Decimal) -> None:
        with balance_arithmetic():
            self.balance -= amount

    def _record(
        self,
        kind: TransactionKind,
        amount: Decimal,
        note: str | None = None,
    ) -> Transaction:
        transaction = Transaction(
            amount=amount,
            kind=kind,
            balance_after=self.balance,
            note=note,
        )
        self.transactions.append(transaction)
        return transaction

    def __str__(self) -> str:
        return (
            f"#{self.account_number} {self.kind.label} | {self.owner_name} "
            f"| CPF {self.owner_id} | balance {self.balance:.2f}"
        )


class PixMixin:
    """Pix key enrolment and transfer legs for checking-style accounts.

    The full transfer protocol, including the registry checks, lives in
    ``pix_bank.pix.transfer``; these methods only move money on one side.
    """

    owner_id: str

    def register_pix_key(self, registry: PixKeyRegistry) -> None:
        """Enrol this account's CPF as a Pix key."""
        if self.owner_id in registry:
            raise AlreadyRegisteredError(f"CPF {self.owner_id} is already registered for Pix.")
        registry.add(self.owner_id)

    def receive_pix(self, amount: Decimal) -> Transaction:
        with balance_arithmetic():
            self.balance += amount
        return self._record(TransactionKind.PIX_IN, amount)

    def send_pix(self, amount: Decimal) -> Transaction:
        if not self.can_cover(amount):
            raise InsufficientFundsError("Insufficient balance for this Pix transfer.")
        self._debit(amount)
        return self._record(TransactionKind.PIX_OUT, amount)


@dataclass(eq=False)
class CheckingAccount(PixMixin, Account):
    """Checking account: no overdraft, Pix enabled."""

    kind: ClassVar[AccountKind] = AccountKind.CHECKING


@dataclass(eq=False)
class SavingsAccount(Account):
    """Savings account with percentage corrections, no Pix."""

    kind: ClassVar[AccountKind] = AccountKind.SAVINGS

    def correction_yield(self, rate_percent: Decimal | int | str) -> Decimal:
        """Return what ``apply_correction`` would add, without changing the balance.

        Raises ``InvalidAmountError`` when the corrected balance would leave
        the decimal range.
        """
        rate = require_positive_rate(rate_percent)
        with balance_arithmetic():
            earned = self.balance * rate / 100
            if not (self.balance + earned).is_finite():
                raise InvalidAmountError("The resulting balance is out of range.")
        return earned

    def apply_correction(self, rate_percent: Decimal | int | str) -> Transaction:
        """Grow the balance by ``rate_percent`` percent and log the yield."""
        rate = require_positive_rate(rate_percent)
        earned = self.correction_yield(rate)
        self.balance += earned
        return self._record(TransactionKind.CORRECTION, earned, note=f"Rate {rate:.2f}%")


@dataclass(eq=False)
class SpecialAccount(PixMixin, Account):
    """Checking account backed by an overdraft limit.

    The first debit that the balance alone cannot cover folds the entire
    remaining limit into the balance and zeroes the limit. The limit is
    never replenished.
    """

    kind: ClassVar[AccountKind] = AccountKind.SPECIAL

    overdraft_limit: Decimal = ZERO

    def __post_init__(self) -> None:
        super().__post_init__()
        self.overdraft_limit = to_decimal(self.overdraft_limit)
        if not self.overdraft_limit.is_finite():
            raise InvalidAmountError(f"Invalid overdraft limit: {self.overdraft_limit}")
        if self.overdraft_limit < 0:
            self.overdraft_limit = ZERO

    def available(self) -> Decimal:
        with balance_arithmetic():
            return self.balance + self.overdraft_limit

    def _debit(self, amount: Decimal) -> None:
        if self.balance >= amount:
            super()._debit(amount)
            return
        with balance_arithmetic():
            self.balance = self.balance + self.overdraft_limit - amount
        self.overdraft_limit = ZERO

    def __str__(self) -> str:
        return f"{super().__str__()} | overdraft {self.overdraft_limit:.2f}"


ACCOUNT_TYPES: dict[AccountKind, type[Account]] = {
    AccountKind.CHECKING: CheckingAccount,
    AccountKind.SAVINGS: SavingsAccount,
    AccountKind.SPECIAL: SpecialAccount,
}
