"""Ledger service: the account directory and its use cases."""

from __future__ import annotations

import functools
import random as _random
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Generic, Iterable, TypeVar

from pix_bank import pix
from pix_bank.config import OverdraftConfig
from pix_bank.cpf import is_valid_cpf
from pix_bank.exceptions import (
    AccountNotFoundError,
    BankError,
    DuplicateOwnerIdError,
    DuplicateOwnerNameError,
    ErrorKind,
    InvalidAmountError,
    InvalidIdError,
    KeyNotRegisteredError,
    WrongAccountTypeError,
)
from pix_bank.logging import get_logger
from pix_bank.models import (
    ACCOUNT_TYPES,
    Account,
    AccountKind,
    Correctable,
    PixCapable,
    Transaction,
)
from pix_bank.models.account import require_positive_rate, to_decimal
from pix_bank.pix import PixKeyRegistry, PixReceipt

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class AccountNumberSequence:
    """Monotonic account-number generator owned by one ledger."""

    next_value: int = 1

    def next(self) -> int:
        value = self.next_value
        self.next_value += 1
        return value

    def advance_past(self, number: int) -> None:
        """Make sure no future number collides with ``number``."""
        if number >= self.next_value:
            self.next_value = number + 1


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a ledger use case: a value or a typed domain error."""

    value: T | None = None
    error: BankError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def _operation(func: Callable[..., T]) -> Callable[..., OperationResult[T]]:
    """Run a use case under the ledger lock and wrap its outcome."""

    @functools.wraps(func)
    def wrapper(self: LedgerService, *args: Any, **kwargs: Any) -> OperationResult[T]:
        with self._lock:
            try:
                value = func(self, *args, **kwargs)
            except BankError as exc:
                logger.warning(
                    "%s rejected [%s]: %s",
                    func.__name__,
                    exc.kind.value,
                    exc,
                    extra={"operation": func.__name__, "error_kind": exc.kind.value},
                )
                return OperationResult(error=exc)
        return OperationResult(value=value)

    return wrapper


class LedgerService:
    """In-memory directory of accounts with the Pix key registry.

    Account numbers, owner names and owner ids are unique across the
    directory. Every public use case returns an ``OperationResult`` instead
    of raising domain errors; all of them run under one re-entrant lock.

    Parameters
    ----------
    overdraft : OverdraftConfig | None
        Range for special-account overdraft limits.
    rng : random.Random | None
        Source for overdraft limits. Seed it for reproducible limits.
    sequence : AccountNumberSequence | None
        Account-number generator; a fresh one starts at 1.
    registry : PixKeyRegistry | None
        Pix key registry; empty by default.
    """

    def __init__(
        self,
        overdraft: OverdraftConfig | None = None,
        rng: _random.Random | None = None,
        sequence: AccountNumberSequence | None = None,
        registry: PixKeyRegistry | None = None,
    ) -> None:
        self.overdraft = overdraft if overdraft is not None else OverdraftConfig()
        self.sequence = sequence if sequence is not None else AccountNumberSequence()
        self.registry = registry if registry is not None else PixKeyRegistry()
        self._rng = rng if rng is not None else _random.Random()
        self._accounts: dict[int, Account] = {}
        self._by_owner_id: dict[str, Account] = {}
        self._owner_names: set[str] = set()
        self._lock = threading.RLock()

    @classmethod
    def restore(
        cls,
        accounts: Iterable[Account],
        registry: PixKeyRegistry,
        sequence: AccountNumberSequence,
        **kwargs: Any,
    ) -> LedgerService:
        """Rebuild a ledger from previously created accounts.

        Raises
        ------
        ValueError
            If the accounts violate directory uniqueness.
        """
        service = cls(sequence=sequence, registry=registry, **kwargs)
        for account in accounts:
            if account.account_number in service._accounts:
                raise ValueError(f"Duplicate account number {account.account_number}")
            if account.owner_id in service._by_owner_id:
                raise ValueError(f"Duplicate owner id {account.owner_id}")
            if account.owner_name in service._owner_names:
                raise ValueError(f"Duplicate owner name {account.owner_name}")
            service._index(account)
            sequence.advance_past(account.account_number)
        return service

    # Use cases

    @_operation
    def create_account(
        self,
        kind: AccountKind | str,
        owner_name: str,
        owner_id: str,
        initial_balance: Decimal | int | str | None = None,
    ) -> Account:
        """Open an account of ``kind`` for a new owner."""
        try:
            kind = AccountKind(kind)
        except ValueError:
            raise WrongAccountTypeError(f"Unknown account type: {kind!r}.") from None
        if owner_name in self._owner_names:
            raise DuplicateOwnerNameError(f"Owner name {owner_name!r} is already registered.")
        if owner_id in self._by_owner_id:
            raise DuplicateOwnerIdError(f"CPF {owner_id} is already registered.")
        if not is_valid_cpf(owner_id):
            raise InvalidIdError(f"Invalid CPF: {owner_id}.")

        balance = to_decimal(initial_balance) if initial_balance is not None else Decimal("0")
        if not balance.is_finite():
            raise InvalidAmountError(f"Invalid initial balance: {initial_balance!r}")
        fields: dict[str, Any] = {
            "account_number": self.sequence.next(),
            "owner_name": owner_name,
            "owner_id": owner_id,
            "balance": balance,
        }
        if kind is AccountKind.SPECIAL:
            fields["overdraft_limit"] = self._draw_overdraft_limit()

        account = ACCOUNT_TYPES[kind](**fields)
        self._index(account)
        logger.info(
            "Opened %s account #%d",
            kind.value,
            account.account_number,
            extra={"account_number": account.account_number},
        )
        return account

    @_operation
    def deposit(self, account_number: int, amount: Decimal | int | str) -> Transaction:
        account = self._require_account(account_number)
        transaction = account.deposit(amount)
        logger.info(
            "Deposit of %s into #%d",
            transaction.amount,
            account_number,
            extra={"account_number": account_number},
        )
        return transaction

    @_operation
    def withdraw(self, account_number: int, amount: Decimal | int | str) -> Transaction:
        account = self._require_account(account_number)
        transaction = account.withdraw(amount)
        logger.info(
            "Withdrawal of %s from #%d",
            transaction.amount,
            account_number,
            extra={"account_number": account_number},
        )
        return transaction

    @_operation
    def apply_correction_to_all_savings(
        self, rate_percent: Decimal | int | str
    ) -> list[Transaction]:
        """Apply a percentage correction to every savings account.

        Other variants are skipped. Zero savings accounts is not an error.
        """
        rate = require_positive_rate(rate_percent)

        savings = [a for a in self._ordered_accounts() if isinstance(a, Correctable)]
        # Every yield is checked before any balance moves
        for account in savings:
            account.correction_yield(rate)
        applied = [account.apply_correction(rate) for account in savings]
        logger.info("Applied %s%% correction to %d savings account(s)", rate, len(applied))
        return applied

    @_operation
    def register_pix_key(self, owner_id: str) -> Account:
        account = self._by_owner_id.get(owner_id)
        if account is None:
            raise AccountNotFoundError(f"No account found for CPF {owner_id}.")
        if not isinstance(account, PixCapable):
            raise WrongAccountTypeError("Only checking and special accounts can register Pix keys.")
        account.register_pix_key(self.registry)
        logger.info(
            "Registered Pix key for #%d",
            account.account_number,
            extra={"account_number": account.account_number},
        )
        return account

    @_operation
    def transfer_pix(
        self,
        sender_id: str,
        recipient_id: str,
        amount: Decimal | int | str,
    ) -> PixReceipt:
        """Transfer between the accounts owning two registered CPFs."""
        for owner_id in (sender_id, recipient_id):
            if owner_id not in self.registry:
                raise KeyNotRegisteredError(f"CPF {owner_id} is not registered for Pix.")

        sender = self._require_pix_account(sender_id)
        recipient = self._require_pix_account(recipient_id)
        receipt = pix.transfer(self.registry, sender, recipient, amount)
        logger.info(
            "Pix of %s from #%d to #%d",
            receipt.debit.amount,
            sender.account_number,
            recipient.account_number,
            extra={"account_number": sender.account_number},
        )
        return receipt

    @_operation
    def statement(self, account_number: int) -> list[Transaction]:
        """Return the account's transactions in insertion order."""
        return list(self._require_account(account_number).transactions)

    @_operation
    def get_account(self, account_number: int) -> Account:
        return self._require_account(account_number)

    def list_accounts(self) -> list[Account]:
        """Return every account ordered by account number."""
        with self._lock:
            return self._ordered_accounts()

    def __len__(self) -> int:
        return len(self._accounts)

    # Internals

    def _index(self, account: Account) -> None:
        self._accounts[account.account_number] = account
        self._by_owner_id[account.owner_id] = account
        self._owner_names.add(account.owner_name)

    def _ordered_accounts(self) -> list[Account]:
        return [self._accounts[number] for number in sorted(self._accounts)]

    def _require_account(self, account_number: int) -> Account:
        account = self._accounts.get(account_number)
        if account is None:
            raise AccountNotFoundError(f"Account #{account_number} not found.")
        return account

    def _require_pix_account(self, owner_id: str) -> PixCapable:
        account = self._by_owner_id.get(owner_id)
        if account is None:
            raise AccountNotFoundError(f"No account found for CPF {owner_id}.")
        if not isinstance(account, PixCapable):
            raise WrongAccountTypeError(f"Account #{account.account_number} cannot use Pix.")
        return account

    def _draw_overdraft_limit(self) -> Decimal:
        return Decimal(self._rng.randrange(self.overdraft.minimum, self.overdraft.maximum))
