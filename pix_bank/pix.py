"""Pix key registry and the instant-transfer protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Iterator

from pix_bank.exceptions import InsufficientFundsError, KeyNotRegisteredError
from pix_bank.models.account import require_positive
from pix_bank.models.capabilities import PixCapable
from pix_bank.models.transaction import Transaction


@dataclass
class PixKeyRegistry:
    """Set of CPFs enrolled for Pix.

    The registry holds keys only; a key resolves to an account through the
    account's unique ``owner_id``.
    """

    _keys: set[str] = field(default_factory=set)

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> PixKeyRegistry:
        return cls(_keys=set(keys))

    def add(self, key: str) -> None:
        self._keys.add(key)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))

    def __len__(self) -> int:
        return len(self._keys)


@dataclass(frozen=True)
class PixReceipt:
    """Both legs of a completed transfer."""

    debit: Transaction
    credit: Transaction


def transfer(
    registry: PixKeyRegistry,
    sender: PixCapable,
    recipient: PixCapable,
    amount: Decimal | int | str,
) -> PixReceipt:
    """Move ``amount`` from ``sender`` to ``recipient``.

    Every precondition is checked before either balance changes, so a
    failed transfer leaves both accounts untouched. The recipient is
    credited first; the sender is then debited with its own withdrawal
    rule, overdraft included.

    Raises
    ------
    InvalidAmountError
        If ``amount`` is not positive.
    KeyNotRegisteredError
        If the sender's or the recipient's CPF is not enrolled.
    InsufficientFundsError
        If the sender cannot cover ``amount``.
    """
    value = require_positive(amount, "transfer")
    if sender.owner_id not in registry:
        raise KeyNotRegisteredError("The sender's CPF is not registered for Pix.")
    if recipient.owner_id not in registry:
        raise KeyNotRegisteredError("The recipient's CPF is not registered for Pix.")
    if not sender.can_cover(value):
        raise InsufficientFundsError("Insufficient balance for this Pix transfer.")

    credit = recipient.receive_pix(value)
    debit = sender.send_pix(value)
    return PixReceipt(debit=debit, credit=credit)
