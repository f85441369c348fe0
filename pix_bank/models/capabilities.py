"""Capability protocols implemented by the account variants."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pix_bank.models.transaction import Transaction
    from pix_bank.pix import PixKeyRegistry


@runtime_checkable
class Withdrawable(Protocol):
    """Accounts that can be debited by the owner."""

    def can_cover(self, amount: Decimal) -> bool: ...

    def withdraw(self, amount: Decimal) -> Transaction: ...


@runtime_checkable
class Correctable(Protocol):
    """Accounts that accept a percentage balance correction."""

    def correction_yield(self, rate_percent: Decimal) -> Decimal: ...

    def apply_correction(self, rate_percent: Decimal) -> Transaction: ...


@runtime_checkable
class PixCapable(Protocol):
    """Accounts that may enrol a Pix key and send or receive transfers."""

    owner_id: str

    def can_cover(self, amount: Decimal) -> bool: ...

    def register_pix_key(self, registry: PixKeyRegistry) -> None: ...

    def receive_pix(self, amount: Decimal) -> Transaction: ...

    def send_pix(self, amount: Decimal) -> Transaction: ...
