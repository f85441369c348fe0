"""Transaction model for the account log."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from pix_bank.models.enums import TransactionKind


@dataclass(frozen=True)
class Transaction:
    """A single entry in an account's transaction log.

    ``amount`` is always the positive magnitude of the operation; the
    direction follows from ``kind``.
    """

    amount: Decimal
    kind: TransactionKind
    balance_after: Decimal
    note: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        lines = [f"{self.timestamp:%d/%m/%Y} - {self.kind.label} - {self.amount:.2f}"]
        if self.note:
            lines.append(f"Note: {self.note}")
        lines.append(f"Balance: {self.balance_after:.2f}")
        return "\n".join(lines)
