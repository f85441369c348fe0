"""In-memory ledger holding accounts and the Pix key registry."""

from pix_bank.store.ledger import AccountNumberSequence, LedgerService, OperationResult

__all__ = ["AccountNumberSequence", "LedgerService", "OperationResult"]
