"""JSON snapshot of the whole ledger state."""

import json
from pathlib import Path
from typing import Any

from pix_bank.exceptions import BankError, SnapshotError
from pix_bank.logging import get_logger
from pix_bank.persistence.serialization import account_from_dict, account_to_dict
from pix_bank.pix import PixKeyRegistry
from pix_bank.store.ledger import AccountNumberSequence, LedgerService

logger = get_logger(__name__)

SNAPSHOT_FORMAT = "pix-bank/1"


class JsonSnapshotFile:
    """Save and restore a ``LedgerService`` as a single JSON document.

    The snapshot holds every account with its transaction log, the Pix key
    registry and the next account number. It is not versioned beyond a
    format tag: a snapshot written by a different format is rejected.
    """

    def __init__(self, path: str | Path, pretty: bool = False) -> None:
        """Initialize the snapshot file.

        Parameters
        ----------
        path : str | Path
            File to read and write.
        pretty : bool
            Pretty-print JSON output.
        """
        self.path = Path(path)
        self.pretty = pretty

    def save(self, service: LedgerService) -> None:
        """Write the full ledger state, replacing any previous snapshot."""
        data = {
            "format": SNAPSHOT_FORMAT,
            "next_account_number": service.sequence.next_value,
            "pix_keys": list(service.registry),
            "accounts": [account_to_dict(a) for a in service.list_accounts()],
        }

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False)
            else:
                json.dump(data, f, ensure_ascii=False)
        tmp_path.replace(self.path)

        logger.info("Saved %d account(s) to %s", len(data["accounts"]), self.path)

    def load(self, **service_kwargs: Any) -> LedgerService:
        """Restore the ledger, falling back to an empty one.

        A missing file starts a fresh ledger silently; an unreadable or
        malformed snapshot is logged and also yields a fresh ledger.
        """
        if not self.path.exists():
            logger.info("No snapshot at %s, starting empty", self.path)
            return LedgerService(**service_kwargs)
        try:
            return self.load_strict(**service_kwargs)
        except SnapshotError as exc:
            logger.warning("Ignoring snapshot %s: %s", self.path, exc)
            return LedgerService(**service_kwargs)

    def load_strict(self, **service_kwargs: Any) -> LedgerService:
        """Restore the ledger or raise ``SnapshotError``."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise SnapshotError(f"Cannot read snapshot: {exc}") from exc

        if not isinstance(data, dict) or data.get("format") != SNAPSHOT_FORMAT:
            raise SnapshotError("Unknown snapshot format")

        try:
            accounts = [account_from_dict(a) for a in data["accounts"]]
            service = LedgerService.restore(
                accounts,
                registry=PixKeyRegistry.from_keys(str(k) for k in data["pix_keys"]),
                sequence=AccountNumberSequence(int(data["next_account_number"])),
                **service_kwargs,
            )
        except (KeyError, TypeError, ValueError, ArithmeticError, BankError) as exc:
            raise SnapshotError(f"Malformed snapshot: {exc!r}") from exc

        logger.info("Loaded %d account(s) from %s", len(service), self.path)
        return service
