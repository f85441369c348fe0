"""Snapshot persistence for the ledger state."""

from pix_bank.persistence.json_file import JsonSnapshotFile

__all__ = ["JsonSnapshotFile"]
