"""Serialization helpers shared by the snapshot store."""

from dataclasses import fields, is_dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pix_bank.models import ACCOUNT_TYPES, Account, AccountKind, Transaction, TransactionKind


def to_dict_fast(obj: Any) -> dict:
    """Convert a dataclass without the deep copy done by ``asdict``.

    Parameters
    ----------
    obj : Any
        A dataclass instance.

    Returns
    -------
    dict
        Serialized dictionary.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return to_dict_fast(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def account_to_dict(account: Account) -> dict:
    """Serialize an account, tagging it with its variant."""
    return {"kind": account.kind.value, **to_dict_fast(account)}


def transaction_from_dict(data: dict) -> Transaction:
    return Transaction(
        amount=Decimal(data["amount"]),
        kind=TransactionKind(data["kind"]),
        balance_after=Decimal(data["balance_after"]),
        note=data.get("note"),
        timestamp=datetime.fromisoformat(data["timestamp"]),
    )


def account_from_dict(data: dict) -> Account:
    """Rebuild an account from ``account_to_dict`` output.

    Raises
    ------
    KeyError, ValueError, ArithmeticError
        If a field is missing or malformed.
    """
    kind = AccountKind(data["kind"])
    values: dict[str, Any] = {
        "account_number": int(data["account_number"]),
        "owner_name": str(data["owner_name"]),
        "owner_id": str(data["owner_id"]),
        "balance": Decimal(data["balance"]),
        "transactions": [transaction_from_dict(t) for t in data.get("transactions", [])],
    }
    if kind is AccountKind.SPECIAL:
        values["overdraft_limit"] = Decimal(data["overdraft_limit"])
    account = ACCOUNT_TYPES[kind](**values)
    # Restored balances skip the opening clamp
    account.balance = values["balance"]
    return account
