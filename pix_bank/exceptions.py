"""Custom exception hierarchy for pix-bank."""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_RATE = "INVALID_RATE"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    DUPLICATE_OWNER_NAME = "DUPLICATE_OWNER_NAME"
    DUPLICATE_OWNER_ID = "DUPLICATE_OWNER_ID"
    INVALID_ID = "INVALID_ID"
    WRONG_ACCOUNT_TYPE = "WRONG_ACCOUNT_TYPE"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    KEY_NOT_REGISTERED = "KEY_NOT_REGISTERED"


class PixBankError(Exception):
    """Base exception for all pix-bank errors."""


class BankError(PixBankError):
    """Base exception for recoverable domain failures.

    Every subclass carries an ``ErrorKind`` so callers can branch on the
    failure without matching on exception types.
    """

    kind: ErrorKind

    @property
    def message(self) -> str:
        return str(self)


class InvalidAmountError(BankError):
    """Raised when a deposit, withdrawal or transfer amount is not positive."""

    kind = ErrorKind.INVALID_AMOUNT


class InvalidRateError(BankError):
    """Raised when a correction rate is not positive."""

    kind = ErrorKind.INVALID_RATE


class InsufficientFundsError(BankError):
    """Raised when balance (plus overdraft, if any) cannot cover an amount."""

    kind = ErrorKind.INSUFFICIENT_FUNDS


class AccountNotFoundError(BankError):
    """Raised when an account lookup by number or owner id fails."""

    kind = ErrorKind.ACCOUNT_NOT_FOUND


class DuplicateOwnerError(BankError):
    """Raised when an owner attribute is already in use."""


class DuplicateOwnerNameError(DuplicateOwnerError):
    kind = ErrorKind.DUPLICATE_OWNER_NAME


class DuplicateOwnerIdError(DuplicateOwnerError):
    kind = ErrorKind.DUPLICATE_OWNER_ID


class InvalidIdError(BankError):
    """Raised when a CPF fails checksum validation."""

    kind = ErrorKind.INVALID_ID


class WrongAccountTypeError(BankError):
    """Raised when an operation is not supported by the account variant."""

    kind = ErrorKind.WRONG_ACCOUNT_TYPE


class PixKeyError(BankError):
    """Base exception for Pix key registry failures."""


class AlreadyRegisteredError(PixKeyError):
    kind = ErrorKind.ALREADY_REGISTERED


class KeyNotRegisteredError(PixKeyError):
    kind = ErrorKind.KEY_NOT_REGISTERED


class ConfigurationError(PixBankError):
    """Raised when configuration is invalid or missing."""


class SnapshotError(PixBankError):
    """Raised when a persisted snapshot cannot be read or rebuilt."""
