"""Tests for custom exception hierarchy."""

import pytest

from pix_bank.exceptions import (
    AccountNotFoundError,
    AlreadyRegisteredError,
    BankError,
    ConfigurationError,
    DuplicateOwnerError,
    DuplicateOwnerIdError,
    DuplicateOwnerNameError,
    ErrorKind,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidIdError,
    InvalidRateError,
    KeyNotRegisteredError,
    PixBankError,
    PixKeyError,
    SnapshotError,
    WrongAccountTypeError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_pix_bank_error_is_exception(self) -> None:
        assert isinstance(PixBankError("test"), Exception)

    def test_bank_error_is_pix_bank_error(self) -> None:
        assert isinstance(BankError("test"), PixBankError)

    def test_duplicate_owner_errors(self) -> None:
        for cls in (DuplicateOwnerNameError, DuplicateOwnerIdError):
            err = cls("test")
            assert isinstance(err, DuplicateOwnerError)
            assert isinstance(err, BankError)

    def test_pix_key_errors(self) -> None:
        for cls in (AlreadyRegisteredError, KeyNotRegisteredError):
            assert isinstance(cls("test"), PixKeyError)

    def test_non_domain_errors_are_not_bank_errors(self) -> None:
        assert not isinstance(ConfigurationError("test"), BankError)
        assert not isinstance(SnapshotError("test"), BankError)
        assert isinstance(SnapshotError("test"), PixBankError)

    def test_exception_message(self) -> None:
        err = AccountNotFoundError("Account #7 not found.")
        assert str(err) == "Account #7 not found."
        assert err.message == "Account #7 not found."


class TestErrorKinds:
    """Each domain error maps to exactly one kind."""

    @pytest.mark.parametrize(
        ("cls", "kind"),
        [
            (InvalidAmountError, ErrorKind.INVALID_AMOUNT),
            (InvalidRateError, ErrorKind.INVALID_RATE),
            (InsufficientFundsError, ErrorKind.INSUFFICIENT_FUNDS),
            (AccountNotFoundError, ErrorKind.ACCOUNT_NOT_FOUND),
            (DuplicateOwnerNameError, ErrorKind.DUPLICATE_OWNER_NAME),
            (DuplicateOwnerIdError, ErrorKind.DUPLICATE_OWNER_ID),
            (InvalidIdError, ErrorKind.INVALID_ID),
            (WrongAccountTypeError, ErrorKind.WRONG_ACCOUNT_TYPE),
            (AlreadyRegisteredError, ErrorKind.ALREADY_REGISTERED),
            (KeyNotRegisteredError, ErrorKind.KEY_NOT_REGISTERED),
        ],
    )
    def test_kind(self, cls: type[BankError], kind: ErrorKind) -> None:
        assert cls("x").kind is kind

    def test_every_kind_is_covered(self) -> None:
        kinds = {
            cls.kind
            for cls in (
                InvalidAmountError,
                InvalidRateError,
                InsufficientFundsError,
                AccountNotFoundError,
                DuplicateOwnerNameError,
                DuplicateOwnerIdError,
                InvalidIdError,
                WrongAccountTypeError,
                AlreadyRegisteredError,
                KeyNotRegisteredError,
            )
        }
        assert kinds == set(ErrorKind)
