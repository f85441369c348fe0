"""Tests for the Pix key registry and transfer protocol."""

from decimal import Decimal

import pytest

from pix_bank.exceptions import (
    AlreadyRegisteredError,
    InsufficientFundsError,
    InvalidAmountError,
    KeyNotRegisteredError,
)
from pix_bank.models import CheckingAccount, SpecialAccount, TransactionKind
from pix_bank.pix import PixKeyRegistry, transfer


@pytest.fixture
def registry() -> PixKeyRegistry:
    return PixKeyRegistry()


@pytest.fixture
def sender(cpf_ana: str) -> CheckingAccount:
    return CheckingAccount(1, "Ana", cpf_ana, Decimal("100"))


@pytest.fixture
def recipient(cpf_bruno: str) -> CheckingAccount:
    return CheckingAccount(2, "Bruno", cpf_bruno)


class TestPixKeyRegistry:
    """Tests for PixKeyRegistry."""

    def test_register_key(self, registry: PixKeyRegistry, sender: CheckingAccount) -> None:
        sender.register_pix_key(registry)

        assert sender.owner_id in registry
        assert len(registry) == 1

    def test_register_twice_fails(self, registry: PixKeyRegistry, sender: CheckingAccount) -> None:
        sender.register_pix_key(registry)

        with pytest.raises(AlreadyRegisteredError):
            sender.register_pix_key(registry)
        assert len(registry) == 1

    def test_iteration_is_sorted(self) -> None:
        registry = PixKeyRegistry.from_keys(["3", "1", "2"])
        assert list(registry) == ["1", "2", "3"]


class TestTransfer:
    """Tests for transfer()."""

    def _register(self, registry: PixKeyRegistry, *accounts: CheckingAccount) -> None:
        for account in accounts:
            account.register_pix_key(registry)

    def test_transfer_moves_money(
        self, registry: PixKeyRegistry, sender: CheckingAccount, recipient: CheckingAccount
    ) -> None:
        self._register(registry, sender, recipient)

        receipt = transfer(registry, sender, recipient, Decimal("30"))

        assert sender.balance == Decimal("70")
        assert recipient.balance == Decimal("30")
        assert receipt.debit.kind is TransactionKind.PIX_OUT
        assert receipt.credit.kind is TransactionKind.PIX_IN
        assert sender.transactions == [receipt.debit]
        assert recipient.transactions == [receipt.credit]
        assert receipt.debit.balance_after == Decimal("70")
        assert receipt.credit.balance_after == Decimal("30")

    def test_insufficient_funds_changes_nothing(
        self, registry: PixKeyRegistry, sender: CheckingAccount, recipient: CheckingAccount
    ) -> None:
        self._register(registry, sender, recipient)

        with pytest.raises(InsufficientFundsError):
            transfer(registry, sender, recipient, Decimal("150"))

        assert (sender.balance, recipient.balance) == (Decimal("100"), Decimal("0"))
        assert sender.transactions == []
        assert recipient.transactions == []

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_invalid_amount(
        self,
        registry: PixKeyRegistry,
        sender: CheckingAccount,
        recipient: CheckingAccount,
        amount: str,
    ) -> None:
        self._register(registry, sender, recipient)
        with pytest.raises(InvalidAmountError):
            transfer(registry, sender, recipient, Decimal(amount))

    def test_amount_checked_before_keys(
        self, registry: PixKeyRegistry, sender: CheckingAccount, recipient: CheckingAccount
    ) -> None:
        with pytest.raises(InvalidAmountError):
            transfer(registry, sender, recipient, Decimal("0"))

    def test_sender_not_registered(
        self, registry: PixKeyRegistry, sender: CheckingAccount, recipient: CheckingAccount
    ) -> None:
        self._register(registry, recipient)
        with pytest.raises(KeyNotRegisteredError, match="sender"):
            transfer(registry, sender, recipient, Decimal("10"))
        assert recipient.balance == Decimal("0")

    def test_recipient_not_registered(
        self, registry: PixKeyRegistry, sender: CheckingAccount, recipient: CheckingAccount
    ) -> None:
        self._register(registry, sender)
        with pytest.raises(KeyNotRegisteredError, match="recipient"):
            transfer(registry, sender, recipient, Decimal("10"))
        assert sender.balance == Decimal("100")

    def test_special_sender_uses_overdraft(
        self, registry: PixKeyRegistry, recipient: CheckingAccount, cpf_carla: str
    ) -> None:
        special = SpecialAccount(3, "Carla", cpf_carla, Decimal("50"), overdraft_limit=Decimal("300"))
        self._register(registry, special, recipient)

        transfer(registry, special, recipient, Decimal("200"))

        assert special.balance == Decimal("150")
        assert special.overdraft_limit == Decimal("0")
        assert recipient.balance == Decimal("200")

    def test_special_sender_beyond_limit(
        self, registry: PixKeyRegistry, recipient: CheckingAccount, cpf_carla: str
    ) -> None:
        special = SpecialAccount(3, "Carla", cpf_carla, Decimal("50"), overdraft_limit=Decimal("300"))
        self._register(registry, special, recipient)

        with pytest.raises(InsufficientFundsError):
            transfer(registry, special, recipient, Decimal("351"))
        assert special.overdraft_limit == Decimal("300")
        assert recipient.balance == Decimal("0")
