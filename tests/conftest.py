"""Pytest configuration and fixtures."""

import random

import pytest

from pix_bank.config import OverdraftConfig
from pix_bank.store.ledger import LedgerService

# Valid CPFs; the last two use the "remainder above 9 becomes 0" rule
CPF_ANA = "52998224725"
CPF_BRUNO = "11144477735"
CPF_CARLA = "39053344705"
CPF_DIEGO = "12345678909"


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def service(seed: int) -> LedgerService:
    """Fresh ledger whose special accounts always get a 300 overdraft."""
    return LedgerService(
        overdraft=OverdraftConfig(minimum=300, maximum=301),
        rng=random.Random(seed),
    )


@pytest.fixture
def cpf_ana() -> str:
    return CPF_ANA


@pytest.fixture
def cpf_bruno() -> str:
    return CPF_BRUNO


@pytest.fixture
def cpf_carla() -> str:
    return CPF_CARLA


@pytest.fixture
def cpf_diego() -> str:
    return CPF_DIEGO
