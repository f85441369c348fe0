"""Sample customers for demos and manual testing."""

from __future__ import annotations

import random
from dataclasses import dataclass
from decimal import Decimal
from itertools import cycle
from typing import Iterator

from pix_bank.cpf import check_digits
from pix_bank.generators.base import BaseGenerator
from pix_bank.logging import get_logger
from pix_bank.models import AccountKind, PixCapable
from pix_bank.store.ledger import LedgerService

logger = get_logger(__name__)


def generate_cpf(rng: random.Random | None = None) -> str:
    """Generate a valid unformatted CPF (11 digits) using pure arithmetic."""
    rng = rng or random.Random()
    while True:
        base = "".join(str(rng.randint(0, 9)) for _ in range(9))
        cpf = base + check_digits(base)
        # Repeated-digit CPFs pass the checksum but are rejected as invalid
        if cpf != cpf[0] * 11:
            return cpf


@dataclass(frozen=True)
class SampleCustomer:
    """A would-be account owner."""

    name: str
    cpf: str
    initial_balance: Decimal


class CustomerGenerator(BaseGenerator):
    """Generate synthetic customers with unique names and CPFs."""

    # Opening balance range in BRL
    BALANCE_RANGE = (0, 5000)

    def __init__(self, seed: int | None = None, locale: str = "pt_BR") -> None:
        super().__init__(seed=seed, locale=locale)
        self._names: set[str] = set()
        self._cpfs: set[str] = set()

    def generate(self) -> SampleCustomer:
        """Generate a single customer.

        Returns
        -------
        SampleCustomer
            Customer whose name and CPF differ from every earlier one.
        """
        name = self.fake.name()
        while name in self._names:
            name = self.fake.name()
        cpf = generate_cpf(self.rng)
        while cpf in self._cpfs:
            cpf = generate_cpf(self.rng)
        self._names.add(name)
        self._cpfs.add(cpf)

        low, high = self.BALANCE_RANGE
        cents = self.rng.randint(low * 100, high * 100)
        return SampleCustomer(name=name, cpf=cpf, initial_balance=Decimal(cents) / 100)

    def generate_batch(self, count: int) -> Iterator[SampleCustomer]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        SampleCustomer
            Generated customers.
        """
        for _ in range(count):
            yield self.generate()


def populate(service: LedgerService, generator: CustomerGenerator, count: int) -> int:
    """Open ``count`` sample accounts, cycling through the account kinds.

    Pix-capable accounts get their key registered. Customers that clash
    with an existing owner are skipped.

    Returns
    -------
    int
        Number of accounts opened.
    """
    opened = 0
    kinds = cycle(AccountKind)
    for customer in generator.generate_batch(count):
        result = service.create_account(
            next(kinds), customer.name, customer.cpf, customer.initial_balance
        )
        if not result.ok:
            logger.debug("Skipped sample customer %s: %s", customer.name, result.message)
            continue
        opened += 1
        if isinstance(result.value, PixCapable):
            service.register_pix_key(customer.cpf)
    logger.info("Populated %d sample account(s)", opened)
    return opened
