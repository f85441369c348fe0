"""Sample data generators."""

from pix_bank.generators.customer import (
    CustomerGenerator,
    SampleCustomer,
    generate_cpf,
    populate,
)

__all__ = ["CustomerGenerator", "SampleCustomer", "generate_cpf", "populate"]
