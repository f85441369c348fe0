"""CPF (Brazilian national identifier) checksum helpers."""

# Weight table for the second check digit; the first digit uses its tail.
CPF_WEIGHTS = (11, 10, 9, 8, 7, 6, 5, 4, 3, 2)


def _check_digit(digits: str) -> int:
    """Compute one check digit for a 9- or 10-digit prefix."""
    offset = len(CPF_WEIGHTS) - len(digits)
    total = sum(int(d) * w for d, w in zip(digits, CPF_WEIGHTS[offset:]))
    digit = 11 - (total % 11)
    return 0 if digit > 9 else digit


def check_digits(base: str) -> str:
    """Return the two check digits for a 9-digit CPF base.

    Parameters
    ----------
    base : str
        First nine digits of the CPF.

    Returns
    -------
    str
        The two trailing check digits.
    """
    if len(base) != 9 or not base.isdigit():
        raise ValueError(f"CPF base must be 9 digits, got {base!r}")
    first = _check_digit(base)
    second = _check_digit(base + str(first))
    return f"{first}{second}"


def normalize_cpf(value: str) -> str:
    """Strip the punctuation of a formatted CPF (XXX.XXX.XXX-XX)."""
    return value.strip().replace(".", "").replace("-", "")


def is_valid_cpf(value: str) -> bool:
    """Check whether ``value`` is a valid unformatted CPF.

    A valid CPF has exactly 11 ASCII digits, is not a single digit repeated,
    and ends with the two check digits computed from its first nine.
    """
    if not isinstance(value, str) or len(value) != 11:
        return False
    if not (value.isascii() and value.isdigit()):
        return False
    if value == value[0] * 11:
        return False

    base = value[:9]
    return value == base + check_digits(base)


def format_cpf(value: str) -> str:
    """Format an 11-digit CPF as XXX.XXX.XXX-XX."""
    return f"{value[:3]}.{value[3:6]}.{value[6:9]}-{value[9:]}"
