"""Input validators shared by the services."""

import re

# Ids, balances and amounts are stored as signed 64-bit integers
INT64_MAX = 2**63 - 1

CPF_REGEX = re.compile(r"\d{3}\.\d{3}\.\d{3}-\d{2}", re.ASCII)


def _verifying_digit(digits: str, first_weight: int) -> int:
    total = sum(int(d) * weight for weight, d in enumerate(digits, start=first_weight))
    remainder = total % 11
    return 0 if remainder == 10 else remainder


def validate_cpf(cpf: str) -> None:
    """
    Validate a formatted CPF (``ddd.ddd.ddd-dd``).

    Raises:
        ValueError: if the format or either check digit is wrong.
    """
    if not CPF_REGEX.fullmatch(cpf):
        raise ValueError("invalid CPF format")

    digits = cpf.replace(".", "").replace("-", "")

    if _verifying_digit(digits[:9], 1) != int(digits[9]):
        raise ValueError("invalid CPF")
    if _verifying_digit(digits[:10], 0) != int(digits[10]):
        raise ValueError("invalid CPF")


def is_positive_int64(value) -> bool:
    """True for an int (not bool) in ``1..INT64_MAX``."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 1 <= value <= INT64_MAX
    )
