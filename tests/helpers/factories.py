"""Factory functions and reference arithmetic for tests."""

from bignumber import BigInteger, Radix


def make(value: int | str, radix: Radix | None = None) -> BigInteger:
    """Create a BigInteger, asserting it is valid."""
    result = BigInteger(value, radix=radix)
    assert result.is_valid, f"{value!r} did not construct a valid BigInteger"
    return result


def truncated_divmod(a: int, b: int) -> tuple[int, int]:
    """Native divmod rounded toward zero (Python's divmod floors).

    Examples:
        truncated_divmod(-17, 3) == (-5, -2)
        divmod(-17, 3) == (-6, 1)
    """
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - quotient * b
