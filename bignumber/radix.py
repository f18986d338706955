"""Limb radix configuration.

A Radix fixes the base every limb of a magnitude is expressed in. The base is
bounded by the native exact-integer precision: a limb product plus the
accumulated limb and carry (at most ``BASE * BASE - 1``) must not exceed
``MAX_EXACT_INTEGER``.

The long-division kernel consumes each dividend limb one prime factor of the
base at a time, so the factorization is computed once per base and memoized
for the whole process.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

import structlog

from bignumber.constants import LIMB_BASE_ENV_VAR, MAX_EXACT_INTEGER

logger = structlog.get_logger()


@lru_cache(maxsize=None)
def prime_factors(n: int) -> tuple[int, ...]:
    """Prime factorization of n in ascending order, with multiplicity.

    Args:
        n: Integer >= 2

    Returns:
        Tuple of prime factors whose product is n

    Raises:
        ValueError: If n < 2

    Examples:
        prime_factors(2**3) == (2, 2, 2)
        prime_factors(10**2) == (2, 2, 5, 5)
    """
    if n < 2:
        raise ValueError(f"Cannot factor {n}: must be >= 2")

    factors: list[int] = []
    candidate = 2
    while candidate * candidate <= n:
        while n % candidate == 0:
            factors.append(candidate)
            n //= candidate
        candidate += 1 if candidate == 2 else 2
    if n > 1:
        factors.append(n)
    return tuple(factors)


def _largest_safe_power(factor: int) -> int:
    """Largest power of factor whose square minus one fits MAX_EXACT_INTEGER."""
    base = factor
    while (base * factor) * (base * factor) - 1 <= MAX_EXACT_INTEGER:
        base *= factor
    return base


@dataclass(frozen=True)
class Radix:
    """Base of the limb representation.

    Attributes:
        base: Limb radix; every limb lies in [0, base)
    """

    base: int

    def __post_init__(self) -> None:
        if isinstance(self.base, bool) or not isinstance(self.base, int):
            raise TypeError(f"Radix base must be int, got {type(self.base).__name__}")
        if self.base < 2:
            raise ValueError(f"Radix base must be >= 2, got {self.base}")
        if self.base * self.base - 1 > MAX_EXACT_INTEGER:
            raise ValueError(
                f"Radix base {self.base} is unsafe: base^2 - 1 exceeds {MAX_EXACT_INTEGER}"
            )

    @property
    def factors(self) -> tuple[int, ...]:
        """Prime factorization of the base (memoized per base)."""
        return prime_factors(self.base)

    @property
    def is_decimal(self) -> bool:
        """True if the base is a power of ten (limbs map to digit groups)."""
        base = self.base
        while base % 10 == 0:
            base //= 10
        return base == 1

    @property
    def decimal_digits(self) -> int:
        """Number of decimal digits in the largest power of ten below the base.

        For a decimal base this is exactly the digit count of one limb. Bases
        below ten still use single digits.
        """
        if self.is_decimal:
            return len(str(self.base)) - 1
        digits = 1
        while 10 ** (digits + 1) < self.base:
            digits += 1
        return digits

    @property
    def decimal_chunk(self) -> int:
        """10 ** decimal_digits, the divisor used when rendering decimal text."""
        return 10**self.decimal_digits

    @classmethod
    def binary(cls) -> Radix:
        """Largest safe power of two (2**26 for a 53-bit mantissa)."""
        return cls(_largest_safe_power(2))

    @classmethod
    def decimal(cls) -> Radix:
        """Largest safe power of ten (10**7 for a 53-bit mantissa)."""
        return cls(_largest_safe_power(10))


def radix_from_env() -> Radix:
    """Build the process default radix.

    Configuration via environment variables:
    - BIGNUMBER_LIMB_BASE: Limb base to use (default: largest safe power of two)

    Invalid values are logged and the binary default is used instead.
    """
    raw = os.environ.get(LIMB_BASE_ENV_VAR)
    if raw is None:
        return Radix.binary()

    try:
        return Radix(int(raw))
    except (TypeError, ValueError) as err:
        logger.warning(
            "invalid_limb_base_env",
            env_var=LIMB_BASE_ENV_VAR,
            value=raw,
            error=str(err),
        )
        return Radix.binary()


# Process-wide default radix, fixed at import time
DEFAULT_RADIX = radix_from_env()
