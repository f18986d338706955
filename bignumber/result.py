"""Division result type."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bignumber.big_integer import BigInteger


@dataclass(frozen=True)
class DivisionResult:
    """Quotient and remainder of a truncated division.

    Both fields share the error state when the division failed (zero
    divisor or an error-state operand).

    Attributes:
        quotient: Quotient rounded toward zero
        remainder: Remainder with the dividend's sign, |remainder| < |divisor|

    Examples:
        result = BigInteger(7321).divmod(153)
        assert str(result.quotient) == "47"
        assert str(result.remainder) == "130"
    """

    quotient: BigInteger
    remainder: BigInteger

    @property
    def is_valid(self) -> bool:
        """True if the division succeeded."""
        return self.quotient.is_valid

    def __iter__(self) -> Iterator[BigInteger]:
        """Unpack as (quotient, remainder)."""
        yield self.quotient
        yield self.remainder
