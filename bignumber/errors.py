"""Error states and exceptions for BigInteger values.

Errors are carried as data: an operation that fails produces a value whose
``state`` is not VALID, and every operation involving that value reports the
same state. The exception classes exist for callers that prefer to fail fast
(``BigInteger.unwrap()``) and for reads that cannot carry an error as data.
"""

from __future__ import annotations

from enum import Enum

from bignumber.constants import DIVISION_BY_ZERO_TEXT, INVALID_NUMBER_TEXT


class BigIntegerError(ArithmeticError):
    """Base class for BigInteger error states surfaced as exceptions."""

    pass


class InvalidNumberFormat(BigIntegerError, ValueError):
    """The value was built from malformed input."""

    pass


class DivisionByZero(BigIntegerError, ZeroDivisionError):
    """The value is the result of a division or modulo by zero."""

    pass


class NumberState(Enum):
    """State of a BigInteger value.

    The enum values are the fixed texts error-state values render as.
    """

    VALID = "valid"
    INVALID_FORMAT = INVALID_NUMBER_TEXT
    DIVISION_BY_ZERO = DIVISION_BY_ZERO_TEXT

    @property
    def is_error(self) -> bool:
        """True for the two terminal error states."""
        return self is not NumberState.VALID

    @property
    def exception_class(self) -> type[BigIntegerError] | None:
        """Exception type matching this state, or None for VALID."""
        return _EXCEPTIONS.get(self)

    def to_exception(self, detail: str | None = None) -> BigIntegerError:
        """Build the exception for an error state.

        Raises:
            ValueError: If called on VALID
        """
        exc_class = self.exception_class
        if exc_class is None:
            raise ValueError("VALID state has no exception")
        message = self.value if detail is None else f"{self.value}: {detail}"
        return exc_class(message)


_EXCEPTIONS: dict[NumberState, type[BigIntegerError]] = {
    NumberState.INVALID_FORMAT: InvalidNumberFormat,
    NumberState.DIVISION_BY_ZERO: DivisionByZero,
}
