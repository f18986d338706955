"""Arbitrary-precision signed integers.

This module provides BigInteger, an immutable integer of unbounded magnitude
stored as a sign and a vector of fixed-radix limbs. Every operation returns
a new value and leaves its operands untouched.

Failures are carried as data instead of exceptions:
- Malformed construction input yields a value in state INVALID_FORMAT
- Division or modulo by zero yields a value in state DIVISION_BY_ZERO
- Any arithmetic involving an error-state value yields the same error state

Usage pattern:
    from bignumber import BigInteger, create

    result = create("1970485694").add(1).multiply(153487288).divide(2)
    if not result.is_valid:
        ...  # result.state tells which error occurred
    str(result)          # decimal text, or the sentinel text for errors
    result.remainder     # remainder of the division that produced result
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import structlog

from bignumber import limbs as kernels
from bignumber.constants import DECIMAL_DIGITS, SIGN_TOKENS
from bignumber.errors import NumberState
from bignumber.limbs import Limbs
from bignumber.radix import DEFAULT_RADIX, Radix
from bignumber.result import DivisionResult
from bignumber.stats import notify

logger = structlog.get_logger()

IntegerInput = Union[int, str, Sequence[Union[int, str]], "BigInteger"]


def _digit_char(item: object) -> str | None:
    """Return item as a single ASCII digit character, or None if it is not one."""
    if isinstance(item, bool):
        return None
    if isinstance(item, int):
        return str(item) if 0 <= item <= 9 else None
    if isinstance(item, str) and len(item) == 1 and item in DECIMAL_DIGITS:
        return item
    return None


class BigInteger:
    """Signed integer of unbounded magnitude.

    Construct from a native int, a decimal string with an optional leading
    sign, a sequence of single digits with an optional leading "+"/"-" token,
    or another BigInteger (copied). Construction never raises for malformed
    text; it produces a value in state INVALID_FORMAT instead.

    Attributes:
        state: NumberState of the value
        radix: Radix the limbs are expressed in
    """

    __slots__ = ("_limbs", "_sign", "_state", "_radix", "_remainder")
    _limbs: Limbs
    _sign: int
    _state: NumberState
    _radix: Radix
    _remainder: BigInteger | None

    def __init__(self, value: IntegerInput = 0, radix: Radix | None = None) -> None:
        """Create a BigInteger.

        Args:
            value: Integer, decimal string, digit sequence or BigInteger
            radix: Limb radix (default: the process-wide DEFAULT_RADIX)

        Raises:
            TypeError: If value is not one of the accepted input types
        """
        self._radix = radix if radix is not None else DEFAULT_RADIX
        self._limbs = kernels.ZERO
        self._sign = 1
        self._state = NumberState.VALID
        self._remainder = None

        if isinstance(value, BigInteger):
            self._copy_from(value)
        elif isinstance(value, bool):
            raise TypeError("BigInteger requires int, str or digit sequence, got bool")
        elif isinstance(value, int):
            self._sign = -1 if value < 0 else 1
            self._limbs = kernels.from_native(abs(value), self._radix.base)
        elif isinstance(value, str):
            self._parse_text(value)
        elif isinstance(value, (list, tuple)):
            self._parse_digits(value)
        else:
            raise TypeError(
                f"BigInteger requires int, str or digit sequence, got {type(value).__name__}"
            )

        if self._state is NumberState.VALID and kernels.is_zero(self._limbs):
            self._sign = 1

    # --- Construction helpers ---

    @classmethod
    def _build(
        cls,
        limbs: Limbs,
        sign: int,
        radix: Radix,
        state: NumberState = NumberState.VALID,
        remainder: BigInteger | None = None,
    ) -> BigInteger:
        """Wrap an already canonical magnitude without parsing."""
        result = object.__new__(cls)
        result._limbs = limbs
        result._sign = 1 if kernels.is_zero(limbs) else sign
        result._state = state
        result._radix = radix
        result._remainder = remainder
        return result

    def _copy_from(self, other: BigInteger) -> None:
        self._state = other._state
        self._sign = other._sign
        self._limbs = kernels.rebase(other._limbs, other._radix.base, self._radix.base)

    def _parse_text(self, text: str) -> None:
        digits = text
        if digits[:1] in SIGN_TOKENS:
            self._sign = -1 if digits[0] == "-" else 1
            digits = digits[1:]

        if not digits:
            self._fail(text, "no digits")
            return
        for position, char in enumerate(digits):
            if char not in DECIMAL_DIGITS:
                self._fail(text, f"non-digit {char!r} at position {position}")
                return

        self._limbs = kernels.parse_decimal(digits, self._radix)

    def _parse_digits(self, items: Sequence[int | str]) -> None:
        start = 0
        if items and isinstance(items[0], str) and items[0] in SIGN_TOKENS:
            self._sign = -1 if items[0] == "-" else 1
            start = 1

        digits = []
        for position in range(start, len(items)):
            char = _digit_char(items[position])
            if char is None:
                self._fail(items, f"non-digit element {items[position]!r} at index {position}")
                return
            digits.append(char)

        if not digits:
            self._fail(items, "no digits")
            return

        self._limbs = kernels.parse_decimal("".join(digits), self._radix)

    def _fail(self, source: object, reason: str) -> None:
        logger.debug("big_integer_invalid_format", source=repr(source)[:64], reason=reason)
        self._state = NumberState.INVALID_FORMAT
        self._sign = 1
        self._limbs = kernels.ZERO

    def _errored(self, state: NumberState) -> BigInteger:
        return self._build(kernels.ZERO, 1, self._radix, state=state)

    def _zero(self) -> BigInteger:
        return self._build(kernels.ZERO, 1, self._radix)

    def _copy(self) -> BigInteger:
        return self._build(self._limbs, self._sign, self._radix, state=self._state)

    def _with_sign(self, sign: int) -> BigInteger:
        return self._build(self._limbs, sign, self._radix, state=self._state)

    def _coerce(self, other: IntegerInput) -> BigInteger:
        """Express an operand as a BigInteger in this value's radix."""
        if isinstance(other, BigInteger) and other._radix == self._radix:
            return other
        return BigInteger(other, radix=self._radix)

    def _first_error(self, other: BigInteger) -> BigInteger | None:
        """Error-state result for a binary operation, or None if both are valid.

        The receiver's error takes precedence over the operand's.
        """
        if self._state.is_error:
            return self._errored(self._state)
        if other._state.is_error:
            return self._errored(other._state)
        return None

    # --- State ---

    @property
    def state(self) -> NumberState:
        return self._state

    @property
    def is_valid(self) -> bool:
        """True if the value holds a number (not an error state)."""
        return self._state is NumberState.VALID

    @property
    def error(self) -> NumberState | None:
        """The error state, or None for valid values."""
        return self._state if self._state.is_error else None

    @property
    def radix(self) -> Radix:
        return self._radix

    def raise_for_state(self) -> None:
        """Raise the exception matching an error state; no-op when valid.

        Raises:
            InvalidNumberFormat: If state is INVALID_FORMAT
            DivisionByZero: If state is DIVISION_BY_ZERO
        """
        if self._state.is_error:
            raise self._state.to_exception()

    def unwrap(self) -> BigInteger:
        """Return self if valid, otherwise raise the matching exception."""
        self.raise_for_state()
        return self

    @property
    def sign(self) -> int:
        """+1 or -1; zero is always +1.

        Raises:
            BigIntegerError: If the value is in an error state
        """
        self.raise_for_state()
        return self._sign

    @property
    def limbs(self) -> Limbs:
        """Magnitude limbs, least significant first.

        Raises:
            BigIntegerError: If the value is in an error state
        """
        self.raise_for_state()
        return self._limbs

    @property
    def remainder(self) -> BigInteger:
        """Remainder of the division that produced this value (zero otherwise).

        An error-state value reports its own error state here.
        """
        if self._state.is_error:
            return self._errored(self._state)
        if self._remainder is None:
            return self._zero()
        return self._remainder

    def is_zero(self) -> bool:
        self.raise_for_state()
        return kernels.is_zero(self._limbs)

    def is_negative(self) -> bool:
        self.raise_for_state()
        return self._sign < 0

    # --- Comparison ---

    def compare(self, other: IntegerInput | None = None) -> int:
        """Three-way comparison.

        Args:
            other: Value to compare with; omitted compares to self

        Returns:
            -1 if self < other, 0 if equal, 1 if self > other

        Raises:
            BigIntegerError: If either value is in an error state
        """
        self.raise_for_state()
        if other is None:
            return 0

        operand = self._coerce(other)
        operand.raise_for_state()

        if self._sign != operand._sign:
            return self._sign
        return self._sign * kernels.compare_magnitudes(self._limbs, operand._limbs)

    def lt(self, other: IntegerInput | None = None) -> bool:
        return self.compare(other) < 0

    def lte(self, other: IntegerInput | None = None) -> bool:
        return self.compare(other) <= 0

    def equals(self, other: IntegerInput | None = None) -> bool:
        return self.compare(other) == 0

    def gte(self, other: IntegerInput | None = None) -> bool:
        return self.compare(other) >= 0

    def gt(self, other: IntegerInput | None = None) -> bool:
        return self.compare(other) > 0

    # --- Addition and subtraction ---

    def add(self, other: IntegerInput | None = None) -> BigInteger:
        """self + other.

        Operands of opposite sign are routed to subtract(): a positive
        receiver subtracts |other|, a negative receiver becomes
        ``other - |self|``.
        """
        if other is None:
            return self._copy()

        operand = self._coerce(other)
        errored = self._first_error(operand)
        if errored is not None:
            return errored

        if self._sign != operand._sign:
            if self._sign > 0:
                return self.subtract(operand.absolute_value())
            return operand.subtract(self.absolute_value())

        limbs, iterations = kernels.add_magnitudes(self._limbs, operand._limbs, self._radix.base)
        notify("add", iterations)
        return self._build(limbs, self._sign, self._radix)

    def subtract(self, other: IntegerInput | None = None) -> BigInteger:
        """self - other.

        Operands of opposite sign add their magnitudes and keep the
        receiver's sign. Otherwise the smaller magnitude is subtracted from
        the larger and the result is negative iff self < other.
        """
        if other is None:
            return self._copy()

        operand = self._coerce(other)
        errored = self._first_error(operand)
        if errored is not None:
            return errored

        base = self._radix.base
        if self._sign != operand._sign:
            limbs, iterations = kernels.add_magnitudes(self._limbs, operand._limbs, base)
            notify("subtract", iterations)
            return self._build(limbs, self._sign, self._radix)

        order = kernels.compare_magnitudes(self._limbs, operand._limbs)
        sign = -1 if self._sign * order < 0 else 1
        if order < 0:
            limbs, iterations = kernels.subtract_magnitudes(operand._limbs, self._limbs, base)
        else:
            limbs, iterations = kernels.subtract_magnitudes(self._limbs, operand._limbs, base)
        notify("subtract", iterations)
        return self._build(limbs, sign, self._radix)

    # --- Multiplication ---

    def multiply(self, other: IntegerInput | None = None) -> BigInteger:
        """self * other. A zero operand short-circuits to zero."""
        if other is None:
            return self._copy()

        operand = self._coerce(other)
        errored = self._first_error(operand)
        if errored is not None:
            return errored

        if kernels.is_zero(self._limbs) or kernels.is_zero(operand._limbs):
            return self._zero()

        limbs, iterations = kernels.multiply_magnitudes(
            self._limbs, operand._limbs, self._radix.base
        )
        notify("multiply", iterations)
        return self._build(limbs, self._sign * operand._sign, self._radix)

    # --- Division ---

    def _divide(self, other: IntegerInput) -> tuple[BigInteger, BigInteger]:
        """Truncated division returning (quotient, remainder).

        The remainder carries the dividend's sign. Divisors below the limb
        base use native arithmetic; wider divisors use long division over
        the prime factors of the base.
        """
        operand = self._coerce(other)
        errored = self._first_error(operand)
        if errored is not None:
            return errored, errored

        if kernels.is_zero(operand._limbs):
            logger.debug("big_integer_division_by_zero", dividend_limbs=len(self._limbs))
            errored = self._errored(NumberState.DIVISION_BY_ZERO)
            return errored, errored
        if kernels.is_zero(self._limbs):
            return self._zero(), self._zero()

        base = self._radix.base
        sign = self._sign * operand._sign

        if operand._limbs == kernels.ONE:
            quotient_limbs, rest_limbs, iterations = self._limbs, kernels.ZERO, 0
        elif len(operand._limbs) == 1:
            quotient_limbs, rest, iterations = kernels.divmod_small(
                self._limbs, operand._limbs[0], base
            )
            rest_limbs = kernels.from_native(rest, base)
        else:
            quotient_limbs, rest_limbs, iterations = kernels.divmod_long(
                self._limbs, operand._limbs, self._radix
            )
        notify("divide", iterations)

        remainder = self._build(rest_limbs, self._sign, self._radix)
        quotient = self._build(quotient_limbs, sign, self._radix, remainder=remainder)
        return quotient, remainder

    def divide(self, other: IntegerInput | None = None) -> BigInteger:
        """Quotient of self / other, truncated toward zero.

        The remainder is available as ``.remainder`` on the returned value.
        Division by zero returns a DIVISION_BY_ZERO value.
        """
        if other is None:
            return self._copy()
        quotient, _ = self._divide(other)
        return quotient

    def divmod(self, other: IntegerInput) -> DivisionResult:
        """Quotient and remainder of truncated division."""
        quotient, remainder = self._divide(other)
        return DivisionResult(quotient=quotient, remainder=remainder)

    def modulo(self, other: IntegerInput | None = None) -> BigInteger:
        """Remainder of truncated division (sign of the dividend)."""
        if other is None:
            return self._errored(self._state) if self._state.is_error else self._zero()
        _, remainder = self._divide(other)
        return remainder

    # --- Exponentiation ---

    def power(self, exponent: int | BigInteger) -> BigInteger:
        """self ** exponent by square-and-multiply.

        Args:
            exponent: Non-negative native integer (a BigInteger is converted
                once at entry; an error-state exponent yields its error state)

        Raises:
            TypeError: If exponent is not an int or BigInteger
            ValueError: If exponent is negative
        """
        if isinstance(exponent, BigInteger):
            errored = self._first_error(exponent)
            if errored is not None:
                return errored
            exponent = int(exponent)
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"Exponent must be int, got {type(exponent).__name__}")
        if exponent < 0:
            raise ValueError(f"Exponent must be non-negative, got {exponent}")

        if self._state.is_error:
            return self._errored(self._state)
        if exponent == 0:
            return self._build(kernels.ONE, 1, self._radix)
        if exponent == 1:
            return self._copy()

        accumulator = self._build(kernels.ONE, 1, self._radix)
        squared = self
        remaining = exponent
        iterations = 0
        while remaining > 0:
            iterations += 1
            if remaining % 2 == 1:
                accumulator = accumulator.multiply(squared)
                remaining -= 1
                continue
            squared = squared.multiply(squared)
            remaining //= 2

        notify("power", iterations)
        return accumulator

    # --- Sign manipulation ---

    def absolute_value(self) -> BigInteger:
        return self._with_sign(1)

    def negate(self) -> BigInteger:
        if self._state.is_error:
            return self._errored(self._state)
        return self._with_sign(-self._sign)

    # --- Conversion ---

    def to_decimal_string(self) -> str:
        """Decimal text; error states render their sentinel text."""
        if self._state.is_error:
            return self._state.value

        digits = kernels.format_decimal(self._limbs, self._radix)
        return "-" + digits if self._sign < 0 else digits

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        if self._state.is_error:
            return f"BigInteger(<{self._state.name}>)"
        return f"BigInteger({self.to_decimal_string()})"

    def __int__(self) -> int:
        """Convert to a native int.

        Raises:
            BigIntegerError: If the value is in an error state
        """
        self.raise_for_state()
        return self._sign * kernels.to_native(self._limbs, self._radix.base)

    def __index__(self) -> int:
        return self.__int__()

    def __bool__(self) -> bool:
        """True if non-zero."""
        return not self.is_zero()

    def __hash__(self) -> int:
        if self._state.is_error:
            return hash(self._state)
        return hash(int(self))

    # --- Operators ---
    # Operators accept BigInteger and int operands. // and % use truncated
    # division like divide() and modulo(), not Python's floor division.

    def __eq__(self, other: object) -> bool:
        if isinstance(other, bool) or not isinstance(other, (BigInteger, int)):
            return NotImplemented
        operand = self._coerce(other)
        if self._state.is_error or operand._state.is_error:
            return self._state is operand._state
        return self.compare(operand) == 0

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: BigInteger | int) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: BigInteger | int) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: BigInteger | int) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: BigInteger | int) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) >= 0

    def __add__(self, other: BigInteger | int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).add(self)

    def __sub__(self, other: BigInteger | int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).subtract(self)

    def __mul__(self, other: BigInteger | int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).multiply(self)

    def __floordiv__(self, other: BigInteger | int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self.divide(other)

    def __rfloordiv__(self, other: int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).divide(self)

    def __mod__(self, other: BigInteger | int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self.modulo(other)

    def __rmod__(self, other: int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).modulo(self)

    def __divmod__(self, other: BigInteger | int) -> tuple[BigInteger, BigInteger]:
        if not _is_operand(other):
            return NotImplemented
        return self._divide(other)

    def __rdivmod__(self, other: int) -> tuple[BigInteger, BigInteger]:
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other)._divide(self)

    def __truediv__(self, other: object) -> BigInteger:
        raise TypeError("BigInteger does not support true division; use // (truncated)")

    def __rtruediv__(self, other: object) -> BigInteger:
        raise TypeError("BigInteger does not support true division; use // (truncated)")

    def __pow__(self, exponent: BigInteger | int, modulus: None = None) -> BigInteger:
        if modulus is not None:
            raise TypeError("BigInteger does not support modular pow()")
        if not _is_operand(exponent):
            return NotImplemented
        return self.power(exponent)

    def __rpow__(self, other: int) -> BigInteger:
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).power(self)

    def __neg__(self) -> BigInteger:
        return self.negate()

    def __pos__(self) -> BigInteger:
        return self

    def __abs__(self) -> BigInteger:
        return self.absolute_value()

    # --- Fluent aliases ---

    plus = add
    minus = subtract
    mult = multiply
    div = divide
    mod = modulo
    pow = power
    abs = absolute_value
    val = to_decimal_string
    le = lte
    ge = gte


def _is_operand(value: object) -> bool:
    return isinstance(value, BigInteger) or (
        isinstance(value, int) and not isinstance(value, bool)
    )


def create(value: IntegerInput = 0, radix: Radix | None = None) -> BigInteger:
    """Create a BigInteger (same as calling the constructor)."""
    return BigInteger(value, radix=radix)


def absolute(value: IntegerInput, radix: Radix | None = None) -> BigInteger:
    """Absolute value of any accepted BigInteger input."""
    return BigInteger(value, radix=radix).absolute_value()
