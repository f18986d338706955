"""Magnitude kernels on limb sequences.

A magnitude is a tuple of limbs, least significant first, each limb in
[0, base). Canonical magnitudes have no most-significant zero limbs; zero is
exactly ``(0,)``. Every kernel takes canonical magnitudes and returns a
canonical magnitude together with the number of inner-loop iterations it
performed (reported to the operation observer by the caller).

Signs are handled by BigInteger; nothing here knows about them.
"""

from __future__ import annotations

from collections.abc import Sequence

from bignumber.radix import Radix

Limbs = tuple[int, ...]

ZERO: Limbs = (0,)
ONE: Limbs = (1,)


def normalize(limbs: Sequence[int]) -> Limbs:
    """Trim most-significant zero limbs, keeping a single zero limb for zero."""
    end = len(limbs)
    while end > 1 and limbs[end - 1] == 0:
        end -= 1
    if end == 0:
        return ZERO
    return tuple(limbs[:end])


def is_zero(limbs: Limbs) -> bool:
    return len(limbs) == 1 and limbs[0] == 0


def from_native(value: int, base: int) -> Limbs:
    """Split a non-negative native integer into limbs.

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"Magnitude cannot be negative: {value}")
    if value == 0:
        return ZERO

    limbs = []
    while value:
        limbs.append(value % base)
        value //= base
    return tuple(limbs)


def to_native(limbs: Limbs, base: int) -> int:
    """Recombine limbs into a native integer."""
    value = 0
    for limb in reversed(limbs):
        value = value * base + limb
    return value


def compare_magnitudes(a: Limbs, b: Limbs) -> int:
    """Compare two canonical magnitudes.

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b
    """
    if len(a) != len(b):
        return 1 if len(a) > len(b) else -1

    for index in range(len(a) - 1, -1, -1):
        if a[index] != b[index]:
            return 1 if a[index] > b[index] else -1
    return 0


def add_magnitudes(a: Limbs, b: Limbs, base: int) -> tuple[Limbs, int]:
    """a + b with carry propagation."""
    result = []
    carry = 0
    length = max(len(a), len(b))
    index = 0

    while index < length or carry:
        total = carry
        if index < len(a):
            total += a[index]
        if index < len(b):
            total += b[index]
        result.append(total % base)
        carry = total // base
        index += 1

    return normalize(result), index


def subtract_magnitudes(a: Limbs, b: Limbs, base: int) -> tuple[Limbs, int]:
    """a - b with borrow propagation.

    Requires a >= b; the caller orders the operands.
    """
    result = []
    borrow = 0

    for index in range(len(a)):
        diff = a[index] - borrow
        if index < len(b):
            diff -= b[index]
        if diff < 0:
            diff += base
            borrow = 1
        else:
            borrow = 0
        result.append(diff)

    return normalize(result), len(a)


def multiply_magnitudes(a: Limbs, b: Limbs, base: int) -> tuple[Limbs, int]:
    """Schoolbook product.

    For each limb of a, the carry runs along b and spills into the next free
    position. Each step computes at most
    ``(base - 1) + (base - 1) ** 2 + (base - 1) == base ** 2 - 1``.
    """
    if is_zero(a) or is_zero(b):
        return ZERO, 0

    result = [0] * (len(a) + len(b))
    iterations = 0

    for i, a_limb in enumerate(a):
        carry = 0
        j = 0
        while j < len(b) or carry:
            total = result[i + j] + carry
            if j < len(b):
                total += a_limb * b[j]
            result[i + j] = total % base
            carry = total // base
            j += 1
            iterations += 1

    return normalize(result), iterations


def divmod_small(a: Limbs, divisor: int, base: int) -> tuple[Limbs, int, int]:
    """Divide by a native divisor in [1, base).

    The running remainder stays below divisor, so ``rest * base + limb`` never
    exceeds ``base ** 2 - 1``.

    Returns:
        (quotient limbs, native remainder, iterations)
    """
    result = [0] * len(a)
    rest = 0

    for index in range(len(a) - 1, -1, -1):
        rest = rest * base + a[index]
        quotient_limb = rest // divisor
        result[index] = quotient_limb
        rest -= quotient_limb * divisor

    return normalize(result), rest, len(a)


def divmod_long(a: Limbs, b: Limbs, radix: Radix) -> tuple[Limbs, Limbs, int]:
    """Long division by a multi-limb divisor.

    Each dividend limb is consumed as a mixed-radix number over the prime
    factors of the base: for factor f the running remainder is scaled by f,
    the next sub-digit is added, and the divisor is subtracted while it fits.
    Because the remainder is below the divisor before scaling, each sub-digit
    takes at most ``f - 1`` subtractions instead of up to ``base - 1``.

    Returns:
        (quotient limbs, remainder limbs, subtraction count)
    """
    base = radix.base
    result = [0] * len(a)
    rest = ZERO
    iterations = 0

    for index in range(len(a) - 1, -1, -1):
        digit = a[index]
        quotient_limb = 0
        sub_base = base

        for factor in radix.factors:
            sub_base //= factor
            rest, _ = multiply_magnitudes(rest, from_native(factor, base), base)
            rest, _ = add_magnitudes(rest, from_native(digit // sub_base, base), base)
            digit %= sub_base

            while compare_magnitudes(b, rest) <= 0:
                quotient_limb += sub_base
                rest, _ = subtract_magnitudes(rest, b, base)
                iterations += 1

        result[index] = quotient_limb

    return normalize(result), rest, iterations


def rebase(limbs: Limbs, from_base: int, to_base: int) -> Limbs:
    """Re-express a magnitude in another base (Horner's scheme)."""
    if from_base == to_base:
        return limbs

    scale = from_native(from_base, to_base)
    result = ZERO
    for limb in reversed(limbs):
        result, _ = multiply_magnitudes(result, scale, to_base)
        result, _ = add_magnitudes(result, from_native(limb, to_base), to_base)
    return result


def parse_decimal(digits: str, radix: Radix) -> Limbs:
    """Build a magnitude from a non-empty run of ASCII decimal digits.

    With a decimal base every limb is one fixed-width digit group. Otherwise
    digits are consumed most significant first, ``decimal_digits`` at a time:
    ``acc = acc * 10**k + chunk``.
    """
    base = radix.base
    width = radix.decimal_digits

    if radix.is_decimal:
        limbs = [
            int(digits[max(end - width, 0) : end])
            for end in range(len(digits), 0, -width)
        ]
        return normalize(limbs)

    result = ZERO
    head = len(digits) % width or width
    start = 0
    end = head
    while start < len(digits):
        chunk = digits[start:end]
        scale = from_native(10 ** len(chunk), base)
        result, _ = multiply_magnitudes(result, scale, base)
        result, _ = add_magnitudes(result, from_native(int(chunk), base), base)
        start, end = end, end + width
    return result


def format_decimal(limbs: Limbs, radix: Radix) -> str:
    """Render a magnitude as decimal digits without sign or leading zeros.

    A decimal base expands each limb into its digit group directly. Any other
    base divides repeatedly by ``decimal_chunk``; each remainder yields one
    zero-padded group of digits.
    """
    width = radix.decimal_digits

    if radix.is_decimal:
        groups = [str(limbs[-1])]
        groups.extend(str(limb).zfill(width) for limb in reversed(limbs[:-1]))
        return "".join(groups)

    chunk = radix.decimal_chunk
    groups = []
    while True:
        if chunk < radix.base:
            limbs, rest, _ = divmod_small(limbs, chunk, radix.base)
        else:
            limbs, rest_limbs, _ = divmod_long(limbs, from_native(chunk, radix.base), radix)
            rest = to_native(rest_limbs, radix.base)
        if is_zero(limbs):
            groups.append(str(rest))
            break
        groups.append(str(rest).zfill(width))
    return "".join(reversed(groups))
