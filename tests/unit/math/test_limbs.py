"""Tests for the magnitude kernels."""

import pytest

from bignumber import limbs
from bignumber.radix import Radix

BASE = 10


def digits(value: int, base: int = BASE) -> tuple[int, ...]:
    """Limbs of a native value (least significant first)."""
    return limbs.from_native(value, base)


class TestNormalize:
    """Tests for canonical form."""

    def test_trims_leading_zero_limbs(self):
        """Most-significant zero limbs are dropped."""
        assert limbs.normalize([3, 2, 0, 0]) == (3, 2)

    def test_zero_keeps_single_limb(self):
        """Zero is exactly one zero limb."""
        assert limbs.normalize([0, 0, 0]) == (0,)

    def test_empty_becomes_zero(self):
        """An empty sequence normalizes to zero, never empty."""
        assert limbs.normalize([]) == (0,)

    def test_inner_zeros_kept(self):
        """Zeros below the top limb are significant."""
        assert limbs.normalize([0, 0, 1]) == (0, 0, 1)


class TestNativeConversion:
    """Tests for from_native/to_native."""

    def test_from_native(self):
        """Least significant limb first."""
        assert limbs.from_native(517, 10) == (7, 1, 5)
        assert limbs.from_native(0, 10) == (0,)

    def test_round_trip_large(self):
        """Large values survive splitting and recombining."""
        value = 3**200
        base = 2**26
        assert limbs.to_native(limbs.from_native(value, base), base) == value

    def test_negative_raises(self):
        """Magnitudes are non-negative."""
        with pytest.raises(ValueError):
            limbs.from_native(-1, 10)


class TestCompareMagnitudes:
    """Tests for magnitude ordering."""

    def test_longer_wins(self):
        """More limbs means larger."""
        assert limbs.compare_magnitudes(digits(1000), digits(999)) == 1
        assert limbs.compare_magnitudes(digits(99), digits(100)) == -1

    def test_same_length(self):
        """Same length compares from the top limb down."""
        assert limbs.compare_magnitudes(digits(517), digits(518)) == -1
        assert limbs.compare_magnitudes(digits(620), digits(519)) == 1
        assert limbs.compare_magnitudes(digits(517), digits(517)) == 0


class TestAddSubtract:
    """Tests for carry and borrow propagation."""

    def test_carry_extends_length(self):
        """9773 + 227 carries into a new limb."""
        result, _ = limbs.add_magnitudes(digits(9773), digits(227), BASE)
        assert result == digits(10000)

    def test_add_iterations(self):
        """One iteration per limb plus one for the final carry."""
        _, iterations = limbs.add_magnitudes(digits(99), digits(1), BASE)
        assert iterations == 3

    def test_borrow(self):
        """10000 - 1 borrows through every limb."""
        result, _ = limbs.subtract_magnitudes(digits(10000), digits(1), BASE)
        assert result == digits(9999)

    def test_subtract_to_zero(self):
        """Equal magnitudes subtract to canonical zero."""
        result, _ = limbs.subtract_magnitudes(digits(10000), digits(10000), BASE)
        assert result == (0,)


class TestMultiply:
    """Tests for the schoolbook product."""

    def test_product(self):
        """54325 * 543 = 29498475."""
        result, _ = limbs.multiply_magnitudes(digits(54325), digits(543), BASE)
        assert result == digits(29498475)

    def test_zero_short_circuits(self):
        """Zero operand returns zero without iterating."""
        assert limbs.multiply_magnitudes((0,), digits(543), BASE) == ((0,), 0)

    def test_max_limbs_stay_in_range(self):
        """All-max limbs at the binary radix keep every limb below the base."""
        base = Radix.binary().base
        a = (base - 1,) * 4
        result, _ = limbs.multiply_magnitudes(a, a, base)
        assert all(0 <= limb < base for limb in result)
        assert limbs.to_native(result, base) == limbs.to_native(a, base) ** 2


class TestDivide:
    """Tests for the division kernels."""

    def test_divmod_small(self):
        """Native fast path: 7321 / 7."""
        quotient, rest, iterations = limbs.divmod_small(digits(7321, 100), 7, 100)
        assert limbs.to_native(quotient, 100) == 1045
        assert rest == 6
        assert iterations == 2

    def test_divmod_long(self):
        """Long division: 7321 / 153 = 47 rem 130 in base 10."""
        quotient, rest, _ = limbs.divmod_long(digits(7321), digits(153), Radix(10))
        assert quotient == digits(47)
        assert rest == digits(130)

    def test_divmod_long_bounds_subtractions(self):
        """Each sub-digit needs at most factor - 1 subtractions."""
        radix = Radix(2**10)
        dividend = limbs.from_native(2**200 - 1, radix.base)
        divisor = limbs.from_native(3**40, radix.base)
        _, _, iterations = limbs.divmod_long(dividend, divisor, radix)
        assert iterations <= len(dividend) * len(radix.factors)

    def test_divmod_long_matches_native(self):
        """Quotient and remainder agree with native arithmetic."""
        radix = Radix.binary()
        a, b = 7**90, 11**25
        quotient, rest, _ = limbs.divmod_long(
            limbs.from_native(a, radix.base), limbs.from_native(b, radix.base), radix
        )
        assert limbs.to_native(quotient, radix.base) == a // b
        assert limbs.to_native(rest, radix.base) == a % b


class TestRebase:
    """Tests for re-expressing a magnitude in another base."""

    def test_rebase(self):
        """Base 10 limbs become base 2**26 limbs of the same value."""
        value = 12345678901234567890
        result = limbs.rebase(digits(value), 10, 2**26)
        assert result == limbs.from_native(value, 2**26)

    def test_same_base_is_identity(self):
        """Rebasing to the same base returns the input."""
        source = digits(517)
        assert limbs.rebase(source, 10, 10) is source


class TestDecimalText:
    """Tests for decimal parsing and formatting."""

    @pytest.mark.parametrize("base", [2, 6, 10, 16, 10**7, 2**26])
    def test_parse_decimal(self, base):
        """Decimal text parses to the native value's limbs."""
        text = "98765432109876543210123"
        assert limbs.parse_decimal(text, Radix(base)) == limbs.from_native(int(text), base)

    def test_parse_leading_zeros(self):
        """Leading zeros are dropped."""
        assert limbs.parse_decimal("000", Radix(10**7)) == (0,)
        assert limbs.parse_decimal("0042", Radix.binary()) == (42,)

    @pytest.mark.parametrize("base", [2, 6, 10, 16, 10**7, 2**26])
    def test_format_decimal(self, base):
        """Magnitudes render with inner zero groups padded."""
        value = 10**30 + 7
        assert limbs.format_decimal(limbs.from_native(value, base), Radix(base)) == str(value)

    def test_format_zero(self):
        """Zero renders as a single digit."""
        assert limbs.format_decimal((0,), Radix.binary()) == "0"
        assert limbs.format_decimal((0,), Radix.decimal()) == "0"
