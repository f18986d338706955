"""Test helpers module for shared test utilities.

- factories: BigInteger construction and reference arithmetic
"""

from tests.helpers.factories import make, truncated_divmod

__all__ = ["make", "truncated_divmod"]
