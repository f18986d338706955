"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest

from bignumber.radix import Radix
from bignumber.stats import OperationStats, observing

# Radixes exercised by the radix-parametrized tests: the process default
# (power of two), the decimal-aligned one, and small bases that push every
# division through the long-division kernel.
RADIXES = [
    pytest.param(Radix.binary(), id="binary"),
    pytest.param(Radix.decimal(), id="decimal"),
    pytest.param(Radix(10), id="base10"),
    pytest.param(Radix(6), id="base6"),
    pytest.param(Radix(12), id="base12"),
]


@pytest.fixture(params=RADIXES)
def radix(request: pytest.FixtureRequest) -> Radix:
    """Each supported radix in turn."""
    return request.param


@pytest.fixture
def binary_radix() -> Radix:
    """The largest safe power-of-two radix (2**26)."""
    return Radix.binary()


@pytest.fixture
def decimal_radix() -> Radix:
    """The largest safe power-of-ten radix (10**7)."""
    return Radix.decimal()


@pytest.fixture
def stats() -> Iterator[OperationStats]:
    """OperationStats installed as the active observer for one test."""
    collector = OperationStats()
    with observing(collector):
        yield collector
