"""Arbitrary-precision signed integer arithmetic."""

from bignumber.big_integer import BigInteger, absolute, create
from bignumber.errors import BigIntegerError, DivisionByZero, InvalidNumberFormat, NumberState
from bignumber.radix import DEFAULT_RADIX, Radix
from bignumber.result import DivisionResult
from bignumber.stats import (
    LoggingObserver,
    NullObserver,
    OperationObserver,
    OperationStats,
    observing,
    set_observer,
)

__version__ = "0.1.0"
__all__ = [
    "BigInteger",
    "create",
    "absolute",
    "DivisionResult",
    "NumberState",
    "BigIntegerError",
    "InvalidNumberFormat",
    "DivisionByZero",
    "Radix",
    "DEFAULT_RADIX",
    "OperationObserver",
    "OperationStats",
    "NullObserver",
    "LoggingObserver",
    "observing",
    "set_observer",
    "__version__",
]
