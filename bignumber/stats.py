"""Operation instrumentation for BigInteger arithmetic.

The arithmetic core reports each completed operation to the active observer
with the number of limb-loop iterations it took. Observers are write-only
sinks: nothing they record feeds back into a computation.

Usage:
    from bignumber import BigInteger, OperationStats, observing

    stats = OperationStats()
    with observing(stats):
        BigInteger(2).power(64)
    stats.snapshot()["multiply"].count
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol

import structlog

logger = structlog.get_logger()

# Operation names reported by the arithmetic core
OPERATIONS = ("add", "subtract", "multiply", "divide", "power")


class OperationObserver(Protocol):
    """Sink for operation counts."""

    def record(self, operation: str, iterations: int) -> None:
        """Called once per completed operation.

        Args:
            operation: One of OPERATIONS
            iterations: Inner-loop iterations the operation performed
        """
        ...


class NullObserver:
    """Observer that discards everything (the default)."""

    def record(self, operation: str, iterations: int) -> None:
        _ = (operation, iterations)


@dataclass
class OperationCounter:
    """Count and total iterations of one operation."""

    count: int = 0
    iterations: int = 0


@dataclass
class OperationStats:
    """Per-operation counters.

    Attributes:
        counters: Mapping of operation name to its OperationCounter
    """

    counters: dict[str, OperationCounter] = field(
        default_factory=lambda: {name: OperationCounter() for name in OPERATIONS}
    )

    def record(self, operation: str, iterations: int) -> None:
        counter = self.counters.setdefault(operation, OperationCounter())
        counter.count += 1
        counter.iterations += iterations

    def reset(self) -> None:
        """Zero every counter."""
        for counter in self.counters.values():
            counter.count = 0
            counter.iterations = 0

    def snapshot(self) -> dict[str, OperationCounter]:
        """Copy of the current counters."""
        return {
            name: OperationCounter(counter.count, counter.iterations)
            for name, counter in self.counters.items()
        }


class LoggingObserver:
    """Observer that emits a structlog debug event per operation."""

    def __init__(self, event: str = "big_integer_operation") -> None:
        self.event = event

    def record(self, operation: str, iterations: int) -> None:
        logger.debug(self.event, operation=operation, iterations=iterations)


_observer: OperationObserver = NullObserver()


def get_observer() -> OperationObserver:
    """Return the active observer."""
    return _observer


def set_observer(observer: OperationObserver | None) -> OperationObserver:
    """Install an observer process-wide.

    Args:
        observer: New observer, or None to restore the NullObserver

    Returns:
        The previously active observer
    """
    global _observer
    previous = _observer
    _observer = observer if observer is not None else NullObserver()
    return previous


@contextmanager
def observing(observer: OperationObserver) -> Iterator[OperationObserver]:
    """Temporarily install an observer, restoring the previous one on exit."""
    previous = set_observer(observer)
    try:
        yield observer
    finally:
        set_observer(previous)


def notify(operation: str, iterations: int) -> None:
    """Report a completed operation to the active observer."""
    _observer.record(operation, iterations)
