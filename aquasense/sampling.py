"""Sample buffering and reduction helpers shared by the sensor classes."""

from __future__ import annotations

import time
from collections.abc import Iterable


class MedianBuffer:
    """Fixed-size circular buffer of readings that reports their median.

    Every slot starts at ``0.0``, so the median is taken over the whole
    buffer even before it has been filled once.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"buffer size must be positive, got {size}")
        self._slots = [0.0] * size
        self._next = 0

    def __len__(self) -> int:
        return len(self._slots)

    def add(self, value: float) -> None:
        """Store a reading, overwriting the oldest slot once the buffer is full."""
        self._slots[self._next] = float(value)
        self._next = (self._next + 1) % len(self._slots)

    def median(self) -> float:
        """Median of all slots; the mean of the middle pair for even sizes."""
        ordered = sorted(self._slots)
        middle = len(ordered) // 2
        if len(ordered) % 2 == 0:
            return (ordered[middle - 1] + ordered[middle]) / 2.0
        return ordered[middle]

    def values(self) -> tuple[float, ...]:
        """The slots in storage order."""
        return tuple(self._slots)


def average(values: Iterable[float]) -> float:
    """Arithmetic mean of ``values``; raises ValueError when there are none."""
    items = [float(v) for v in values]
    if not items:
        raise ValueError("cannot average an empty set of values")
    return sum(items) / len(items)


def monotonic_millis() -> int:
    """Milliseconds from a monotonic clock, for timing between reads."""
    return int(time.monotonic() * 1000)