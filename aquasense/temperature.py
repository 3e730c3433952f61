"""Water temperature sensing with median smoothing of recent readings."""

from __future__ import annotations

from collections.abc import Callable

from aquasense.sampling import MedianBuffer

DEFAULT_ITERATIONS = 10


class TemperatureSensor:
    """Temperature probe whose readings are smoothed by a running median.

    ``read_celsius`` performs one conversion on the probe and returns the
    temperature of its first device in degrees Celsius. The most recent
    ``iterations`` readings are kept; slots not yet filled count as ``0.0``.
    """

    def __init__(
        self,
        read_celsius: Callable[[], float],
        iterations: int = DEFAULT_ITERATIONS,
    ) -> None:
        self._read_celsius = read_celsius
        self._buffer = MedianBuffer(iterations)

    @property
    def iterations(self) -> int:
        """Number of readings the median is taken over."""
        return len(self._buffer)

    @property
    def readings(self) -> tuple[float, ...]:
        """The buffered readings in storage order."""
        return self._buffer.values()

    def sample(self) -> float:
        """Take one reading from the probe, store it and return it."""
        value = float(self._read_celsius())
        self._buffer.add(value)
        return value

    def compute_median(self) -> float:
        """Median of the buffered readings."""
        return self._buffer.median()

    def read_and_adjust_temp(self) -> float:
        """Take a reading and return the updated median temperature."""
        self.sample()
        return self.compute_median()