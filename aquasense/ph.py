"""pH sensing from an analog probe, by median voltage or by averaged volts."""

from __future__ import annotations

from collections.abc import Callable

from aquasense.sampling import MedianBuffer, average, monotonic_millis

DEFAULT_ITERATIONS = 40
DEFAULT_READ_DELAY_MS = 250
PH_PER_VOLT = 3.5


class PhSensor:
    """pH probe read through an ADC and smoothed by a running median.

    ``read_raw`` returns one raw ADC count. The median count is scaled by
    ``voltage_constant / max_adc`` to a probe voltage (in the units that
    ``convert`` expects), and ``convert(voltage, temperature)`` turns that
    voltage into a temperature-compensated pH value.

    Every call to :meth:`sample` takes a reading; ``read_delay`` is the gap
    the caller is expected to leave between readings.
    """

    def __init__(
        self,
        voltage_constant: float,
        reference_temp: float,
        max_adc: float,
        read_raw: Callable[[], float],
        convert: Callable[[float, float], float],
        iterations: int = DEFAULT_ITERATIONS,
        read_delay: int = DEFAULT_READ_DELAY_MS,
    ) -> None:
        if max_adc <= 0:
            raise ValueError(f"maximum ADC value must be positive, got {max_adc}")
        if read_delay < 0:
            raise ValueError(f"read delay cannot be negative, got {read_delay}")
        self.voltage_constant = voltage_constant
        self.reference_temp = reference_temp
        self.max_adc = max_adc
        self._read_raw = read_raw
        self._convert = convert
        self._read_delay = read_delay
        self._buffer = MedianBuffer(iterations)
        self.average_voltage = 0.0

    @property
    def read_delay(self) -> int:
        """Gap to leave between readings, in milliseconds."""
        return self._read_delay

    @property
    def iterations(self) -> int:
        """Number of readings the median is taken over."""
        return len(self._buffer)

    @property
    def readings(self) -> tuple[float, ...]:
        """The buffered raw readings in storage order."""
        return self._buffer.values()

    def sample(self) -> float:
        """Take one raw reading, store it and return it."""
        value = float(self._read_raw())
        self._buffer.add(value)
        return value

    def compute_median(self) -> float:
        """Median of the buffered raw readings."""
        return self._buffer.median()

    def adjust_ph(self, voltage: float, temperature: float) -> float:
        """pH for a probe ``voltage`` measured at ``temperature``."""
        return float(self._convert(voltage, temperature))

    def compute_ph_value(self, temperature: float) -> float:
        """Sample, then convert the median reading to a compensated pH."""
        self.sample()
        self.average_voltage = (
            self.compute_median() * self.voltage_constant / self.max_adc
        )
        return self.adjust_ph(self.average_voltage, temperature)


class OffsetPhSensor:
    """pH probe read as volts, averaged and mapped linearly with an offset.

    ``read_volts`` returns one voltage reading. A new reading is taken only
    once ``read_delay`` milliseconds have passed on ``clock`` since the last
    one; the clock starts from a last-read time of zero. The pH is
    ``3.5 * mean_volts + offset``, the mean being taken over every slot of
    the buffer, unfilled slots counting as ``0.0``.
    """

    def __init__(
        self,
        offset: float,
        read_volts: Callable[[], float],
        iterations: int = DEFAULT_ITERATIONS,
        read_delay: int = DEFAULT_READ_DELAY_MS,
        clock: Callable[[], int] = monotonic_millis,
    ) -> None:
        if read_delay < 0:
            raise ValueError(f"read delay cannot be negative, got {read_delay}")
        self.offset = offset
        self._read_volts = read_volts
        self._read_delay = read_delay
        self._clock = clock
        self._last_read = 0
        self._buffer = MedianBuffer(iterations)

    @property
    def read_delay(self) -> int:
        """Minimum gap between readings, in milliseconds."""
        return self._read_delay

    @property
    def iterations(self) -> int:
        """Number of readings the average is taken over."""
        return len(self._buffer)

    @property
    def readings(self) -> tuple[float, ...]:
        """The buffered voltages in storage order."""
        return self._buffer.values()

    def sample(self) -> float | None:
        """Store a new voltage if the delay has passed; return it or None."""
        now = self._clock()
        if now - self._last_read < self._read_delay:
            return None
        value = float(self._read_volts())
        self._buffer.add(value)
        self._last_read = now
        return value

    def compute_ph_value(self) -> float:
        """Sample, then map the mean buffered voltage to a pH value."""
        self.sample()
        return PH_PER_VOLT * average(self._buffer.values()) + self.offset