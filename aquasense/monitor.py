"""Sequenced sampling of temperature, TDS and pH probes on a shared clock."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable

from aquasense.ph import PhSensor
from aquasense.sampling import monotonic_millis
from aquasense.tds import TdsSensor
from aquasense.temperature import TemperatureSensor

log = logging.getLogger(__name__)

DEFAULT_SAMPLING_INTERVAL_MS = 60_000
DEFAULT_READING_DURATION_MS = 12_000
DEFAULT_STABILIZE_MS = 2_000

TEMPERATURE = "temperature"
TDS = "tds"
PH = "ph"


class SensorState(enum.Enum):
    """Phases a powered sensor goes through during one reading period."""

    OFF = enum.auto()
    INIT = enum.auto()
    STABILIZE = enum.auto()
    READ = enum.auto()
    SHUTDOWN = enum.auto()


class SensorStage:
    """State machine that powers a sensor, lets it settle, reads it, then stops.

    ``power(on)`` switches the sensor's supply, if one is given. After
    ``start`` the stage powers up, waits ``stabilize_ms``, then calls ``read``
    whenever ``read_delay`` milliseconds have passed since the previous read,
    until ``duration_ms`` have passed since power-up. It then powers down,
    returns to OFF and calls ``on_done``. All times come from ``clock``.
    """

    def __init__(
        self,
        name: str,
        read: Callable[[], float],
        power: Callable[[bool], None] | None = None,
        clock: Callable[[], int] = monotonic_millis,
        stabilize_ms: int = DEFAULT_STABILIZE_MS,
        duration_ms: int = DEFAULT_READING_DURATION_MS,
        read_delay: int = 0,
        on_done: Callable[[], None] | None = None,
    ) -> None:
        for label, amount in (
            ("stabilize time", stabilize_ms),
            ("reading duration", duration_ms),
            ("read delay", read_delay),
        ):
            if amount < 0:
                raise ValueError(f"{label} cannot be negative, got {amount}")
        self.name = name
        self._read = read
        self._power = power
        self._clock = clock
        self.stabilize_ms = stabilize_ms
        self.duration_ms = duration_ms
        self.read_delay = read_delay
        self._on_done = on_done
        self.state = SensorState.OFF
        self.value: float | None = None
        self._started = 0
        self._last_read = 0

    def _switch(self, on: bool) -> None:
        if self._power is not None:
            self._power(on)

    def start(self) -> None:
        """Begin a reading period at the next step."""
        self.state = SensorState.INIT

    def stop(self) -> None:
        """Return to OFF without powering down."""
        self.state = SensorState.OFF

    def step(self) -> SensorState:
        """Advance the state machine once and return the resulting state."""
        state = self.state
        if state is SensorState.OFF:
            return state
        now = self._clock()
        if state is SensorState.INIT:
            self._started = now
            self._switch(True)
            self.state = SensorState.STABILIZE
        elif state is SensorState.STABILIZE:
            if now - self._started >= self.stabilize_ms:
                self.state = SensorState.READ
                self._last_read = now
        elif state is SensorState.READ:
            if now - self._last_read >= self.read_delay:
                self.value = float(self._read())
                self._last_read = now
                log.debug("%s reading: %s", self.name, self.value)
            if now - self._started >= self.duration_ms:
                log.info("%s result: %s", self.name, self.value)
                self.state = SensorState.SHUTDOWN
        elif state is SensorState.SHUTDOWN:
            self._switch(False)
            self.stop()
            if self._on_done is not None:
                self._on_done()
        return self.state


def _channel_switch(
    power: Callable[[str, bool], None] | None, channel: str
) -> Callable[[bool], None] | None:
    """Bind a channel name to a shared power switch, if there is one."""
    if power is None:
        return None
    return lambda on: power(channel, on)


class WaterQualityMonitor:
    """Runs temperature, then TDS, then pH readings every sampling interval.

    The temperature result compensates the TDS and pH readings.
    ``power(channel, on)`` switches the supply named ``"temperature"``,
    ``"tds"`` or ``"ph"``. Call :meth:`tick` repeatedly from the main loop.
    """

    def __init__(
        self,
        temperature: TemperatureSensor,
        tds: TdsSensor,
        ph: PhSensor,
        clock: Callable[[], int] = monotonic_millis,
        power: Callable[[str, bool], None] | None = None,
        sampling_interval: int = DEFAULT_SAMPLING_INTERVAL_MS,
        reading_duration: int = DEFAULT_READING_DURATION_MS,
    ) -> None:
        if sampling_interval <= 0:
            raise ValueError(
                f"sampling interval must be positive, got {sampling_interval}"
            )
        self._clock = clock
        self.sampling_interval = sampling_interval
        self._last_sampling: int | None = None
        self.temperature = temperature
        self.tds = tds
        self.ph = ph

        self.ph_stage = SensorStage(
            PH,
            lambda: ph.compute_ph_value(self.adjusted_temp),
            power=_channel_switch(power, PH),
            clock=clock,
            duration_ms=reading_duration,
            read_delay=ph.read_delay,
        )
        self.tds_stage = SensorStage(
            TDS,
            lambda: tds.read_and_adjust_tds(self.adjusted_temp),
            power=_channel_switch(power, TDS),
            clock=clock,
            duration_ms=reading_duration,
            read_delay=tds.read_delay,
            on_done=self.ph_stage.start,
        )
        self.temperature_stage = SensorStage(
            TEMPERATURE,
            temperature.read_and_adjust_temp,
            power=_channel_switch(power, TEMPERATURE),
            clock=clock,
            duration_ms=reading_duration,
            on_done=self.tds_stage.start,
        )

    @staticmethod
    def _result(stage: SensorStage) -> float:
        return stage.value if stage.value is not None else 0.0

    @property
    def adjusted_temp(self) -> float:
        """Latest smoothed temperature, 0.0 before the first reading."""
        return self._result(self.temperature_stage)

    @property
    def adjusted_tds(self) -> float:
        """Latest compensated TDS, 0.0 before the first reading."""
        return self._result(self.tds_stage)

    @property
    def adjusted_ph(self) -> float:
        """Latest compensated pH, 0.0 before the first reading."""
        return self._result(self.ph_stage)

    def tick(self) -> None:
        """Start a new cycle when the interval has elapsed, then step each stage."""
        now = self._clock()
        if self._last_sampling is None:
            self._last_sampling = now
        elif now - self._last_sampling > self.sampling_interval:
            self.temperature_stage.start()
            self._last_sampling = self._clock()
        self.temperature_stage.step()
        self.tds_stage.step()
        self.ph_stage.step()