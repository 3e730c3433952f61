"""I2C transmission with randomised back-off retries."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from typing import Protocol


class I2CBus(Protocol):
    def write(self, address: int, data: bytes) -> None:
        """Send ``data`` to ``address``; raise OSError on failure."""


class TransmissionError(Exception):
    """Raised when every transmission attempt has failed."""

    def __init__(self, address: int, attempts: int) -> None:
        super().__init__(
            f"transmission to 0x{address:02x} failed after {attempts} attempt(s)"
        )
        self.address = address
        self.attempts = attempts


class I2CCommunicator:
    """Writes to an I2C bus, retrying failed transmissions after a random delay.

    Delays are in milliseconds, drawn from ``[delay_min, delay_max)``.
    """

    def __init__(
        self,
        bus: I2CBus,
        max_retries: int,
        delay_min: int,
        delay_max: int,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.bus = bus
        self.max_retries = max_retries
        self.delay_min = delay_min
        self.delay_max = delay_max
        self._sleep = sleep
        self._rng = rng if rng is not None else random.Random()

    def _backoff_ms(self) -> int:
        if self.delay_max <= self.delay_min:
            return self.delay_min
        return self._rng.randrange(self.delay_min, self.delay_max)

    def transmit(self, address: int, data: bytes) -> None:
        """Send ``data``; raise TransmissionError once retries are exhausted."""
        payload = bytes(data)
        last_error: OSError | None = None
        for _ in range(self.max_retries):
            try:
                self.bus.write(address, payload)
            except OSError as exc:
                last_error = exc
                self._sleep(self._backoff_ms() / 1000)
            else:
                return
        raise TransmissionError(address, self.max_retries) from last_error