"""Uptime bookkeeping in hours, minutes and seconds."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from aquasense.sampling import monotonic_millis

log = logging.getLogger(__name__)

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_ULONG_MAX = 2**32 - 1


def split_millis(millis: int) -> tuple[int, int, int]:
    """Split a millisecond count into ``(hours, minutes, seconds)``."""
    if millis < 0:
        raise ValueError(f"millisecond count cannot be negative: {millis}")
    hours, rest = divmod(millis, _MS_PER_HOUR)
    minutes, rest = divmod(rest, _MS_PER_MINUTE)
    return hours, minutes, rest // _MS_PER_SECOND


class UptimeCalculator:
    """Uptime derived directly from a millisecond clock since start."""

    def __init__(self, clock: Callable[[], int] = monotonic_millis) -> None:
        self._clock = clock
        self.hours = 0
        self.minutes = 0
        self.seconds = 0

    def update(self) -> tuple[int, int, int]:
        """Refresh the fields from the clock and return them."""
        self.hours, self.minutes, self.seconds = split_millis(self._clock())
        return self.hours, self.minutes, self.seconds


@dataclass
class RetainedUptime:
    """Uptime state that survives a sleep/wake cycle."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    previous_millis: int = 0
    is_first_boot: bool = True


class AccumulatingUptime:
    """Uptime accumulated across wake-ups into retained state.

    The clock may restart or wrap around an unsigned 32-bit counter between
    updates; elapsed time is measured with that wrap in mind.
    """

    def __init__(
        self,
        clock: Callable[[], int] = monotonic_millis,
        state: RetainedUptime | None = None,
    ) -> None:
        self._clock = clock
        self.state = state if state is not None else RetainedUptime()

    def update(self) -> tuple[int, int, int]:
        """Add the time since the previous update and return the totals."""
        state = self.state
        current = self._clock()
        if state.is_first_boot:
            state.is_first_boot = False
            log.debug("first boot, initialising previous millis")
        else:
            if current >= state.previous_millis:
                elapsed = current - state.previous_millis
            else:
                elapsed = (_ULONG_MAX - state.previous_millis + 1) + current
            log.debug(
                "current=%d previous=%d elapsed=%d",
                current,
                state.previous_millis,
                elapsed,
            )
            state.seconds += elapsed // _MS_PER_SECOND
            self._normalize()
            log.debug(
                "uptime %dh %dm %ds", state.hours, state.minutes, state.seconds
            )
        state.previous_millis = current
        return state.hours, state.minutes, state.seconds

    def _normalize(self) -> None:
        state = self.state
        carry, state.seconds = divmod(state.seconds, 60)
        state.minutes += carry
        carry, state.minutes = divmod(state.minutes, 60)
        state.hours += carry

    @staticmethod
    def _checked(name: str, value: int) -> int:
        if value < 0:
            raise ValueError(f"{name} cannot be negative: {value}")
        return value

    @property
    def hours(self) -> int:
        return self.state.hours

    @hours.setter
    def hours(self, value: int) -> None:
        self.state.hours = self._checked("hours", value)

    @property
    def minutes(self) -> int:
        return self.state.minutes

    @minutes.setter
    def minutes(self, value: int) -> None:
        self.state.minutes = self._checked("minutes", value)

    @property
    def seconds(self) -> int:
        return self.state.seconds

    @seconds.setter
    def seconds(self, value: int) -> None:
        self.state.seconds = self._checked("seconds", value)