"""Wall-clock sources for reading the current time.

``EpochSeconds.now()`` asks a clock for nanoseconds since the epoch instead
of calling ``time.time_ns()`` directly, so tests can inject a fixed reading.
"""

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of wall-clock readings in nanoseconds since the Unix epoch.

    Readings may be negative when the host clock is set before 1970.
    """

    def time_ns(self) -> int: ...


class SystemClock:
    """Clock backed by the host's system time."""

    def time_ns(self) -> int:
        return time.time_ns()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Clock that returns a fixed reading until moved with ``advance``.

    Example:
        >>> clock = FixedClock(1_600_000_000_000_000_000)
        >>> EpochSeconds.now(clock)
        EpochSeconds(seconds=1600000000, subsecond_nanos=0)
        >>> clock.advance(500_000_000)
    """

    def __init__(self, nanos: int = 0):
        if isinstance(nanos, bool) or not isinstance(nanos, int):
            raise TypeError(
                f"FixedClock reading must be an int count of nanoseconds.\n"
                f"Got {type(nanos).__name__!r}: {nanos!r}"
            )
        self._nanos: int = nanos

    def time_ns(self) -> int:
        return self._nanos

    def advance(self, nanos: int) -> None:
        """Move the reading by ``nanos`` (negative moves it backwards)."""
        self._nanos += nanos

    def __repr__(self) -> str:
        return f"FixedClock({self._nanos})"
