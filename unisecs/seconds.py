"""Seconds since the Unix epoch with nanosecond subseconds.

``EpochSeconds`` is an immutable value holding whole seconds and a
nanosecond remainder. It converts losslessly to and from integer
nanoseconds, and to and from ``datetime.timedelta`` and UTC ``datetime``
at microsecond resolution.

Values never precede the epoch. Clock readings before 1970 clamp to zero,
and subtraction saturates at zero (use ``checked_sub`` to get an error
instead).
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from fractions import Fraction
from typing import Any

from loguru import logger
from typing_extensions import override

from unisecs.clock import Clock, SystemClock
from unisecs.util import NANOS_PER_MICRO, NANOS_PER_SECOND, split_nanos

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MICROSECOND = timedelta(microseconds=1)
_SECOND = timedelta(seconds=1)

# Largest whole-second counts the host types can hold
MAX_TIMEDELTA_SECONDS = timedelta.max // _SECOND
MAX_DATETIME_SECONDS = (datetime.max.replace(tzinfo=timezone.utc) - EPOCH) // _SECOND


class ArithmeticUnderflowError(ArithmeticError):
    """Raised when a checked subtraction would land before the epoch."""


def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"EpochSeconds {name} must be an int.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Hint: use EpochSeconds.from_float() or from_duration() "
            f"for fractional seconds"
        )
    return value


def _require_real(value: Any, name: str) -> None:
    """Reject non-real, non-finite and negative numbers."""
    if isinstance(value, bool) or not isinstance(
        value, (int, float, Fraction, Decimal)
    ):
        raise TypeError(
            f"EpochSeconds {name} must be a real number.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )
    if isinstance(value, float):
        finite = math.isfinite(value)
    elif isinstance(value, Decimal):
        finite = value.is_finite()
    else:
        finite = True
    if not finite:
        raise ValueError(f"EpochSeconds {name} must be finite, got {value!r}")
    if value < 0:
        raise ValueError(f"EpochSeconds {name} must be non-negative, got {value!r}")


def _operand_nanos(other: Any) -> int | None:
    """Signed nanosecond length of an arithmetic operand, or None if unsupported."""
    if isinstance(other, EpochSeconds):
        return other.to_nanos()
    if isinstance(other, timedelta):
        return (other // _MICROSECOND) * NANOS_PER_MICRO
    return None


@dataclass(frozen=True, order=True, kw_only=True)
class EpochSeconds:
    """A point in time as an offset from 1970-01-01T00:00:00Z.

    Attributes:
        seconds: Whole seconds since the epoch
        subsecond_nanos: Fractional remainder in [0, 1_000_000_000)

    A ``subsecond_nanos`` of one second or more is carried into ``seconds``
    on construction. Ordering compares ``(seconds, subsecond_nanos)``.
    """

    seconds: int
    subsecond_nanos: int = 0

    def __post_init__(self) -> None:
        _require_int(self.seconds, "seconds")
        _require_int(self.subsecond_nanos, "subsecond_nanos")
        if self.seconds < 0 or self.subsecond_nanos < 0:
            raise ValueError(
                f"EpochSeconds cannot precede the epoch.\n"
                f"Got seconds={self.seconds}, subsecond_nanos={self.subsecond_nanos}"
            )
        if self.subsecond_nanos >= NANOS_PER_SECOND:
            carry, nanos = split_nanos(self.subsecond_nanos)
            object.__setattr__(self, "seconds", self.seconds + carry)
            object.__setattr__(self, "subsecond_nanos", nanos)

    # Construction

    @classmethod
    def now(cls, clock: Clock | None = None) -> "EpochSeconds":
        """Read the current time from ``clock`` (the system clock by default).

        A reading before the epoch clamps to zero. Successive calls are
        non-decreasing only as long as the clock itself is; wall-clock
        adjustments can move it backwards.
        """
        if clock is None:
            clock = SystemClock()
        reading = clock.time_ns()
        if isinstance(reading, bool) or not isinstance(reading, int):
            raise TypeError(
                f"Clock {clock!r} must return an int count of nanoseconds "
                f"from time_ns().\n"
                f"Got {type(reading).__name__!r}: {reading!r}"
            )
        if reading < 0:
            logger.warning(
                "Clock {!r} reported {} ns before the Unix epoch; clamping to zero",
                clock,
                -reading,
            )
            reading = 0
        return cls.from_nanos(reading)

    @classmethod
    def from_secs(cls, seconds: int) -> "EpochSeconds":
        return cls(seconds=seconds)

    @classmethod
    def new(cls, seconds: int, nanos: int) -> "EpochSeconds":
        """Build from whole seconds and a nanosecond count, carrying overflow."""
        return cls(seconds=seconds, subsecond_nanos=nanos)

    @classmethod
    def from_duration(
        cls, seconds: int, fraction: float | Fraction | Decimal | int
    ) -> "EpochSeconds":
        """Build from whole seconds and a fraction of a second.

        The fraction is rounded to the nearest nanosecond. A fraction of one
        second or more is carried, so ``from_duration(10, 1.5)`` is 11.5s.
        """
        _require_int(seconds, "seconds")
        _require_real(fraction, "fraction")
        nanos = round(Fraction(fraction) * NANOS_PER_SECOND)
        return cls(seconds=seconds, subsecond_nanos=nanos)

    @classmethod
    def from_float(cls, value: float) -> "EpochSeconds":
        """Build from a float count of seconds, rounded to the nearest nanosecond."""
        _require_real(value, "value")
        return cls.from_nanos(round(Fraction(value) * NANOS_PER_SECOND))

    @classmethod
    def from_nanos(cls, nanos: int) -> "EpochSeconds":
        _require_int(nanos, "nanos")
        if nanos < 0:
            raise ValueError(
                f"EpochSeconds cannot precede the epoch, got {nanos} ns.\n"
                f"Hint: use EpochSeconds.now() to clamp clock readings to zero"
            )
        seconds, subsecond_nanos = split_nanos(nanos)
        return cls(seconds=seconds, subsecond_nanos=subsecond_nanos)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "EpochSeconds":
        """Build from a duration since the epoch (exact)."""
        if not isinstance(delta, timedelta):
            raise TypeError(
                f"Expected a datetime.timedelta, got {type(delta).__name__!r}"
            )
        if delta < timedelta(0):
            raise ValueError(
                f"EpochSeconds cannot precede the epoch, got {delta!r}"
            )
        return cls.from_nanos((delta // _MICROSECOND) * NANOS_PER_MICRO)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "EpochSeconds":
        """Build from a timezone-aware datetime at or after the epoch."""
        if not isinstance(dt, datetime):
            raise TypeError(f"Expected a datetime, got {type(dt).__name__!r}")
        if dt.tzinfo is None:
            raise TypeError(
                f"EpochSeconds.from_datetime() needs a timezone-aware datetime.\n"
                f"Got naive datetime: {dt!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        delta = dt - EPOCH
        if delta < timedelta(0):
            raise ValueError(f"EpochSeconds cannot precede the epoch, got {dt!r}")
        return cls.from_timedelta(delta)

    # Conversion

    def to_nanos(self) -> int:
        return self.seconds * NANOS_PER_SECOND + self.subsecond_nanos

    def to_timedelta(self) -> timedelta:
        """Duration since the epoch; nanoseconds below a microsecond are dropped.

        Raises:
            ValueError: If ``seconds`` exceeds ``MAX_TIMEDELTA_SECONDS``
        """
        if self.seconds > MAX_TIMEDELTA_SECONDS:
            raise ValueError(
                f"{self} seconds is beyond the range of datetime.timedelta "
                f"(max {MAX_TIMEDELTA_SECONDS}).\n"
                f"Hint: use to_nanos() for a lossless integer form"
            )
        return timedelta(
            seconds=self.seconds, microseconds=self.subsecond_nanos // NANOS_PER_MICRO
        )

    def to_datetime(self) -> datetime:
        """UTC datetime for this instant, at microsecond resolution.

        Raises:
            ValueError: If the instant falls after ``datetime.max`` (year 9999)
        """
        if self.seconds > MAX_DATETIME_SECONDS:
            raise ValueError(
                f"{self} seconds is beyond the range of datetime "
                f"(max {MAX_DATETIME_SECONDS}, the end of year 9999).\n"
                f"Hint: use to_nanos() for a lossless integer form"
            )
        return EPOCH + self.to_timedelta()

    def as_tuple(self) -> tuple[int, int]:
        return (self.seconds, self.subsecond_nanos)

    def trunc(self) -> int:
        """Whole seconds, dropping the fractional part."""
        return self.seconds

    def __trunc__(self) -> int:
        return self.seconds

    def __float__(self) -> float:
        return float(Fraction(self.to_nanos(), NANOS_PER_SECOND))

    # Arithmetic

    def __add__(self, other: "EpochSeconds | timedelta") -> "EpochSeconds":
        nanos = _operand_nanos(other)
        if nanos is None:
            return NotImplemented
        return self._saturating(self.to_nanos() + nanos)

    __radd__ = __add__

    def __sub__(self, other: "EpochSeconds | timedelta") -> "EpochSeconds":
        nanos = _operand_nanos(other)
        if nanos is None:
            return NotImplemented
        return self._saturating(self.to_nanos() - nanos)

    def saturating_sub(self, other: "EpochSeconds | timedelta") -> "EpochSeconds":
        """Subtract ``other``, clamping at the epoch. Same as ``self - other``."""
        return self._saturating(self.to_nanos() - self._require_operand(other))

    def checked_sub(self, other: "EpochSeconds | timedelta") -> "EpochSeconds":
        """Subtract ``other``, raising if the result would precede the epoch.

        Raises:
            ArithmeticUnderflowError: If ``other`` is larger than ``self``
        """
        result = self.to_nanos() - self._require_operand(other)
        if result < 0:
            raise ArithmeticUnderflowError(
                f"Subtracting {other} from {self} underflows the epoch by "
                f"{-result} ns.\n"
                f"Hint: use `-` or saturating_sub() to clamp at zero"
            )
        return self.from_nanos(result)

    def elapsed(self, clock: Clock | None = None) -> "EpochSeconds":
        """Time since this instant according to ``clock``, clamped at zero."""
        return self.now(clock).saturating_sub(self)

    @classmethod
    def _saturating(cls, nanos: int) -> "EpochSeconds":
        return cls.from_nanos(max(nanos, 0))

    @staticmethod
    def _require_operand(other: Any) -> int:
        nanos = _operand_nanos(other)
        if nanos is None:
            raise TypeError(
                f"EpochSeconds arithmetic needs an EpochSeconds or timedelta.\n"
                f"Got {type(other).__name__!r}: {other!r}"
            )
        return nanos

    # Rendering

    @override
    def __str__(self) -> str:
        if not self.subsecond_nanos:
            return str(self.seconds)
        return f"{self.seconds}.{self.subsecond_nanos:09d}".rstrip("0")
