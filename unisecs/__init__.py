from .clock import Clock, FixedClock, SystemClock
from .seconds import (
    EPOCH,
    MAX_DATETIME_SECONDS,
    MAX_TIMEDELTA_SECONDS,
    ArithmeticUnderflowError,
    EpochSeconds,
)
from .util import MICROS_PER_SECOND, NANOS_PER_MICRO, NANOS_PER_SECOND

__all__ = [
    "EpochSeconds",
    "ArithmeticUnderflowError",
    "EPOCH",
    "MAX_TIMEDELTA_SECONDS",
    "MAX_DATETIME_SECONDS",
    "Clock",
    "SystemClock",
    "FixedClock",
    "NANOS_PER_SECOND",
    "NANOS_PER_MICRO",
    "MICROS_PER_SECOND",
]
