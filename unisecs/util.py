"""Utility constants and helpers for unisecs.

Unit constants relate the resolutions used by Python's time APIs:
nanoseconds (``time.time_ns``), microseconds (``datetime.timedelta``)
and whole seconds.
"""

# Unit constants
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MICRO = 1_000
MICROS_PER_SECOND = 1_000_000


def split_nanos(nanos: int) -> tuple[int, int]:
    """Split a nanosecond count into (whole seconds, subsecond nanos)."""
    return divmod(nanos, NANOS_PER_SECOND)
