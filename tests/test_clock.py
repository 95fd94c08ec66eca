"""Tests for clock sources and EpochSeconds.now()."""

import time

import pytest

from unisecs import Clock, EpochSeconds, FixedClock, SystemClock


class _FloatClock:
    """Clock that mistakenly reports float seconds, like time.time()."""

    def time_ns(self) -> float:
        return 1_600_000_000.25

    def __repr__(self) -> str:
        return "_FloatClock()"


def test_now_reads_injected_clock() -> None:
    clock = FixedClock(1_600_000_000_500_000_000)
    assert EpochSeconds.now(clock) == EpochSeconds.new(1_600_000_000, 500_000_000)

    clock.advance(500_000_000)
    assert EpochSeconds.now(clock) == EpochSeconds.from_secs(1_600_000_001)


def test_now_clamps_readings_before_epoch(warnings_sink: list) -> None:
    value = EpochSeconds.now(FixedClock(-5))

    assert value == EpochSeconds.from_secs(0)
    assert len(warnings_sink) == 1
    assert warnings_sink[0]["level"].name == "WARNING"
    assert "FixedClock(-5) reported 5 ns before the Unix epoch" in (
        warnings_sink[0]["message"]
    )


def test_now_does_not_warn_for_normal_readings(warnings_sink: list) -> None:
    EpochSeconds.now(FixedClock(0))
    assert warnings_sink == []


def test_now_rejects_non_int_clock_readings() -> None:
    with pytest.raises(TypeError, match=r"Clock _FloatClock\(\) must return an int"):
        EpochSeconds.now(_FloatClock())  # type: ignore[arg-type]


def test_system_clock_now_is_non_decreasing() -> None:
    """Holds under a stable clock; wall-clock adjustments could violate it."""
    before = time.time_ns()
    first = EpochSeconds.now()
    second = EpochSeconds.now(SystemClock())

    assert first.to_nanos() >= before - 1_000_000_000
    assert first <= second


def test_clocks_satisfy_protocol() -> None:
    assert isinstance(SystemClock(), Clock)
    assert isinstance(FixedClock(), Clock)
    assert repr(FixedClock(7)) == "FixedClock(7)"


def test_fixed_clock_rejects_non_int() -> None:
    with pytest.raises(TypeError, match="nanoseconds"):
        FixedClock(1.5)  # type: ignore[arg-type]


def test_elapsed_measures_against_clock() -> None:
    clock = FixedClock(10_000_000_000)
    start = EpochSeconds.now(clock)
    clock.advance(2_250_000_000)

    assert start.elapsed(clock) == EpochSeconds.new(2, 250_000_000)


def test_elapsed_saturates_when_clock_moves_backwards() -> None:
    clock = FixedClock(10_000_000_000)
    start = EpochSeconds.now(clock)
    clock.advance(-1_000_000_000)

    assert start.elapsed(clock) == EpochSeconds.from_secs(0)
