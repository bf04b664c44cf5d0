"""Exact conversions between microsecond counts and durations.

``timedelta`` stores whole microseconds, so every conversion here is lossless.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invocation_analyzer.temporal.timestamp import Timestamp

_ONE_MICROSECOND = timedelta(microseconds=1)


def duration_for_micros(micros: int) -> timedelta:
    """Return a duration of exactly *micros* microseconds."""
    return timedelta(microseconds=micros)


def get_micros(duration: timedelta) -> int:
    """Return the number of microseconds in *duration*."""
    return duration // _ONE_MICROSECOND


def duration_between(t1: Timestamp, t2: Timestamp) -> timedelta:
    """Duration that passed between two timestamps, in either order."""
    return duration_for_micros(abs(t1.micros - t2.micros))
