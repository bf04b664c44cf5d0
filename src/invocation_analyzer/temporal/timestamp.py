"""Trace timestamps."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from invocation_analyzer.temporal.time_util import duration_between, get_micros

#: Maximum divergence tolerated when matching timestamps that were recorded
#: independently, e.g. critical path entries against per-thread events.
ACCEPTABLE_DIVERGENCE = timedelta(milliseconds=1)


@dataclass(frozen=True, slots=True, order=True)
class Timestamp:
    """Microseconds relative to the trace origin.

    The origin is usually the start of the initialisation phase, so negative
    values are valid. Timestamps are only comparable within a single trace.
    """

    micros: int

    @classmethod
    def of_micros(cls, micros: int) -> Timestamp:
        return cls(int(micros))

    @classmethod
    def of_seconds(cls, seconds: int) -> Timestamp:
        """Only meant for tests and fixtures."""
        return cls(int(seconds) * 1_000_000)

    def plus(self, duration: timedelta) -> Timestamp:
        """Return a copy of this timestamp shifted by *duration*."""
        return Timestamp(self.micros + get_micros(duration))

    def almost_equals(self, other: Timestamp | None) -> bool:
        """Whether *other* lies strictly less than 1ms away from this timestamp."""
        if other is None:
            return False
        return duration_between(self, other) < ACCEPTABLE_DIVERGENCE

    def __str__(self) -> str:
        return f"{self.micros}us"
