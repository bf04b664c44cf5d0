"""Tolerance-aware time ranges."""

from __future__ import annotations

from dataclasses import dataclass

from invocation_analyzer.temporal.timestamp import ACCEPTABLE_DIVERGENCE, Timestamp


@dataclass(frozen=True, slots=True)
class Range:
    """Closed interval ``[start, end]`` widened by 1ms on both sides when tested."""

    start: Timestamp
    end: Timestamp

    @classmethod
    def between(cls, start: Timestamp, end: Timestamp) -> Range:
        return cls(start, end)

    def contains(self, *values: Timestamp) -> bool:
        """Whether every value lies within the range, give or take the tolerance."""
        lower = self.start.plus(-ACCEPTABLE_DIVERGENCE)
        upper = self.end.plus(ACCEPTABLE_DIVERGENCE)
        return all(lower <= value <= upper for value in values)
