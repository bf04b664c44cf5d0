"""Temporal primitives for trace analysis.

Submodules
~~~~~~~~~~
- :mod:`invocation_analyzer.temporal.timestamp` -- :class:`Timestamp`, a signed
  microsecond offset from the trace origin.
- :mod:`invocation_analyzer.temporal.time_util` -- exact conversions between
  microsecond counts and :class:`~datetime.timedelta`.
- :mod:`invocation_analyzer.temporal.duration_util` -- human-readable duration
  formatting and percentage helpers.
- :mod:`invocation_analyzer.temporal.range` -- :class:`Range`, a closed interval
  with a fixed matching tolerance.
"""

from __future__ import annotations

from invocation_analyzer.temporal.duration_util import format_duration, percentage_of
from invocation_analyzer.temporal.range import Range
from invocation_analyzer.temporal.time_util import (
    duration_between,
    duration_for_micros,
    get_micros,
)
from invocation_analyzer.temporal.timestamp import ACCEPTABLE_DIVERGENCE, Timestamp

__all__ = [
    "ACCEPTABLE_DIVERGENCE",
    "Range",
    "Timestamp",
    "duration_between",
    "duration_for_micros",
    "format_duration",
    "get_micros",
    "percentage_of",
]
