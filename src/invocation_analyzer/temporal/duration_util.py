"""Duration formatting helpers."""

from __future__ import annotations

from datetime import timedelta

from invocation_analyzer.temporal.time_util import get_micros

_HOUR = timedelta(hours=1)
_MINUTE = timedelta(minutes=1)
_TEN_SECONDS = timedelta(seconds=10)


def format_duration(duration: timedelta) -> str:
    """Render *duration* for humans.

    - ``>= 1h``: ``"1h 2m 3s"``
    - ``>= 1m``: ``"2m 3s"``
    - ``>= 10s``: ``"12s"``
    - otherwise milliseconds: ``"9999ms"``

    Durations between one and ten seconds use milliseconds.
    """
    total_seconds = get_micros(duration) // 1_000_000
    if duration >= _HOUR:
        hours, rest = divmod(total_seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        return f"{hours}h {minutes}m {seconds}s"
    if duration >= _MINUTE:
        minutes, seconds = divmod(total_seconds, 60)
        return f"{minutes}m {seconds}s"
    if duration >= _TEN_SECONDS:
        return f"{total_seconds}s"
    # Truncates toward zero: -1.5ms is "-1ms".
    return f"{int(get_micros(duration) / 1000)}ms"


def percentage_of(partial: timedelta, base: timedelta) -> float:
    """Return ``100 * partial / base``.

    Raises:
        ValueError: If *base* is zero.
    """
    if not base:
        raise ValueError("Duration base must not be zero.")
    return 100.0 * get_micros(partial) / get_micros(base)
