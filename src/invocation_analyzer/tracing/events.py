"""Trace event records.

Each record is parsed strictly from a decoded trace event (a ``dict``):
:meth:`from_dict` checks every required member up front and reports all
missing ones in a single :class:`~invocation_analyzer.errors.MissingMembersError`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import Any

from invocation_analyzer.errors import MissingMembersError, PreconditionError
from invocation_analyzer.temporal import Timestamp, duration_between, duration_for_micros
from invocation_analyzer.tracing.constants import (
    EVENT_ARGUMENTS,
    EVENT_CATEGORY,
    EVENT_DURATION,
    EVENT_NAME,
    EVENT_PROCESS_ID,
    EVENT_THREAD_ID,
    EVENT_TIMESTAMP,
)


def _check_required(raw: Mapping[str, Any], required: tuple[str, ...]) -> None:
    missing = [member for member in required if member not in raw]
    if missing:
        raise MissingMembersError(missing)


def _as_string(value: Any) -> str:
    # JSON spelling for booleans, so that args compare equal to their source text.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _optional_string(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    return None if value is None else _as_string(value)


# ---------------------------------------------------------------------------
# Complete events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CompleteEvent:
    """An event with a start and a duration (phase ``X``)."""

    REQUIRED_MEMBERS = (EVENT_TIMESTAMP, EVENT_DURATION, EVENT_THREAD_ID, EVENT_PROCESS_ID)

    name: str | None
    category: str | None
    start: Timestamp
    duration: timedelta
    thread_id: int
    process_id: int
    args: Mapping[str, str] = field(default_factory=dict, hash=False)
    end: Timestamp = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "end", self.start.plus(self.duration))
        if not isinstance(self.args, MappingProxyType):
            object.__setattr__(self, "args", MappingProxyType(dict(self.args)))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> CompleteEvent:
        """Parse a decoded trace event.

        Raises:
            MissingMembersError: If any of ``ts``, ``dur``, ``tid`` or ``pid``
                is absent. All absent members are named.
        """
        _check_required(raw, cls.REQUIRED_MEMBERS)
        raw_args = raw.get(EVENT_ARGUMENTS) or {}
        return cls(
            name=_optional_string(raw, EVENT_NAME),
            category=_optional_string(raw, EVENT_CATEGORY),
            start=Timestamp.of_micros(int(raw[EVENT_TIMESTAMP])),
            duration=duration_for_micros(int(raw[EVENT_DURATION])),
            thread_id=int(raw[EVENT_THREAD_ID]),
            process_id=int(raw[EVENT_PROCESS_ID]),
            args={str(key): _as_string(value) for key, value in raw_args.items()},
        )


def filter_by_category(
    events: Iterable[CompleteEvent], *categories: str
) -> Iterator[CompleteEvent]:
    """Yield the events whose category is one of *categories*."""
    wanted = set(categories)
    return (event for event in events if event.category in wanted)


# ---------------------------------------------------------------------------
# Counter and instant events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CounterEvent:
    """A sample of one or more counters (phase ``C``).

    All counters in ``args`` are summed into :attr:`total_value`.
    """

    REQUIRED_MEMBERS = (EVENT_NAME, EVENT_TIMESTAMP, EVENT_ARGUMENTS)

    name: str
    timestamp: Timestamp
    total_value: float

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> CounterEvent:
        _check_required(raw, cls.REQUIRED_MEMBERS)
        total = sum(float(value) for value in raw[EVENT_ARGUMENTS].values())
        return cls(
            name=_as_string(raw[EVENT_NAME]),
            timestamp=Timestamp.of_micros(int(raw[EVENT_TIMESTAMP])),
            total_value=total,
        )


@dataclass(frozen=True, slots=True)
class InstantEvent:
    """A point in time without duration (phase ``i``)."""

    REQUIRED_MEMBERS = (EVENT_CATEGORY, EVENT_NAME, EVENT_TIMESTAMP)

    category: str
    name: str
    timestamp: Timestamp

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> InstantEvent:
        _check_required(raw, cls.REQUIRED_MEMBERS)
        return cls(
            category=_as_string(raw[EVENT_CATEGORY]),
            name=_as_string(raw[EVENT_NAME]),
            timestamp=Timestamp.of_micros(int(raw[EVENT_TIMESTAMP])),
        )


# ---------------------------------------------------------------------------
# Cropped views
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PartialCompleteEvent:
    """A :class:`CompleteEvent` narrowed to ``[cropped_start, cropped_end]``.

    The cropped interval never extends beyond the source event.
    """

    complete_event: CompleteEvent
    cropped_start: Timestamp
    cropped_end: Timestamp

    def __post_init__(self) -> None:
        event = self.complete_event
        if self.cropped_start < event.start or self.cropped_end > event.end:
            raise PreconditionError(
                f"Cannot crop event [{event.start}, {event.end}] to"
                f" [{self.cropped_start}, {self.cropped_end}]."
            )

    @classmethod
    def uncropped(cls, event: CompleteEvent) -> PartialCompleteEvent:
        return cls(event, event.start, event.end)

    @property
    def cropped_duration(self) -> timedelta:
        return duration_between(self.cropped_start, self.cropped_end)

    @property
    def is_cropped(self) -> bool:
        """Whether either bound differs from the source event."""
        return (
            self.cropped_start != self.complete_event.start
            or self.cropped_end != self.complete_event.end
        )
