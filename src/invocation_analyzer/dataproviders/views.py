"""Data supplied by the built-in providers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import Self

from invocation_analyzer.core import Datum
from invocation_analyzer.errors import PreconditionError
from invocation_analyzer.temporal import Timestamp, duration_between, format_duration
from invocation_analyzer.tracing import CompleteEvent, PartialCompleteEvent, ProfilePhase, ThreadId

# ---------------------------------------------------------------------------
# Durations that may be unavailable
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class _OptionalDuration(Datum):
    """A duration, or the reason it could not be determined."""

    duration: timedelta | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.duration is None and not self.reason:
            raise PreconditionError(f"Empty {type(self).__name__} requires a reason.")
        if self.duration is not None and self.reason is not None:
            raise PreconditionError(f"{type(self).__name__} with a value cannot be empty.")

    @classmethod
    def of(cls, duration: timedelta) -> Self:
        return cls(duration=duration)

    @classmethod
    def empty(cls, reason: str) -> Self:
        return cls(reason=reason)

    @property
    def is_empty(self) -> bool:
        return self.duration is None

    @property
    def empty_reason(self) -> str | None:
        return self.reason

    @property
    def summary(self) -> str | None:
        return None if self.duration is None else format_duration(self.duration)


@dataclass(frozen=True, slots=True)
class TotalDuration(_OptionalDuration):
    DESCRIPTION = "The duration of the invocation as extracted from the profile."


@dataclass(frozen=True, slots=True)
class CriticalPathDuration(_OptionalDuration):
    DESCRIPTION = "The duration of the profile's critical path."


@dataclass(frozen=True, slots=True)
class CriticalPathQueuingDuration(_OptionalDuration):
    DESCRIPTION = "The duration of queuing within the profile's critical path."


@dataclass(frozen=True, slots=True)
class GarbageCollectionStats(_OptionalDuration):
    """Total time spent in major garbage collection."""

    DESCRIPTION = "The total duration of major garbage collection as extracted from the profile."

    @property
    def has_major_garbage_collection(self) -> bool:
        return self.duration is not None and self.duration > timedelta(0)

    @property
    def summary(self) -> str | None:
        if self.duration is None:
            return None
        if not self.has_major_garbage_collection:
            return "No major GC occurred"
        return f"Major GC duration of {format_duration(self.duration)}"


# ---------------------------------------------------------------------------
# Build phases
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PhaseDescription:
    start: Timestamp
    duration: timedelta

    @classmethod
    def between(cls, start: Timestamp, end: Timestamp) -> PhaseDescription:
        return cls(start, duration_between(start, end))

    @property
    def end(self) -> Timestamp:
        return self.start.plus(self.duration)


@dataclass(frozen=True, slots=True)
class PhaseDescriptions(Datum):
    """Timing of every build phase found in the profile."""

    DESCRIPTION = "The profile's various phases and their timing information."

    phases: Mapping[ProfilePhase, PhaseDescription] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "phases", MappingProxyType(dict(self.phases)))

    def get(self, phase: ProfilePhase) -> PhaseDescription | None:
        return self.phases.get(phase)

    def has(self, phase: ProfilePhase) -> bool:
        return phase in self.phases

    def get_or_closest_before(self, phase: ProfilePhase) -> PhaseDescription | None:
        """Description of *phase*, or of the nearest earlier phase that is present."""
        current: ProfilePhase | None = phase
        while current is not None:
            if current in self.phases:
                return self.phases[current]
            current = current.previous if current is not ProfilePhase.LAUNCH else None
        return None

    def get_or_closest_after(self, phase: ProfilePhase) -> PhaseDescription | None:
        """Description of *phase*, or of the nearest later phase that is present."""
        current: ProfilePhase | None = phase
        while current is not None:
            if current in self.phases:
                return self.phases[current]
            current = current.next if current is not ProfilePhase.FINISH else None
        return None

    @property
    def summary(self) -> str:
        duration_heading = "Duration"
        timestamp_heading = "Timestamp (us)"
        rows = [
            (format_duration(desc.duration), str(desc.start.micros), phase.display_name)
            for phase in ProfilePhase
            if (desc := self.phases.get(phase)) is not None
        ]
        duration_width = max([len(duration_heading), *(len(r[0]) for r in rows)])
        timestamp_width = max([len(timestamp_heading), *(len(r[1]) for r in rows)])
        lines = []
        for duration, start, name in [(duration_heading, timestamp_heading, "Description"), *rows]:
            lines.append(f"{duration:>{duration_width}}\t{start:>{timestamp_width}}\t{name}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Remote execution
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TotalQueuingDuration(Datum):
    DESCRIPTION = "The total time that was spent on queuing as extracted from the profile."

    duration: timedelta = timedelta(0)

    @property
    def summary(self) -> str:
        return format_duration(self.duration)


@dataclass(frozen=True, slots=True)
class QueuingObserved(Datum):
    DESCRIPTION = "Whether the profile includes queuing."

    observed: bool = False

    @property
    def summary(self) -> str:
        return str(self.observed).lower()


@dataclass(frozen=True, slots=True)
class RemoteExecutionUsed(Datum):
    DESCRIPTION = "Whether the profile includes events indicating that remote execution was used."

    used: bool = False

    @property
    def summary(self) -> str:
        return str(self.used).lower()


@dataclass(frozen=True, slots=True)
class RemoteCachingUsed(Datum):
    DESCRIPTION = "Whether the profile includes events indicating that remote caching was used."

    used: bool = False

    @property
    def summary(self) -> str:
        return str(self.used).lower()


# ---------------------------------------------------------------------------
# Parallelism
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EstimatedCoresUsed(Datum):
    """Cores used during execution, estimated from the evaluator threads that ran actions.

    ``gaps`` counts evaluator indices below the highest one that never ran an action.
    """

    DESCRIPTION = "The number of cores used for executing actions, estimated from the profile."

    cores: int | None = None
    gaps: int = 0
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.cores is None and not self.reason:
            raise PreconditionError("Empty EstimatedCoresUsed requires a reason.")

    @property
    def is_empty(self) -> bool:
        return self.cores is None

    @property
    def empty_reason(self) -> str | None:
        return self.reason

    @property
    def has_gaps(self) -> bool:
        return self.gaps > 0

    @property
    def summary(self) -> str | None:
        if self.cores is None:
            return None
        return f"{self.cores} cores (with {self.gaps} gaps)"


@dataclass(frozen=True, slots=True)
class Bottleneck:
    """A stretch of the build in which fewer actions ran than cores were used.

    ``overlapping_events`` are the action processing events that overlap the
    stretch at least partially.
    """

    start: Timestamp
    end: Timestamp
    sample_total: float
    sample_count: int
    overlapping_events: tuple[CompleteEvent, ...] = ()
    queuing_duration_by_thread: Mapping[ThreadId, timedelta] = field(
        default_factory=dict, hash=False
    )

    def __post_init__(self) -> None:
        queuing = MappingProxyType(dict(self.queuing_duration_by_thread))
        object.__setattr__(self, "queuing_duration_by_thread", queuing)

    @property
    def avg_action_count(self) -> float:
        return self.sample_total / self.sample_count

    @property
    def duration(self) -> timedelta:
        return duration_between(self.start, self.end)

    @property
    def max_queuing_duration(self) -> timedelta:
        """Largest queuing total found for any single thread."""
        return max(self.queuing_duration_by_thread.values(), default=timedelta(0))

    @property
    def partial_events(self) -> list[PartialCompleteEvent]:
        """Overlapping events cropped to the bottleneck."""
        return [
            PartialCompleteEvent(event, max(self.start, event.start), min(self.end, event.end))
            for event in self.overlapping_events
        ]


@dataclass(frozen=True, slots=True)
class ActionStats(Datum):
    DESCRIPTION = (
        "A list of bottlenecks, each of which include timing information and a list of actions"
        " that prevent more parallelization. Extracted from the profile."
    )

    bottlenecks: tuple[Bottleneck, ...] = ()
    reason: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.reason is not None

    @property
    def empty_reason(self) -> str | None:
        return self.reason

    @property
    def summary(self) -> str | None:
        if not self.bottlenecks:
            return None
        total = sum((b.duration for b in self.bottlenecks), timedelta(0))
        return (
            f"{len(self.bottlenecks)} bottlenecks found for a total duration of"
            f" {format_duration(total)}."
        )
