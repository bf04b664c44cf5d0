"""Bottlenecks: stretches in which fewer actions ran than cores were available."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from invocation_analyzer.core import DataProvider, SupplierSpec, memoized
from invocation_analyzer.dataproviders.views import ActionStats, Bottleneck, EstimatedCoresUsed
from invocation_analyzer.temporal import Timestamp, duration_between
from invocation_analyzer.tracing import CompleteEvent, ThreadId, TraceProfile, filter_by_category
from invocation_analyzer.tracing.constants import (
    CAT_ACTION_PROCESSING,
    CAT_REMOTE_EXECUTION_QUEUING_TIME,
)

EMPTY_REASON_ACTION_COUNTS = (
    "The profile does not include an action count series, which is required for finding"
    " bottlenecks. Try analyzing a profile that processes actions, for example a build or test."
)


@dataclass(slots=True)
class _BottleneckBuilder:
    start: Timestamp
    end: Timestamp
    sample_total: float = 0.0
    sample_count: int = 0
    events: list[CompleteEvent] = field(default_factory=list)
    queuing: dict[ThreadId, timedelta] = field(default_factory=dict)

    def add_sample(self, timestamp: Timestamp, value: float) -> None:
        self.end = timestamp
        self.sample_total += value
        self.sample_count += 1

    def overlaps(self, event: CompleteEvent) -> bool:
        return not (event.start > self.end or event.end < self.start)

    def add_queuing(self, event: CompleteEvent) -> None:
        # Only the part of the queuing inside the bottleneck counts.
        partial = duration_between(max(self.start, event.start), min(self.end, event.end))
        thread = ThreadId(event.process_id, event.thread_id)
        self.queuing[thread] = self.queuing.get(thread, timedelta(0)) + partial

    def build(self) -> Bottleneck:
        return Bottleneck(
            start=self.start,
            end=self.end,
            sample_total=self.sample_total,
            sample_count=self.sample_count,
            overlapping_events=tuple(self.events),
            queuing_duration_by_thread=self.queuing,
        )


class ActionStatsDataProvider(DataProvider):
    """Supplies :class:`ActionStats` from the action count series.

    A bottleneck spans consecutive samples whose action count is below the
    estimated cores used. It starts and ends at the first and last such sample.
    """

    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [SupplierSpec.of(ActionStats, memoized(self.get_action_stats))]

    def get_action_stats(self) -> ActionStats:
        profile = self.data_manager.get_datum(TraceProfile)
        action_counts = profile.action_counts
        if not action_counts:
            return ActionStats(reason=EMPTY_REASON_ACTION_COUNTS)
        cores_used = self.data_manager.get_datum(EstimatedCoresUsed)
        if cores_used.cores is None:
            return ActionStats(reason=cores_used.empty_reason)

        builders: list[_BottleneckBuilder] = []
        current: _BottleneckBuilder | None = None
        for sample in action_counts:
            if sample.total_value < cores_used.cores:
                if current is None:
                    current = _BottleneckBuilder(sample.timestamp, sample.timestamp)
                    builders.append(current)
                current.add_sample(sample.timestamp, sample.total_value)
            else:
                current = None

        if builders:
            events = [e for thread in profile.iter_threads() for e in thread.complete_events]
            for event in filter_by_category(
                events, CAT_ACTION_PROCESSING, CAT_REMOTE_EXECUTION_QUEUING_TIME
            ):
                for builder in builders:
                    if not builder.overlaps(event):
                        continue
                    if event.category == CAT_ACTION_PROCESSING:
                        builder.events.append(event)
                    else:
                        builder.add_queuing(event)
        return ActionStats(tuple(builder.build() for builder in builders))
