"""Critical path duration and the share of it spent queuing for remote execution."""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from invocation_analyzer.core import DataProvider, SupplierSpec, memoized
from invocation_analyzer.dataproviders.views import (
    CriticalPathDuration,
    CriticalPathQueuingDuration,
)
from invocation_analyzer.temporal import get_micros
from invocation_analyzer.tracing import (
    CompleteEvent,
    PartialCompleteEvent,
    TraceProfile,
    filter_by_category,
)
from invocation_analyzer.tracing.constants import (
    CAT_ACTION_PROCESSING,
    CAT_REMOTE_EXECUTION_QUEUING_TIME,
)

CRITICAL_PATH_ACTION = re.compile(r"^action '(.*)'$")

EMPTY_REASON_DURATION = (
    "The profile does not include a critical path, which is required for determining its"
    " duration. Try analyzing a profile that processes actions, for example a build or test."
)
EMPTY_REASON_QUEUING = (
    "The profile does not include a critical path, which is required for determining whether"
    " it has queuing. Try analyzing a profile that processes actions, for example a build or"
    " test."
)


class CriticalPathDurationDataProvider(DataProvider):
    """Supplies the summed duration of the critical path entries."""

    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [SupplierSpec.of(CriticalPathDuration, memoized(self.get_critical_path_duration))]

    def get_critical_path_duration(self) -> CriticalPathDuration:
        profile = self.data_manager.get_datum(TraceProfile)
        critical_path = profile.critical_path
        if critical_path is None:
            return CriticalPathDuration.empty(EMPTY_REASON_DURATION)
        total = sum((e.duration for e in critical_path.complete_events), timedelta(0))
        return CriticalPathDuration.of(total)


class CriticalPathQueuingDurationDataProvider(DataProvider):
    """Supplies how long critical path actions were queued for remote execution.

    Critical path entries are summaries; each ``action '<name>'`` entry is
    matched against the ``action processing`` event of the same name on the
    thread that ran it. Queuing events on that thread within the matched
    window are summed.
    """

    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [
            SupplierSpec.of(
                CriticalPathQueuingDuration, memoized(self.get_critical_path_queuing_duration)
            )
        ]

    def get_critical_path_queuing_duration(self) -> CriticalPathQueuingDuration:
        profile = self.data_manager.get_datum(TraceProfile)
        critical_path = profile.critical_path
        if critical_path is None:
            return CriticalPathQueuingDuration.empty(EMPTY_REASON_QUEUING)

        all_events = [e for thread in profile.iter_threads() for e in thread.complete_events]
        processing = list(filter_by_category(all_events, CAT_ACTION_PROCESSING))

        windows: list[PartialCompleteEvent] = []
        for entry in critical_path.complete_events:
            match = CRITICAL_PATH_ACTION.match(entry.name or "")
            if match is None:
                continue
            window = _match_entry(entry, match.group(1), processing)
            if window is not None:
                windows.append(window)

        total = timedelta(0)
        for event in filter_by_category(all_events, CAT_REMOTE_EXECUTION_QUEUING_TIME):
            if any(_within(event, window) for window in windows):
                total += event.duration
        return CriticalPathQueuingDuration.of(total)


def _ends_within(entry: CompleteEvent, event: CompleteEvent) -> bool:
    return entry.end.almost_equals(event.end) or entry.end > event.end


def _match_entry(
    entry: CompleteEvent, action_name: str, candidates: list[CompleteEvent]
) -> PartialCompleteEvent | None:
    """Find the processing event behind a critical path entry, cropped to the entry's end.

    Candidates must start no later than the entry (give or take the tolerance).
    The end is not required to match: the profile writer has been seen to end
    critical path entries before the matching processing event. Candidates
    ending within the entry are preferred, the longest first; otherwise the one
    overshooting least wins.
    """
    matching = [
        e
        for e in candidates
        if e.name == action_name and (entry.start.almost_equals(e.start) or entry.start > e.start)
    ]
    if not matching:
        return None

    def rank(event: CompleteEvent) -> tuple[int, int]:
        if _ends_within(entry, event):
            return (0, -get_micros(event.duration))
        return (1, event.end.micros)

    best = min(matching, key=rank)
    cropped_end = max(best.start, min(best.end, entry.end))
    return PartialCompleteEvent(best, best.start, cropped_end)


def _within(event: CompleteEvent, window: PartialCompleteEvent) -> bool:
    source = window.complete_event
    if event.thread_id != source.thread_id or event.process_id != source.process_id:
        return False
    if event.start < window.cropped_start:
        return False
    return event.end <= window.cropped_end or event.end.almost_equals(window.cropped_end)
