"""The parsed trace profile, the root datum every provider starts from."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from invocation_analyzer.core import DataManager, DataProvider, Datum, SupplierSpec
from invocation_analyzer.errors import InvalidProfileError
from invocation_analyzer.temporal import format_duration
from invocation_analyzer.tracing.constants import (
    COUNTER_ACTION_COUNT,
    EVENT_PROCESS_ID,
    EVENT_THREAD_ID,
    SECTION_OTHER_DATA,
    SECTION_TRACE_EVENTS,
    THREAD_CRITICAL_PATH,
    THREAD_GARBAGE_COLLECTOR,
    THREAD_MAIN,
    THREAD_MAIN_LEGACY_PREFIX,
)
from invocation_analyzer.tracing.events import CounterEvent
from invocation_analyzer.tracing.threads import ProfileThread, ThreadId

logger = logging.getLogger(__name__)

# Keeps thread names roughly aligned in the summary.
_THREAD_NAME_WIDTH = len('"Garbage Collector"') + 1


def is_main_thread(thread: ProfileThread) -> bool:
    name = thread.name
    if not name:
        return False
    return name == THREAD_MAIN or name.startswith(THREAD_MAIN_LEGACY_PREFIX)


def is_garbage_collector_thread(thread: ProfileThread) -> bool:
    return thread.name == THREAD_GARBAGE_COLLECTOR


def is_critical_path_thread(thread: ProfileThread) -> bool:
    return thread.name == THREAD_CRITICAL_PATH


class TraceProfile(Datum):
    """A build profile in trace event format, grouped by thread.

    Raises:
        InvalidProfileError: If a section or the main thread is missing, or
            the sections have the wrong shape.
    """

    DESCRIPTION = "The profile written by the build tool."

    def __init__(self, raw: Mapping[str, Any]) -> None:
        if SECTION_OTHER_DATA not in raw or SECTION_TRACE_EVENTS not in raw:
            raise InvalidProfileError(
                f'JSON file missing "{SECTION_OTHER_DATA}" and/or "{SECTION_TRACE_EVENTS}".'
            )
        other_data = raw[SECTION_OTHER_DATA]
        events = raw[SECTION_TRACE_EVENTS]
        if not isinstance(other_data, Mapping) or not isinstance(events, list):
            raise InvalidProfileError("Could not parse the profile sections.")

        self._other_data = {str(key): str(value) for key, value in other_data.items()}
        self._threads: dict[ThreadId, ProfileThread] = {}

        skipped = 0
        for event in events:
            if not isinstance(event, Mapping):
                skipped += 1
                continue
            try:
                process_id = int(event[EVENT_PROCESS_ID])
            except (KeyError, TypeError, ValueError):
                skipped += 1
                continue
            try:
                thread_id: int | None = int(event[EVENT_THREAD_ID])
            except (KeyError, TypeError, ValueError):
                thread_id = None
            key = ThreadId(process_id, thread_id)
            thread = self._threads.get(key)
            if thread is None:
                thread = self._threads[key] = ProfileThread(key)
            if not thread.add_event(dict(event)):
                skipped += 1
        if skipped:
            logger.debug("Skipped %d malformed trace events", skipped)

        if not any(is_main_thread(t) for t in self._threads.values()):
            raise InvalidProfileError(f'JSON file missing "{THREAD_MAIN}".')

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> TraceProfile:
        return cls(raw)

    # ------------------------------------------------------------------
    # Threads
    # ------------------------------------------------------------------

    @property
    def other_data(self) -> dict[str, str]:
        return dict(self._other_data)

    @property
    def threads(self) -> list[ProfileThread]:
        return list(self._threads.values())

    def iter_threads(self) -> Iterator[ProfileThread]:
        return iter(self._threads.values())

    @property
    def main_thread(self) -> ProfileThread:
        return next(t for t in self._threads.values() if is_main_thread(t))

    @property
    def critical_path(self) -> ProfileThread | None:
        return next((t for t in self._threads.values() if is_critical_path_thread(t)), None)

    @property
    def garbage_collector_thread(self) -> ProfileThread | None:
        return next(
            (t for t in self._threads.values() if is_garbage_collector_thread(t)), None
        )

    @property
    def counter_series_thread(self) -> ProfileThread | None:
        """The thread holding counter series such as the action count.

        Newer profiles write counters without a ``tid``; older ones put them
        on the main thread.
        """
        for thread in self._threads.values():
            if thread.thread_id.thread_id is None and COUNTER_ACTION_COUNT in thread.counts:
                return thread
        main = self.main_thread
        if COUNTER_ACTION_COUNT in main.counts:
            return main
        return None

    @property
    def action_counts(self) -> list[CounterEvent]:
        thread = self.counter_series_thread
        if thread is None:
            return []
        return thread.counts.get(COUNTER_ACTION_COUNT, [])

    # ------------------------------------------------------------------
    # Datum
    # ------------------------------------------------------------------

    @property
    def summary(self) -> str:
        lines = ["Threads:"]
        lines.append(_thread_line(self.main_thread))
        critical_path = self.critical_path
        if critical_path is not None:
            lines.append(_thread_line(critical_path))
        gc_thread = self.garbage_collector_thread
        if gc_thread is not None:
            lines.append(_thread_line(gc_thread))

        special = (is_main_thread, is_critical_path_thread, is_garbage_collector_thread)
        others = [t for t in self._threads.values() if not any(check(t) for check in special)]
        lines.append(
            _format_thread_line(
                "Other (aggregated)",
                sum(len(t.complete_events) for t in others),
                sum(len(t.counts) for t in others),
                sum(len(t.instants) for t in others),
                sum(len(t.extra_events) for t in others),
            )
        )

        if critical_path is not None and critical_path.complete_events:
            events = critical_path.complete_events
            heading = "Duration"
            width = max(len(heading), *(len(format_duration(e.duration)) for e in events))
            lines.append("")
            lines.append("Critical Path:")
            lines.append(f"{heading:>{width}}\tDescription")
            for event in events:
                lines.append(f"{format_duration(event.duration):>{width}}\t{event.name}")
        return "\n".join(lines)

    def register_with_data_manager(self, data_manager: DataManager) -> None:
        """Register a provider that supplies this profile.

        Raises:
            DuplicateProviderError: If a profile is already registered.
        """
        TraceProfileProvider(self).register(data_manager)


class TraceProfileProvider(DataProvider):
    """Supplies an already parsed :class:`TraceProfile`."""

    def __init__(self, profile: TraceProfile) -> None:
        super().__init__()
        self._profile = profile

    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [SupplierSpec.of(TraceProfile, lambda: self._profile)]


def _thread_line(thread: ProfileThread) -> str:
    return _format_thread_line(
        f'"{thread.name}"',
        len(thread.complete_events),
        len(thread.counts),
        len(thread.instants),
        len(thread.extra_events),
    )


def _format_thread_line(
    label: str, complete_events: int, counts: int, instants: int, extra_events: int
) -> str:
    parts = [label.ljust(_THREAD_NAME_WIDTH)]
    for title, value in (
        ("CompleteEvents", complete_events),
        ("Counts", counts),
        ("Instants", instants),
        ("Extra", extra_events),
    ):
        if value > 0:
            parts.append(f"{title}: {value}")
    return "\t".join(parts)
