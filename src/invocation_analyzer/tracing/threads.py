"""Per-thread grouping of trace events."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from invocation_analyzer.tracing.constants import (
    EVENT_ARGUMENTS,
    EVENT_NAME,
    EVENT_PHASE,
    EVENT_TIMESTAMP,
    METADATA_THREAD_NAME,
    METADATA_THREAD_SORT_INDEX,
    PHASE_COMPLETE,
    PHASE_COUNTER,
    PHASE_INSTANT,
    PHASE_INSTANT_LEGACY,
    PHASE_METADATA,
)
from invocation_analyzer.tracing.events import CompleteEvent, CounterEvent, InstantEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ThreadId:
    """Process id plus thread id; ``thread_id`` is ``None`` for events without ``tid``."""

    process_id: int
    thread_id: int | None = None

    def __str__(self) -> str:
        return f"processId: {self.process_id}, threadId: {self.thread_id}"


class ProfileThread:
    """The events recorded for one :class:`ThreadId`.

    Events are added while the profile is parsed and are read-only afterwards.
    """

    def __init__(self, thread_id: ThreadId) -> None:
        self.thread_id = thread_id
        self.name: str | None = None
        self.sort_index: int | None = None
        self.extra_metadata: list[dict[str, Any]] = []
        self._extra_events: list[dict[str, Any]] = []
        self._complete_events: list[CompleteEvent] = []
        self._counts: dict[str, list[CounterEvent]] = defaultdict(list)
        self._instants: dict[str, list[InstantEvent]] = defaultdict(list)

    def __repr__(self) -> str:
        return (
            f"ProfileThread(thread_id={self.thread_id!r}, name={self.name!r},"
            f" complete_events={len(self._complete_events)}, counts={len(self._counts)},"
            f" instants={len(self._instants)}, extra_events={len(self._extra_events)})"
        )

    def add_event(self, raw: dict[str, Any]) -> bool:
        """Parse *raw* and add it to this thread.

        Returns ``False`` if the event could not be parsed. Events with an
        unknown phase are kept as extra events.
        """
        try:
            self._add_event(raw)
        except Exception as exc:
            logger.debug("Skipping malformed event on %s: %s", self.thread_id, exc)
            return False
        return True

    def _add_event(self, raw: dict[str, Any]) -> None:
        phase = raw[EVENT_PHASE]
        if phase == PHASE_COMPLETE:
            self._complete_events.append(CompleteEvent.from_dict(raw))
        elif phase in (PHASE_INSTANT, PHASE_INSTANT_LEGACY):
            instant = InstantEvent.from_dict(raw)
            self._instants[instant.category].append(instant)
        elif phase == PHASE_COUNTER:
            counter = CounterEvent.from_dict(raw)
            self._counts[counter.name].append(counter)
        elif phase == PHASE_METADATA:
            self._add_metadata(raw)
        else:
            self._extra_events.append(raw)

    def _add_metadata(self, raw: dict[str, Any]) -> None:
        name = raw[EVENT_NAME]
        if name == METADATA_THREAD_NAME:
            self.name = str(raw[EVENT_ARGUMENTS]["name"])
        elif name == METADATA_THREAD_SORT_INDEX:
            self.sort_index = int(raw[EVENT_ARGUMENTS]["sort_index"])
        else:
            self.extra_metadata.append(raw)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def complete_events(self) -> list[CompleteEvent]:
        """Complete events ordered by start."""
        return sorted(self._complete_events, key=lambda e: e.start)

    @property
    def counts(self) -> dict[str, list[CounterEvent]]:
        """Counter events by counter name, each list ordered by timestamp."""
        return {
            name: sorted(events, key=lambda e: e.timestamp)
            for name, events in self._counts.items()
        }

    @property
    def instants(self) -> dict[str, list[InstantEvent]]:
        """Instant events by category, each list ordered by timestamp."""
        return {
            category: sorted(events, key=lambda e: e.timestamp)
            for category, events in self._instants.items()
        }

    @property
    def extra_events(self) -> list[dict[str, Any]]:
        return sorted(self._extra_events, key=lambda e: e.get(EVENT_TIMESTAMP, 0))
