"""Queuing and remote execution or caching usage."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from invocation_analyzer.core import DataProvider, SupplierSpec, memoized
from invocation_analyzer.dataproviders.views import (
    QueuingObserved,
    RemoteCachingUsed,
    RemoteExecutionUsed,
    TotalQueuingDuration,
)
from invocation_analyzer.tracing import CompleteEvent, TraceProfile, filter_by_category
from invocation_analyzer.tracing.constants import (
    CAT_REMOTE_ACTION_CACHE_CHECK,
    CAT_REMOTE_EXECUTION_PROCESS_WALL_TIME,
    CAT_REMOTE_EXECUTION_QUEUING_TIME,
    CAT_REMOTE_EXECUTION_SETUP,
)


def _all_complete_events(profile: TraceProfile) -> list[CompleteEvent]:
    return [e for thread in profile.iter_threads() for e in thread.complete_events]


class TotalQueuingDurationDataProvider(DataProvider):
    """Supplies the summed remote execution queuing time and whether any occurred."""

    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [
            SupplierSpec.of(TotalQueuingDuration, memoized(self.get_total_queuing_duration)),
            SupplierSpec.of(QueuingObserved, memoized(self.get_queuing_observed)),
        ]

    def get_total_queuing_duration(self) -> TotalQueuingDuration:
        profile = self.data_manager.get_datum(TraceProfile)
        events = filter_by_category(
            _all_complete_events(profile), CAT_REMOTE_EXECUTION_QUEUING_TIME
        )
        return TotalQueuingDuration(sum((e.duration for e in events), timedelta(0)))

    def get_queuing_observed(self) -> QueuingObserved:
        total = self.data_manager.get_datum(TotalQueuingDuration)
        return QueuingObserved(total.duration > timedelta(0))


class RemoteExecutionUsedDataProvider(DataProvider):
    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [SupplierSpec.of(RemoteExecutionUsed, memoized(self.get_remote_execution_used))]

    def get_remote_execution_used(self) -> RemoteExecutionUsed:
        profile = self.data_manager.get_datum(TraceProfile)
        events = filter_by_category(
            _all_complete_events(profile),
            CAT_REMOTE_EXECUTION_SETUP,
            CAT_REMOTE_EXECUTION_PROCESS_WALL_TIME,
            CAT_REMOTE_EXECUTION_QUEUING_TIME,
        )
        return RemoteExecutionUsed(any(True for _ in events))


class RemoteCachingUsedDataProvider(DataProvider):
    """Supplies whether remote caching was used.

    Remote execution without remote caching is so unusual that it is treated
    as caching being used, even if no cache check was recorded.
    """

    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [SupplierSpec.of(RemoteCachingUsed, memoized(self.get_remote_caching_used))]

    def get_remote_caching_used(self) -> RemoteCachingUsed:
        if self.data_manager.get_datum(RemoteExecutionUsed).used:
            return RemoteCachingUsed(True)
        profile = self.data_manager.get_datum(TraceProfile)
        events = filter_by_category(_all_complete_events(profile), CAT_REMOTE_ACTION_CACHE_CHECK)
        return RemoteCachingUsed(any(True for _ in events))
