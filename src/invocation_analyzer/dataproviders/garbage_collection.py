"""Garbage collection statistics."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from invocation_analyzer.core import DataProvider, SupplierSpec, memoized
from invocation_analyzer.dataproviders.views import GarbageCollectionStats
from invocation_analyzer.tracing import TraceProfile
from invocation_analyzer.tracing.constants import (
    CAT_GARBAGE_COLLECTION,
    COMPLETE_MAJOR_GARBAGE_COLLECTION,
)

EMPTY_REASON = "The profile does not include a garbage collector thread."


class GarbageCollectionStatsDataProvider(DataProvider):
    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [
            SupplierSpec.of(GarbageCollectionStats, memoized(self.get_garbage_collection_stats))
        ]

    def get_garbage_collection_stats(self) -> GarbageCollectionStats:
        profile = self.data_manager.get_datum(TraceProfile)
        gc_thread = profile.garbage_collector_thread
        if gc_thread is None:
            return GarbageCollectionStats.empty(EMPTY_REASON)
        total = sum(
            (
                e.duration
                for e in gc_thread.complete_events
                if e.name == COMPLETE_MAJOR_GARBAGE_COLLECTION
                and e.category == CAT_GARBAGE_COLLECTION
            ),
            timedelta(0),
        )
        return GarbageCollectionStats.of(total)
