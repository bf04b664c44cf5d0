"""Data providers shipped with the analyzer."""

from __future__ import annotations

from invocation_analyzer.core import DataProvider
from invocation_analyzer.dataproviders.action_stats import ActionStatsDataProvider
from invocation_analyzer.dataproviders.critical_path import (
    CriticalPathDurationDataProvider,
    CriticalPathQueuingDurationDataProvider,
)
from invocation_analyzer.dataproviders.estimated_cores import EstimatedCoresDataProvider
from invocation_analyzer.dataproviders.garbage_collection import (
    GarbageCollectionStatsDataProvider,
)
from invocation_analyzer.dataproviders.phases import PhasesDataProvider
from invocation_analyzer.dataproviders.remote_execution import (
    RemoteCachingUsedDataProvider,
    RemoteExecutionUsedDataProvider,
    TotalQueuingDurationDataProvider,
)
from invocation_analyzer.dataproviders.views import (
    ActionStats,
    Bottleneck,
    CriticalPathDuration,
    CriticalPathQueuingDuration,
    EstimatedCoresUsed,
    GarbageCollectionStats,
    PhaseDescription,
    PhaseDescriptions,
    QueuingObserved,
    RemoteCachingUsed,
    RemoteExecutionUsed,
    TotalDuration,
    TotalQueuingDuration,
)


def get_all_data_providers() -> list[DataProvider]:
    """Fresh, unregistered instances of every built-in provider."""
    return [
        PhasesDataProvider(),
        CriticalPathDurationDataProvider(),
        CriticalPathQueuingDurationDataProvider(),
        GarbageCollectionStatsDataProvider(),
        EstimatedCoresDataProvider(),
        ActionStatsDataProvider(),
        TotalQueuingDurationDataProvider(),
        RemoteExecutionUsedDataProvider(),
        RemoteCachingUsedDataProvider(),
    ]


__all__ = [
    "ActionStats",
    "ActionStatsDataProvider",
    "Bottleneck",
    "CriticalPathDuration",
    "CriticalPathDurationDataProvider",
    "CriticalPathQueuingDuration",
    "CriticalPathQueuingDurationDataProvider",
    "EstimatedCoresDataProvider",
    "EstimatedCoresUsed",
    "GarbageCollectionStats",
    "GarbageCollectionStatsDataProvider",
    "PhaseDescription",
    "PhaseDescriptions",
    "PhasesDataProvider",
    "QueuingObserved",
    "RemoteCachingUsed",
    "RemoteCachingUsedDataProvider",
    "RemoteExecutionUsed",
    "RemoteExecutionUsedDataProvider",
    "TotalDuration",
    "TotalQueuingDuration",
    "TotalQueuingDurationDataProvider",
    "get_all_data_providers",
]
