"""Estimate of the cores used for executing actions."""

from __future__ import annotations

import re
from typing import Any

from invocation_analyzer.core import DataProvider, SupplierSpec, memoized
from invocation_analyzer.dataproviders.views import EstimatedCoresUsed
from invocation_analyzer.tracing import TraceProfile
from invocation_analyzer.tracing.constants import CAT_ACTION_PROCESSING

# Execution phase evaluator threads are named "skyframe-evaluator <index>".
SKYFRAME_EVALUATOR = re.compile(r"skyframe-evaluator\s(\d+)")

EMPTY_REASON = (
    'The profile does not include any evaluator threads with events of category "'
    + CAT_ACTION_PROCESSING
    + '", which are required for estimating the cores used. Try analyzing a profile that'
    " processes actions, for example a build or test."
)


class EstimatedCoresDataProvider(DataProvider):
    """Supplies :class:`EstimatedCoresUsed`.

    Every core runs one evaluator thread during execution, so the number of
    evaluator threads that processed actions approximates the cores used.
    """

    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [SupplierSpec.of(EstimatedCoresUsed, memoized(self.get_estimated_cores_used))]

    def get_estimated_cores_used(self) -> EstimatedCoresUsed:
        profile = self.data_manager.get_datum(TraceProfile)
        indices: set[int] = set()
        for thread in profile.iter_threads():
            match = SKYFRAME_EVALUATOR.fullmatch(thread.name or "")
            if match is None:
                continue
            if any(e.category == CAT_ACTION_PROCESSING for e in thread.complete_events):
                indices.add(int(match.group(1)))
        if not indices:
            return EstimatedCoresUsed(reason=EMPTY_REASON)
        gaps = max(indices) + 1 - len(indices)
        return EstimatedCoresUsed(cores=len(indices), gaps=gaps)
