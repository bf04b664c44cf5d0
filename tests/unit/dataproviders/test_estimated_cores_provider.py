"""Tests for EstimatedCoresDataProvider."""

from __future__ import annotations

import pytest

from invocation_analyzer.core import DataManager
from invocation_analyzer.dataproviders import EstimatedCoresDataProvider, EstimatedCoresUsed
from invocation_analyzer.errors import PreconditionError
from invocation_analyzer.tracing import TraceProfile
from tests.helpers.profile_builder import ProfileBuilder, complete


def _evaluator(builder: ProfileBuilder, index: int, *, tid: int, runs_actions: bool = True) -> None:
    category = "action processing" if runs_actions else "package creation"
    builder.with_thread(
        f"skyframe-evaluator {index}", tid, complete("a", category, 0, 10, tid=tid)
    )


def _cores(builder: ProfileBuilder) -> EstimatedCoresUsed:
    dm = DataManager()
    TraceProfile(builder.build()).register_with_data_manager(dm)
    EstimatedCoresDataProvider().register(dm)
    return dm.get_datum(EstimatedCoresUsed)


class TestEstimatedCoresUsed:
    def test_counts_evaluators_running_actions(self) -> None:
        builder = ProfileBuilder()
        for index in range(4):
            _evaluator(builder, index, tid=10 + index)
        _evaluator(builder, 4, tid=20, runs_actions=False)
        cores = _cores(builder)
        assert cores.cores == 4
        assert not cores.has_gaps
        assert cores.summary == "4 cores (with 0 gaps)"

    def test_gaps(self) -> None:
        builder = ProfileBuilder()
        _evaluator(builder, 0, tid=10)
        _evaluator(builder, 3, tid=11)
        cores = _cores(builder)
        assert cores.cores == 2
        assert cores.gaps == 2

    def test_other_thread_names_ignored(self) -> None:
        builder = ProfileBuilder().with_thread(
            "skyframe-evaluator-cpu-heavy-1", 10, complete("a", "action processing", 0, 1, tid=10)
        )
        cores = _cores(builder)
        assert cores.is_empty
        assert "action processing" in cores.empty_reason

    def test_empty_without_reason_is_defect(self) -> None:
        with pytest.raises(PreconditionError):
            EstimatedCoresUsed()
