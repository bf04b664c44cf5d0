"""Tests for TraceProfile and load_profile."""

from __future__ import annotations

import gzip
from pathlib import Path

import pytest

from invocation_analyzer.core import DataManager
from invocation_analyzer.errors import DuplicateProviderError, InvalidProfileError
from invocation_analyzer.tracing import TraceProfile, load_profile
from tests.helpers.profile_builder import (
    ProfileBuilder,
    complete,
    counter,
)


class TestTraceProfile:
    def test_minimal(self) -> None:
        profile = TraceProfile(ProfileBuilder().build())
        assert profile.main_thread.name == "Main Thread"
        assert profile.critical_path is None
        assert profile.garbage_collector_thread is None
        assert profile.other_data == {"build_id": "test"}
        assert not profile.is_empty

    def test_missing_sections(self) -> None:
        with pytest.raises(InvalidProfileError, match="otherData"):
            TraceProfile({"traceEvents": []})
        with pytest.raises(InvalidProfileError, match="traceEvents"):
            TraceProfile({"otherData": {}})

    def test_malformed_sections(self) -> None:
        with pytest.raises(InvalidProfileError):
            TraceProfile({"otherData": [], "traceEvents": []})

    def test_missing_main_thread(self) -> None:
        with pytest.raises(InvalidProfileError, match="Main Thread"):
            TraceProfile({"otherData": {}, "traceEvents": []})

    def test_legacy_main_thread_name(self) -> None:
        profile = TraceProfile(ProfileBuilder(main_thread_name="grpc-command-3").build())
        assert profile.main_thread.name == "grpc-command-3"

    def test_events_without_pid_skipped(self) -> None:
        builder = ProfileBuilder().add({"ph": "X", "ts": 0, "dur": 1, "tid": 1})
        profile = TraceProfile(builder.build())
        assert profile.main_thread.complete_events == []

    def test_events_without_tid_grouped(self) -> None:
        builder = ProfileBuilder().add(
            counter("action count", 1, {"action": 2}),
            counter("action count", 2, {"action": 3}),
        )
        profile = TraceProfile(builder.build())
        thread = profile.counter_series_thread
        assert thread is not None
        assert thread.thread_id.thread_id is None
        assert [c.total_value for c in profile.action_counts] == [2.0, 3.0]

    def test_counter_series_on_main_thread(self) -> None:
        builder = ProfileBuilder().add(counter("action count", 1, {"action": 2}, tid=1))
        profile = TraceProfile(builder.build())
        assert profile.counter_series_thread is profile.main_thread

    def test_no_counter_series(self) -> None:
        profile = TraceProfile(ProfileBuilder().build())
        assert profile.counter_series_thread is None
        assert profile.action_counts == []

    def test_special_threads(self) -> None:
        builder = (
            ProfileBuilder()
            .with_critical_path(complete("action 'a'", "critical path component", 0, 1_000, tid=2))
            .with_garbage_collector(complete("major GC", "gc notification", 0, 50, tid=3))
        )
        profile = TraceProfile(builder.build())
        assert profile.critical_path is not None
        assert profile.critical_path.name == "Critical Path"
        assert profile.garbage_collector_thread is not None
        assert len(profile.threads) == 3

    def test_summary(self) -> None:
        builder = (
            ProfileBuilder()
            .add(complete("Launch Blaze", "build phase marker", 0, 10))
            .with_critical_path(complete("action 'a'", None, 0, 2_000_000, tid=2))
            .add(complete("other", "x", 0, 1, tid=9))
        )
        summary = TraceProfile(builder.build()).summary
        assert '"Main Thread"' in summary
        assert "CompleteEvents: 1" in summary
        assert "Other (aggregated)" in summary
        assert "Critical Path:" in summary
        assert "2000ms\taction 'a'" in summary

    def test_register_with_data_manager(self) -> None:
        dm = DataManager()
        profile = TraceProfile(ProfileBuilder().build())
        profile.register_with_data_manager(dm)
        assert dm.get_datum(TraceProfile) is profile
        with pytest.raises(DuplicateProviderError):
            TraceProfile(ProfileBuilder().build()).register_with_data_manager(dm)


class TestLoadProfile:
    def test_json(self, tmp_path: Path) -> None:
        path = ProfileBuilder().write(tmp_path / "profile.json")
        assert load_profile(path).main_thread.name == "Main Thread"

    def test_gzip(self, tmp_path: Path) -> None:
        path = ProfileBuilder().write(tmp_path / "profile.json.gz")
        assert load_profile(str(path)).main_thread.name == "Main Thread"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidProfileError, match="does not appear to be a file"):
            load_profile(tmp_path / "nope.json")

    def test_not_gzipped(self, tmp_path: Path) -> None:
        path = tmp_path / "profile.json.gz"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(InvalidProfileError, match="Could not read"):
            load_profile(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "profile.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidProfileError, match="Could not parse"):
            load_profile(path)

    def test_top_level_not_object(self, tmp_path: Path) -> None:
        path = tmp_path / "profile.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(InvalidProfileError):
            load_profile(path)

    def test_corrupt_gzip_payload(self, tmp_path: Path) -> None:
        path = tmp_path / "profile.gz"
        with gzip.open(path, "wb") as fh:
            fh.write(b"\xff\xfe\x00garbage")
        with pytest.raises(InvalidProfileError):
            load_profile(path)
