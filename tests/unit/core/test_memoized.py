"""Tests for memoized suppliers and supplier specifications."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from invocation_analyzer.core import SupplierSpec, memoized
from tests.helpers.sample_data import SampleDatum


class TestMemoized:
    def test_runs_once(self) -> None:
        calls: list[int] = []

        def supplier() -> SampleDatum:
            calls.append(1)
            return SampleDatum("v")

        cached = memoized(supplier)
        assert cached() is cached()
        assert len(calls) == 1

    def test_failure_is_retried(self) -> None:
        attempts: list[int] = []

        def flaky() -> SampleDatum:
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first call fails")
            return SampleDatum("second")

        cached = memoized(flaky)
        with pytest.raises(RuntimeError, match="first call fails"):
            cached()
        assert cached().value == "second"
        assert cached().value == "second"
        assert len(attempts) == 2

    def test_none_is_not_cached(self) -> None:
        results = iter([None, SampleDatum("late")])
        cached = memoized(lambda: next(results))
        assert cached() is None
        assert cached() == SampleDatum("late")

    def test_concurrent_callers_share_one_result(self) -> None:
        workers = 32
        calls = 0
        lock = threading.Lock()
        release = threading.Event()

        def slow() -> SampleDatum:
            nonlocal calls
            with lock:
                calls += 1
            release.wait(timeout=5)
            return SampleDatum("shared")

        cached = memoized(slow)
        barrier = threading.Barrier(workers + 1)

        def call() -> SampleDatum:
            barrier.wait()
            return cached()

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(call) for _ in range(workers)]
            barrier.wait()
            release.set()
            results = [f.result(timeout=10) for f in futures]

        assert calls == 1
        assert all(r is results[0] for r in results)

    def test_repr_shows_state(self) -> None:
        cached = memoized(lambda: SampleDatum())
        assert "pending" in repr(cached)
        cached()
        assert "cached" in repr(cached)


class TestSupplierSpec:
    def test_of(self) -> None:
        spec = SupplierSpec.of(SampleDatum, SampleDatum)
        assert spec.datum_type is SampleDatum
        assert spec.supplier() == SampleDatum()

    def test_is_frozen(self) -> None:
        spec = SupplierSpec.of(SampleDatum, SampleDatum)
        with pytest.raises(AttributeError):
            spec.datum_type = SampleDatum  # type: ignore[misc]
