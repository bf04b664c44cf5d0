"""Supplier specifications and memoization."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from invocation_analyzer.core.datum import Datum

T = TypeVar("T")
D = TypeVar("D", bound=Datum)

#: A zero-argument callable that computes a datum, possibly raising.
DatumSupplier = Callable[[], D]


@dataclass(frozen=True, slots=True)
class SupplierSpec(Generic[D]):
    """Binds a datum type to the supplier that produces exactly that type."""

    datum_type: type[D]
    supplier: DatumSupplier[D]

    @classmethod
    def of(cls, datum_type: type[D], supplier: DatumSupplier[D]) -> SupplierSpec[D]:
        return cls(datum_type, supplier)


class _MemoizedSupplier(Generic[T]):
    """Callable wrapper that runs its supplier to success at most once."""

    __slots__ = ("_supplier", "_lock", "_value")

    def __init__(self, supplier: Callable[[], T]) -> None:
        self._supplier = supplier
        self._lock = threading.Lock()
        self._value: T | None = None

    def __call__(self) -> T:
        value = self._value
        if value is not None:
            return value
        with self._lock:
            # Another caller may have filled the cache while we waited.
            if self._value is None:
                self._value = self._supplier()
            return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        state = "cached" if self._value is not None else "pending"
        return f"memoized({self._supplier!r}, {state})"


def memoized(supplier: Callable[[], T]) -> Callable[[], T]:
    """Return a thread-safe memoized version of *supplier*.

    Concurrent first callers block on a per-instance lock, so *supplier*
    completes successfully at most once and every caller observes the same
    value. Exceptions and ``None`` results are not cached; the next call
    retries.
    """
    return _MemoizedSupplier(supplier)
