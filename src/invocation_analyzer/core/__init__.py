"""Core fact registry.

- :class:`Datum` -- the contract every fact implements.
- :class:`SupplierSpec` and :func:`memoized` -- binding a datum type to the
  function that computes it, at most once.
- :class:`DataProvider` -- a named unit that declares supplier specifications.
- :class:`DataManager` -- the registry that resolves datum requests.
"""

from __future__ import annotations

from invocation_analyzer.core.data_manager import DataByProvider, DataManager
from invocation_analyzer.core.datum import Datum
from invocation_analyzer.core.provider import DataProvider
from invocation_analyzer.core.supplier import DatumSupplier, SupplierSpec, memoized

__all__ = [
    "DataByProvider",
    "DataManager",
    "DataProvider",
    "Datum",
    "DatumSupplier",
    "SupplierSpec",
    "memoized",
]
