"""Type-indexed, lazily evaluated datum registry.

Providers register their suppliers during a single-threaded setup phase.
Afterwards any number of threads may request data concurrently; suppliers
wrapped with :func:`~invocation_analyzer.core.supplier.memoized` collapse
concurrent first requests into a single computation.

Dependency cycles between providers are not detected and end in
``RecursionError``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, TypeVar

from invocation_analyzer.core.datum import Datum
from invocation_analyzer.core.provider import DataProvider
from invocation_analyzer.core.supplier import DatumSupplier, SupplierSpec
from invocation_analyzer.errors import (
    DuplicateProviderError,
    MissingInputError,
    NullDatumError,
    PreconditionError,
    type_name,
)

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=Datum)

#: Data grouped by provider name, then by datum type.
DataByProvider = dict[str, dict[type[Datum], Datum]]


@dataclass(frozen=True, slots=True)
class _SupplierEntry:
    provider: str
    supplier: DatumSupplier[Any]


class DataManager:
    """Resolves datum requests to the suppliers registered for them."""

    def __init__(self) -> None:
        self._suppliers: dict[type[Datum], _SupplierEntry] = {}
        self._used_suppliers: dict[type[Datum], _SupplierEntry] = {}
        self._used_lock = threading.Lock()

    @property
    def registered_types(self) -> list[type[Datum]]:
        return list(self._suppliers)

    def register_provider(self, provider: DataProvider) -> None:
        """Track every supplier declared by *provider*.

        Usually called through :meth:`DataProvider.register`. Suppliers added
        before a duplicate is found stay registered.

        Raises:
            DuplicateProviderError: If another provider already supplies one of
                the declared datum types.
        """
        for spec in provider.get_suppliers():
            self._add_supplier(provider.name, spec)
        logger.debug("Registered data provider %s", provider.name)

    def get_datum(self, datum_type: type[D]) -> D:
        """Return the datum of *datum_type*, computing it if necessary.

        Raises:
            MissingInputError: If no provider supplies *datum_type*.
            NullDatumError: If the supplier returned ``None``.
            PreconditionError: If the supplier returned a different type.
        """
        entry = self._suppliers.get(datum_type)
        if entry is None:
            raise MissingInputError(datum_type)

        datum = entry.supplier()
        if datum is None:
            raise NullDatumError(entry.provider, datum_type)
        if type(datum) is not datum_type:
            raise PreconditionError(
                f'The provider "{entry.provider}" registered a supplier that claims to produce a'
                f' "{type_name(datum_type)}" but actually produces a'
                f' "{type_name(type(datum))}"!'
            )

        with self._used_lock:
            self._used_suppliers[datum_type] = entry
        return datum

    def get_all_data_by_provider(self) -> DataByProvider:
        """Return every datum that can be computed, grouped by provider.

        Data whose supplier fails are left out.

        Raises:
            PreconditionError: If a supplier reveals a programming defect, such
                as producing a different datum type. Defects are never skipped.
        """
        return self._organize_by_provider(dict(self._suppliers))

    def get_used_data_by_provider(self) -> DataByProvider:
        """Return the data that have been requested so far, grouped by provider.

        Raises:
            PreconditionError: Under the same conditions as
                :meth:`get_all_data_by_provider`.
        """
        with self._used_lock:
            used = dict(self._used_suppliers)
        return self._organize_by_provider(used)

    def _organize_by_provider(self, source: dict[type[Datum], _SupplierEntry]) -> DataByProvider:
        result: DataByProvider = {}
        for datum_type, entry in source.items():
            try:
                datum = self.get_datum(datum_type)
            except PreconditionError:
                raise
            except Exception as exc:
                logger.debug(
                    "Skipping %s from %s: %s", type_name(datum_type), entry.provider, exc
                )
                continue
            result.setdefault(entry.provider, {})[datum_type] = datum
        return result

    def _add_supplier(self, provider: str, spec: SupplierSpec[Any]) -> None:
        existing = self._suppliers.get(spec.datum_type)
        if existing is not None:
            logger.warning(
                "Duplicate provider for %s: %s already registered, rejecting %s",
                type_name(spec.datum_type),
                existing.provider,
                provider,
            )
            raise DuplicateProviderError(spec.datum_type, existing.provider, provider)
        self._suppliers[spec.datum_type] = _SupplierEntry(provider, spec.supplier)
