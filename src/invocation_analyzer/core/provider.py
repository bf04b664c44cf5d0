"""Data provider base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from invocation_analyzer.errors import PreconditionError

if TYPE_CHECKING:
    from invocation_analyzer.core.data_manager import DataManager
    from invocation_analyzer.core.supplier import SupplierSpec


class DataProvider(ABC):
    """A named unit that supplies one or more datum types.

    Suppliers may pull other data through :attr:`data_manager` while they
    compute, which forms the implicit dependency graph between providers.

    Usage::

        class TotalsProvider(DataProvider):
            def get_suppliers(self) -> list[SupplierSpec[Any]]:
                return [SupplierSpec.of(Totals, memoized(self._totals))]

            def _totals(self) -> Totals:
                profile = self.data_manager.get_datum(TraceProfile)
                ...

        TotalsProvider().register(data_manager)
    """

    def __init__(self) -> None:
        self._data_manager: DataManager | None = None

    @property
    def name(self) -> str:
        """Identity used in error messages and when grouping data by provider."""
        return type(self).__name__

    def register(self, data_manager: DataManager) -> None:
        """Bind this provider to *data_manager* and register its suppliers.

        Raises:
            PreconditionError: If the provider is already registered.
            DuplicateProviderError: If another provider already supplies one
                of this provider's datum types.
        """
        if self._data_manager is not None:
            raise PreconditionError(f"{self.name} is already registered with a DataManager.")
        self._data_manager = data_manager
        data_manager.register_provider(self)

    @property
    def data_manager(self) -> DataManager:
        """The manager this provider is registered with.

        Raises:
            PreconditionError: If accessed before :meth:`register`.
        """
        if self._data_manager is None:
            raise PreconditionError(
                f"{self.name} tried to access DataManager before it was registered."
            )
        return self._data_manager

    @abstractmethod
    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        """Return the supplier specifications of every datum type provided."""
        ...
