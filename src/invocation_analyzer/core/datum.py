"""The datum contract shared by every fact in the registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar


class Datum(ABC):
    """An immutable piece of computed or extracted information.

    A datum's identity is its concrete class: at most one provider may supply
    each subclass. A datum may report itself as *empty* (not applicable to the
    analysed trace) together with a reason; empty data still satisfy requests.
    """

    __slots__ = ()

    #: Static description of the kind of data, independent of the value.
    DESCRIPTION: ClassVar[str] = ""

    @property
    def description(self) -> str:
        return self.DESCRIPTION

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def empty_reason(self) -> str | None:
        """Why the datum is empty, or ``None`` if it is not."""
        return None

    @property
    @abstractmethod
    def summary(self) -> str | None:
        """Value-dependent summary for display; ``None`` when empty."""
        ...
