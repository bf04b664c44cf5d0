"""Invocation analyzer error hierarchy."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCategory(StrEnum):
    """Category of error for classification and handling."""

    MISSING_INPUT = "missing_input"
    DUPLICATE_PROVIDER = "duplicate_provider"
    NULL_DATUM = "null_datum"
    INVALID_PROFILE = "invalid_profile"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


def type_name(datum_type: type) -> str:
    """Fully qualified name of *datum_type* for use in messages."""
    return f"{datum_type.__module__}.{datum_type.__qualname__}"


class AnalyzerError(Exception):
    """Base error for all recoverable analyzer exceptions."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.details: dict[str, Any] = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, category={self.category!r})"


class MissingInputError(AnalyzerError):
    """No provider has been registered for the requested datum type."""

    def __init__(self, datum_type: type) -> None:
        super().__init__(
            f'Missing data provider for class "{type_name(datum_type)}". Please register a'
            " DataProvider that supplies this type with the DataManager.",
            category=ErrorCategory.MISSING_INPUT,
        )
        self.datum_type = datum_type


class DuplicateProviderError(AnalyzerError):
    """Two providers declared a supplier for the same datum type."""

    def __init__(self, datum_type: type, existing: str, duplicate: str) -> None:
        super().__init__(
            f'Duplicate providers found for type "{type_name(datum_type)}": "{existing}"'
            f' already registered and trying to add "{duplicate}"!',
            category=ErrorCategory.DUPLICATE_PROVIDER,
            details={"existing": existing, "duplicate": duplicate},
        )
        self.datum_type = datum_type
        self.existing = existing
        self.duplicate = duplicate


class NullDatumError(AnalyzerError):
    """A registered supplier produced ``None`` instead of a datum."""

    def __init__(self, provider: str, datum_type: type) -> None:
        super().__init__(
            f'The DataProvider "{provider}" registered with the DataManager for supplying'
            f' "{type_name(datum_type)}" supplied None.',
            category=ErrorCategory.NULL_DATUM,
            details={"provider": provider},
        )
        self.provider = provider
        self.datum_type = datum_type


class InvalidProfileError(AnalyzerError):
    """The trace profile is structurally incomplete or cannot be decoded."""

    PREFIX = "This does not appear to be a valid profile."

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(
            f"{self.PREFIX} {message}",
            category=ErrorCategory.INVALID_PROFILE,
            **kwargs,
        )


class MissingMembersError(InvalidProfileError):
    """A raw trace event lacks one or more required members."""

    def __init__(self, missing_members: list[str]) -> None:
        super().__init__(
            f"Missing members: {', '.join(missing_members)}",
            details={"missing_members": list(missing_members)},
        )
        self.missing_members = list(missing_members)


class ConfigurationError(AnalyzerError):
    """Invalid or missing configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(message, category=ErrorCategory.CONFIGURATION)


class PreconditionError(RuntimeError):
    """A programming defect was detected.

    Not part of the :class:`AnalyzerError` hierarchy: bulk data views never
    swallow it and callers are not expected to recover from it.
    """
