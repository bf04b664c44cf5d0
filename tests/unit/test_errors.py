"""Tests for the error hierarchy."""

from __future__ import annotations

import pytest

from invocation_analyzer.errors import (
    AnalyzerError,
    ConfigurationError,
    DuplicateProviderError,
    ErrorCategory,
    InvalidProfileError,
    MissingInputError,
    MissingMembersError,
    NullDatumError,
    PreconditionError,
    type_name,
)
from tests.helpers.sample_data import SampleDatum


class TestAnalyzerError:
    def test_defaults(self) -> None:
        err = AnalyzerError("boom")
        assert str(err) == "boom"
        assert err.category == ErrorCategory.INTERNAL
        assert err.details == {}

    def test_repr(self) -> None:
        err = ConfigurationError("bad")
        assert repr(err).startswith("ConfigurationError('bad'")

    def test_precondition_is_not_analyzer_error(self) -> None:
        assert not issubclass(PreconditionError, AnalyzerError)
        assert issubclass(PreconditionError, RuntimeError)


class TestSpecificErrors:
    def test_type_name(self) -> None:
        assert type_name(SampleDatum) == "tests.helpers.sample_data.SampleDatum"

    def test_missing_input(self) -> None:
        err = MissingInputError(SampleDatum)
        assert err.datum_type is SampleDatum
        assert err.category == ErrorCategory.MISSING_INPUT
        assert "SampleDatum" in str(err)

    def test_duplicate_provider(self) -> None:
        err = DuplicateProviderError(SampleDatum, "First", "Second")
        assert err.existing == "First"
        assert err.duplicate == "Second"
        assert '"First" already registered' in str(err)

    def test_null_datum(self) -> None:
        err = NullDatumError("Broken", SampleDatum)
        assert err.provider == "Broken"
        assert err.category == ErrorCategory.NULL_DATUM
        assert "supplied None" in str(err)

    def test_invalid_profile_prefix(self) -> None:
        err = InvalidProfileError("Oops.")
        assert str(err) == "This does not appear to be a valid profile. Oops."
        assert err.category == ErrorCategory.INVALID_PROFILE

    def test_missing_members(self) -> None:
        err = MissingMembersError(["ts", "dur"])
        assert err.missing_members == ["ts", "dur"]
        assert str(err).endswith("Missing members: ts, dur")
        assert err.details == {"missing_members": ["ts", "dur"]}

    @pytest.mark.parametrize(
        "err",
        [
            MissingInputError(SampleDatum),
            DuplicateProviderError(SampleDatum, "a", "b"),
            NullDatumError("p", SampleDatum),
            MissingMembersError(["ts"]),
            ConfigurationError("x"),
        ],
    )
    def test_all_are_analyzer_errors(self, err: AnalyzerError) -> None:
        assert isinstance(err, AnalyzerError)
