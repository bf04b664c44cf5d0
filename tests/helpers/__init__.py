"""Shared test helpers for the invocation analyzer test suite."""

from __future__ import annotations

from tests.helpers.profile_builder import ProfileBuilder
from tests.helpers.sample_data import (
    AnotherDatum,
    SampleDatum,
    StaticProvider,
)

__all__ = ["AnotherDatum", "ProfileBuilder", "SampleDatum", "StaticProvider"]
