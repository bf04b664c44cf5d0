"""Trace event format parsing and build profile model."""

from __future__ import annotations

from invocation_analyzer.tracing.events import (
    CompleteEvent,
    CounterEvent,
    InstantEvent,
    PartialCompleteEvent,
    filter_by_category,
)
from invocation_analyzer.tracing.loader import load_profile
from invocation_analyzer.tracing.phases import ProfilePhase
from invocation_analyzer.tracing.profile import TraceProfile, TraceProfileProvider
from invocation_analyzer.tracing.threads import ProfileThread, ThreadId

__all__ = [
    "CompleteEvent",
    "CounterEvent",
    "InstantEvent",
    "PartialCompleteEvent",
    "ProfilePhase",
    "ProfileThread",
    "ThreadId",
    "TraceProfile",
    "TraceProfileProvider",
    "filter_by_category",
    "load_profile",
]
