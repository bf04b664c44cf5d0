"""Build phase timing and total duration."""

from __future__ import annotations

import logging
from typing import Any

from invocation_analyzer.core import DataProvider, SupplierSpec, memoized
from invocation_analyzer.dataproviders.views import (
    PhaseDescription,
    PhaseDescriptions,
    TotalDuration,
)
from invocation_analyzer.errors import InvalidProfileError
from invocation_analyzer.temporal import Timestamp, duration_between
from invocation_analyzer.tracing import ProfilePhase, TraceProfile
from invocation_analyzer.tracing.constants import (
    CAT_BUILD_PHASE_MARKER,
    CAT_GENERAL_INFORMATION,
    INSTANT_FINISHING,
)

logger = logging.getLogger(__name__)

EMPTY_REASON_LAUNCH = (
    "The profile does not include a launch marker, which is required for determining the"
    " invocation's total duration. All profiles should include this data. Try creating a new"
    " profile."
)
EMPTY_REASON_FINISH = (
    "The profile does not include a completion marker, which is required for determining the"
    " invocation's total duration. All profiles should include this data. Try creating a new"
    " profile."
)


class PhasesDataProvider(DataProvider):
    """Supplies :class:`PhaseDescriptions` and :class:`TotalDuration`.

    The launch phase is a complete event on the main thread; every later phase
    starts at a ``build phase marker`` instant and the build ends at the
    ``Finishing`` instant.
    """

    def get_suppliers(self) -> list[SupplierSpec[Any]]:
        return [
            SupplierSpec.of(PhaseDescriptions, memoized(self.get_phase_descriptions)),
            SupplierSpec.of(TotalDuration, memoized(self.get_total_duration)),
        ]

    def _launch_start(self, profile: TraceProfile) -> Timestamp | None:
        for event in profile.main_thread.complete_events:
            if event.name == ProfilePhase.LAUNCH.display_name:
                return event.start
        return None

    def _finish_end(self, profile: TraceProfile) -> Timestamp | None:
        for instant in profile.main_thread.instants.get(CAT_GENERAL_INFORMATION, []):
            if instant.name == INSTANT_FINISHING:
                return instant.timestamp
        return None

    def get_total_duration(self) -> TotalDuration:
        profile = self.data_manager.get_datum(TraceProfile)
        launch_start = self._launch_start(profile)
        if launch_start is None:
            return TotalDuration.empty(EMPTY_REASON_LAUNCH)
        finish_end = self._finish_end(profile)
        if finish_end is None:
            return TotalDuration.empty(EMPTY_REASON_FINISH)
        return TotalDuration.of(duration_between(launch_start, finish_end))

    def get_phase_descriptions(self) -> PhaseDescriptions:
        """Split the invocation into phases at the phase markers.

        Raises:
            InvalidProfileError: If the launch or finishing marker is missing,
                or two markers share a timestamp.
        """
        profile = self.data_manager.get_datum(TraceProfile)
        launch_start = self._launch_start(profile)
        if launch_start is None:
            raise InvalidProfileError(
                f'Unable to find complete event named "{ProfilePhase.LAUNCH.display_name}".'
            )
        finish_end = self._finish_end(profile)
        if finish_end is None:
            raise InvalidProfileError(f'Unable to find instant event named "{INSTANT_FINISHING}".')

        start_to_phase: dict[Timestamp, ProfilePhase] = {}
        for marker in profile.main_thread.instants.get(CAT_BUILD_PHASE_MARKER, []):
            phase = ProfilePhase.parse(marker.name)
            if phase is None:
                logger.warning("Found unrecognized phase %s", marker.name)
                continue
            if marker.timestamp in start_to_phase:
                raise InvalidProfileError(
                    f"Two phase markers have the same timestamp {marker.timestamp}:"
                    f' "{phase.display_name}" and'
                    f' "{start_to_phase[marker.timestamp].display_name}"'
                )
            start_to_phase[marker.timestamp] = phase

        phases: dict[ProfilePhase, PhaseDescription] = {}
        previous_start = launch_start
        previous_phase = ProfilePhase.LAUNCH
        for start in sorted(start_to_phase):
            phases[previous_phase] = PhaseDescription.between(previous_start, start)
            previous_start = start
            previous_phase = start_to_phase[start]
        phases[ProfilePhase.FINISH] = PhaseDescription.between(previous_start, finish_end)
        return PhaseDescriptions(phases)
