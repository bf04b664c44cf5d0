"""Phases of a build invocation, as marked in the profile."""

from __future__ import annotations

from enum import Enum


class ProfilePhase(Enum):
    """Build phases in execution order.

    Values are the names of the matching ``build phase marker`` events.
    """

    LAUNCH = "Launch Blaze"
    INIT = "Initialize command"
    EVALUATE = "Evaluate target patterns"
    DEPENDENCIES = "Load and analyze dependencies"
    PREPARE = "Prepare for build"
    EXECUTE = "Build artifacts"
    FINISH = "Complete build"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def order(self) -> int:
        return _ORDER.index(self)

    @property
    def previous(self) -> ProfilePhase:
        """The phase before this one.

        Raises:
            ValueError: For the first phase.
        """
        if self.order == 0:
            raise ValueError(f"{self.value} is the first phase.")
        return _ORDER[self.order - 1]

    @property
    def next(self) -> ProfilePhase:
        """The phase after this one.

        Raises:
            ValueError: For the last phase.
        """
        if self.order == len(_ORDER) - 1:
            raise ValueError(f"{self.value} is the last phase.")
        return _ORDER[self.order + 1]

    @classmethod
    def parse(cls, name: str) -> ProfilePhase | None:
        """Return the phase whose marker is called *name*, if any."""
        try:
            return cls(name)
        except ValueError:
            return None


_ORDER: list[ProfilePhase] = list(ProfilePhase)
