"""Define the mutable sequence of robot states built during Cartesian path construction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from cartesian_motion.kinematics import RobotState


class PathStage(Enum):
    """Stages of a path's lifecycle, in the order they are reached."""

    EMPTY = 0
    COARSE = 1
    REFINING = 2
    VALIDATED = 3
    FAILED = 4


@dataclass(frozen=True)
class PathStatus:
    """The lifecycle stage of a path and, while refining, the index of the current link."""

    stage: PathStage
    link_index: int | None = None

    def __str__(self) -> str:
        """Return a human-readable description of the status."""
        if self.stage == PathStage.REFINING:
            return f"REFINING({self.link_index})"
        return self.stage.name

    @property
    def is_terminal(self) -> bool:
        """Check whether the status admits no further transitions."""
        return self.stage in (PathStage.VALIDATED, PathStage.FAILED)

    def can_transition_to(self, new_status: PathStatus) -> bool:
        """Check whether moving to the given status never returns to an earlier status."""
        if self.is_terminal:
            return False
        if new_status.stage == PathStage.FAILED:
            return True
        if new_status.stage == PathStage.REFINING and self.stage == PathStage.REFINING:
            return (new_status.link_index or 0) > (self.link_index or 0)
        return new_status.stage.value > self.stage.value


class ConfigurationPath:
    """An ordered sequence of robot states tracing a motion, with its lifecycle status.

    Once the start state has been added, the path is never empty.
    """

    def __init__(self) -> None:
        """Initialize an empty path."""
        self._states: list[RobotState] = []
        self._status = PathStatus(PathStage.EMPTY)

    def __len__(self) -> int:
        """Return the number of states in the path."""
        return len(self._states)

    def __iter__(self) -> Iterator[RobotState]:
        """Provide an iterator over the path's states in traversal order."""
        return iter(self._states)

    def __getitem__(self, index: int) -> RobotState:
        """Retrieve the state at the given position in the path."""
        return self._states[index]

    @property
    def status(self) -> PathStatus:
        """Retrieve the current lifecycle status of the path."""
        return self._status

    def transition_to(self, new_status: PathStatus) -> None:
        """Advance the path to a new lifecycle status.

        :raises RuntimeError: If the transition would return to an earlier status
        """
        if not self._status.can_transition_to(new_status):
            raise RuntimeError(f"Invalid path transition from {self._status} to {new_status}")
        self._status = new_status

    def extend(self, states: Iterable[RobotState]) -> None:
        """Append the given states to the end of the path."""
        self._states.extend(states)

    def replace_states(self, states: Sequence[RobotState]) -> None:
        """Replace the path's contents with a refined sequence sharing its first and last states.

        :raises ValueError: If the new sequence would change the path's endpoints
        """
        if not states:
            raise ValueError("Cannot replace the states of a path with an empty sequence")
        same_start = not self._states or states[0] is self._states[0]
        same_end = not self._states or states[-1] is self._states[-1]
        if not (same_start and same_end):
            raise ValueError("Refined states must keep the path's start and end states")
        self._states = list(states)

    def snapshot(self) -> tuple[RobotState, ...]:
        """Return an immutable copy of the path's current sequence of states."""
        return tuple(self._states)
