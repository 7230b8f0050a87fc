"""Define the interface expected of collision checkers over robot states."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cartesian_motion.kinematics.robot_state import RobotState


class CollisionChecker(Protocol):
    """A planning scene able to evaluate whether robot states are in collision."""

    def is_state_colliding(self, state: RobotState, planning_group: str) -> bool:
        """Evaluate whether the given state collides with itself or the environment."""
        ...
