"""Define the interface expected of robot states supplied by a kinematics backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cartesian_motion.kinematics.configuration import Configuration
    from cartesian_motion.spatial import Pose3D


class RobotState(Protocol):
    """A complete state of a manipulator, able to compute forward and inverse kinematics.

    Robot states are treated as immutable values: solving IK yields a new state rather than
        modifying the state it was seeded from.
    """

    @property
    def joint_positions(self) -> Configuration:
        """Retrieve the positions (rad or m) of the robot's actuated joints."""
        ...

    def get_link_pose(self, link_name: str) -> Pose3D:
        """Compute the global pose of the named link in this state (forward kinematics)."""
        ...

    def solve_ik(
        self,
        planning_group: str,
        target_pose: Pose3D,
        link_name: str,
        timeout_s: float | None = None,
    ) -> RobotState | None:
        """Solve for a state placing the named link at the target pose (inverse kinematics).

        :param planning_group: Name of the joint group whose joints the solver may move
        :param target_pose: Global pose targeted for the link
        :param link_name: Name of the link driven to the target pose
        :param timeout_s: Optional limit (seconds) on the duration of the solve
        :return: New robot state seeded from this one, or None if no solution was found
        """
        ...
