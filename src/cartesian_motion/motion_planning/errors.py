"""Define the failures that terminate construction of a Cartesian path."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cartesian_motion.spatial import Pose3D


class FailureKind(Enum):
    """Tag identifying why construction of a Cartesian path failed."""

    IK_FAILURE = "ik_failure"
    SPACE_JUMP = "space_jump"
    COLLISION = "collision"


class PathConstructionError(Exception):
    """Base class for unrecoverable failures while constructing a Cartesian path."""

    kind: FailureKind


class IkFailureError(PathConstructionError):
    """No inverse kinematics solution was found for an interpolated pose."""

    kind = FailureKind.IK_FAILURE

    def __init__(self, step_index: int, target_pose: Pose3D) -> None:
        """Record the interpolation step and the pose that could not be reached."""
        self.step_index = step_index
        self.target_pose = target_pose
        super().__init__(f"No IK solution for interpolation step {step_index}: {target_pose}")


class SpaceJumpError(PathConstructionError):
    """A link's motion between consecutive states could not be bounded by bisection."""

    kind = FailureKind.SPACE_JUMP

    def __init__(
        self,
        link_name: str,
        segment_index: int,
        distance_m: float,
        caused_by_ik_failure: bool,
    ) -> None:
        """Describe where the discontinuity was detected.

        :param link_name: Name of the link whose motion could not be bounded
        :param segment_index: Index (into the path) of the first state of the offending segment
        :param distance_m: Last swept distance (meters) measured for the segment
        :param caused_by_ik_failure: True if a bisection midpoint had no IK solution,
            False if bisection stopped converging
        """
        self.link_name = link_name
        self.segment_index = segment_index
        self.distance_m = distance_m
        self.caused_by_ik_failure = caused_by_ik_failure

        cause = "midpoint has no IK solution" if caused_by_ik_failure else "bisection stalled"
        super().__init__(
            f"Space jump of link '{link_name}' after state {segment_index} "
            f"({distance_m:.5f} m, {cause})",
        )


class CollisionDetectedError(PathConstructionError):
    """A state along the path is in collision."""

    kind = FailureKind.COLLISION

    def __init__(self, state_index: int) -> None:
        """Record the index (into the validated path) of the colliding state."""
        self.state_index = state_index
        super().__init__(f"Collision detected at path state {state_index}")
