"""Define functions to interpolate end-effector poses and resolve them into robot states."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from cartesian_motion.motion_planning.errors import IkFailureError
from cartesian_motion.spatial import Pose3D

if TYPE_CHECKING:
    from cartesian_motion.geometry import Point3D
    from cartesian_motion.kinematics import RobotState

logger = logging.getLogger(__name__)


def interpolate_pose(start_pose: Pose3D, target_pose: Pose3D, fraction: float) -> Pose3D:
    """Interpolate between two poses, using slerp for orientation and a lerp for position.

    :param start_pose: Pose returned when the fraction equals zero
    :param target_pose: Pose returned when the fraction equals one
    :param fraction: Interpolation parameter in [0, 1]
    :return: Interpolated pose, expressed in the start pose's reference frame
    """
    orientation = start_pose.orientation.slerp(target_pose.orientation, fraction)
    position = (1.0 - fraction) * start_pose.position + fraction * target_pose.position
    return Pose3D(position, orientation, start_pose.ref_frame)


def resolve_target_pose(start_pose: Pose3D, goal_pose: Pose3D, global_frame: bool) -> Pose3D:
    """Express a goal pose globally, composing it with the start pose if it is relative."""
    return goal_pose if global_frame else start_pose @ goal_pose


def compute_num_steps(start_position: Point3D, goal_position: Point3D, step_m: float) -> int:
    """Compute how many whole interpolation steps of the given length span two positions."""
    if step_m <= 0:
        raise ValueError(f"Interpolation step must be positive, got {step_m}")
    return int(np.floor(start_position.distance_to(goal_position) / step_m))


def solve_intermediate_state(
    state: RobotState,
    target_pose: Pose3D,
    fraction: float,
    *,
    end_effector_link: str,
    planning_group: str,
    ik_timeout_s: float | None = None,
) -> RobotState | None:
    """Solve for the state placing the end-effector partway from its current pose to a target.

    :param state: State whose end-effector pose starts the interpolation (and seeds the IK)
    :param target_pose: Global end-effector pose reached when the fraction equals one
    :param fraction: Interpolation parameter in [0, 1]
    :return: Solved robot state, or None if the interpolated pose has no IK solution
    """
    start_pose = state.get_link_pose(end_effector_link)
    pose = interpolate_pose(start_pose, target_pose, fraction)
    return state.solve_ik(planning_group, pose, end_effector_link, ik_timeout_s)


def interpolate_cartesian_path(
    start_state: RobotState,
    goal_pose: Pose3D,
    num_steps: int,
    *,
    end_effector_link: str,
    planning_group: str,
    global_frame: bool = True,
    ik_timeout_s: float | None = None,
) -> list[RobotState]:
    """Interpolate a sequence of robot states moving the end-effector toward a goal pose.

    Each intermediate pose is solved with inverse kinematics seeded from the previous state,
        which biases consecutive solutions to remain close in joint space.

    :param start_state: State at the beginning of the motion (first element of the result)
    :param goal_pose: End-effector pose at the end of the motion
    :param num_steps: Number of interpolation steps (the result has num_steps + 1 states)
    :param end_effector_link: Name of the link whose pose is interpolated
    :param planning_group: Name of the joint group used to solve inverse kinematics
    :param global_frame: Whether the goal is global (True) or relative to the start pose (False)
    :param ik_timeout_s: Optional limit (seconds) on each inverse kinematics solve
    :return: List of robot states beginning with the start state
    :raises IkFailureError: If any interpolated pose has no IK solution
    """
    if num_steps < 0:
        raise ValueError(f"Number of interpolation steps cannot be negative, got {num_steps}")

    states = [start_state]
    if num_steps == 0:
        return states

    start_pose = start_state.get_link_pose(end_effector_link)
    target_pose = resolve_target_pose(start_pose, goal_pose, global_frame)

    for step in range(1, num_steps + 1):
        pose = interpolate_pose(start_pose, target_pose, step / num_steps)
        solved = states[-1].solve_ik(planning_group, pose, end_effector_link, ik_timeout_s)
        if solved is None:
            logger.error("Impossible to create whole path: no IK solution at step %d", step)
            raise IkFailureError(step, pose)
        states.append(solved)

    return states
