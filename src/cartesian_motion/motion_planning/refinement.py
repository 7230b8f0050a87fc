"""Define an adaptive refiner bounding each link's motion between consecutive path states."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from cartesian_motion.motion_planning.errors import SpaceJumpError
from cartesian_motion.motion_planning.interpolation import solve_intermediate_state
from cartesian_motion.motion_planning.link_motion import compute_swept_distance

if TYPE_CHECKING:
    from cartesian_motion.geometry import Point3D
    from cartesian_motion.kinematics import RobotModel, RobotState
    from cartesian_motion.motion_planning.config import CartesianPathConfig
    from cartesian_motion.motion_planning.path import ConfigurationPath

logger = logging.getLogger(__name__)

HALVING_REL_TOL = 0.01
"""Relative tolerance within which a bisection counts as halving a distance."""


def is_stalled(distance_m: float, halved_distance_m: float) -> bool:
    """Check whether a bisection failed to (approximately) halve the given distance."""
    half_m = distance_m / 2
    if halved_distance_m <= half_m:
        return False
    return not math.isclose(halved_distance_m, half_m, rel_tol=HALVING_REL_TOL)

MidpointSolver = Callable[["RobotState", "RobotState"], Optional["RobotState"]]
"""Solves for a state halfway between two states, or returns None if none exists."""

LinkDistanceFn = Callable[["RobotState", "RobotState", str, "Point3D"], float]
"""Bounds the displacement of a named link (with given extents) between two states."""


@dataclass(frozen=True)
class RefinementReport:
    """Summary of one link's refinement pass over a path."""

    link_name: str
    num_states: int
    """Number of states in the path after refinement."""

    num_inserted: int
    """Number of midpoint states inserted during the pass."""

    max_distance_m: float
    """Largest swept distance (meters) of the link between consecutive states after the pass."""


class AdaptiveRefiner:
    """Bisects path segments until a link's swept distance between neighbors is bounded.

    Each segment exceeding the critical distance is bisected by solving inverse kinematics at
        the end-effector pose halfway along it, seeded from the segment's earlier state. A
        bisection leaving clearly more than half of the distance counts as a stall, while an
        exact or approximate halving does not.

    The stall counter starts at zero for every pair of neighbors being bounded and resets to
        zero after any bisection that isn't a stall. A pair fails as a space jump once the
        counter reaches `max_stall_attempts`, i.e., after that many consecutive stalls.
    """

    def __init__(
        self,
        robot_model: RobotModel,
        config: CartesianPathConfig,
        midpoint_solver: MidpointSolver | None = None,
        distance_fn: LinkDistanceFn = compute_swept_distance,
    ) -> None:
        """Initialize the refiner for the given robot.

        :param robot_model: Model providing the extents of each link's geometry
        :param config: Parameters including the critical distance and stall limit
        :param midpoint_solver: Optional override for how segment midpoints are solved
        :param distance_fn: Function bounding a link's displacement between two states
        """
        self.robot_model = robot_model
        self.config = config
        self._solve_midpoint = midpoint_solver or self._solve_ik_midpoint
        self._distance_fn = distance_fn

    def _solve_ik_midpoint(self, state: RobotState, next_state: RobotState) -> RobotState | None:
        """Solve for the state placing the end-effector halfway between those of two states."""
        ee_link = self.config.end_effector_link
        return solve_intermediate_state(
            state,
            next_state.get_link_pose(ee_link),
            0.5,
            end_effector_link=ee_link,
            planning_group=self.config.planning_group,
            ik_timeout_s=self.config.ik_timeout_s,
        )

    def refine(self, path: ConfigurationPath, link_name: str) -> RefinementReport:
        """Refine the path until the named link's motion between neighbors is bounded.

        The refined sequence replaces the path's contents only if the whole pass succeeds.

        :param path: Path to be refined (must contain at least one state)
        :param link_name: Name of the link whose motion is bounded
        :return: Report summarizing the refinement pass
        :raises SpaceJumpError: If a segment cannot be bisected below the critical distance
        """
        states = path.snapshot()
        if not states:
            raise ValueError("Cannot refine an empty path")

        extents = self.robot_model.get_link_extents(link_name)
        threshold_m = self.config.critical_distance_m

        refined: list[RobotState] = [states[0]]
        max_distance_m = 0.0

        for next_state in states[1:]:
            # Stack of states still to be appended; its top always follows refined[-1]
            pending = [next_state]

            while pending:
                stall_count = 0
                distance_m = self._distance_fn(refined[-1], pending[-1], link_name, extents)

                while distance_m > threshold_m:
                    logger.warning("%s has too great translation: %f", link_name, distance_m)
                    midpoint = self._solve_midpoint(refined[-1], pending[-1])
                    if midpoint is None:
                        logger.error("Space jump of %s: no midpoint solution", link_name)
                        raise SpaceJumpError(link_name, len(refined) - 1, distance_m, True)

                    pending.append(midpoint)
                    halved_distance_m = self._distance_fn(refined[-1], midpoint, link_name, extents)

                    if is_stalled(distance_m, halved_distance_m):
                        stall_count += 1
                    else:
                        stall_count = 0

                    if stall_count >= self.config.max_stall_attempts:
                        logger.error("Space jump of %s: bisection stalled", link_name)
                        raise SpaceJumpError(link_name, len(refined) - 1, halved_distance_m, False)

                    distance_m = halved_distance_m

                refined.append(pending.pop())
                max_distance_m = max(max_distance_m, distance_m)
                logger.debug("%s translates: %f", link_name, distance_m)

        num_inserted = len(refined) - len(states)
        path.replace_states(refined)

        return RefinementReport(
            link_name=link_name,
            num_states=len(refined),
            num_inserted=num_inserted,
            max_distance_m=max_distance_m,
        )
