"""Define a function validating that no state along a path is in collision."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cartesian_motion.motion_planning.errors import CollisionDetectedError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cartesian_motion.kinematics import CollisionChecker, RobotState

logger = logging.getLogger(__name__)


def validate_collision_free(
    states: Sequence[RobotState],
    collision_checker: CollisionChecker,
    planning_group: str,
) -> None:
    """Verify that none of the given states is in collision, checking them in order.

    :param states: Sequence of robot states (only read, never modified)
    :param collision_checker: Planning scene evaluating whether a state collides
    :param planning_group: Name of the joint group checked for collisions
    :raises CollisionDetectedError: Identifying the index of the first colliding state
    """
    for index, state in enumerate(states):
        if collision_checker.is_state_colliding(state, planning_group):
            logger.error("Collision during the path validation at state %d", index)
            raise CollisionDetectedError(index)

    logger.debug("Validated %d states as collision-free", len(states))
