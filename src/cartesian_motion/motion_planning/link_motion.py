"""Define functions bounding the motion of a rigid link between two robot states."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from cartesian_motion.spatial.distances import euclidean_distance_3d_m

if TYPE_CHECKING:
    from cartesian_motion.geometry import Point3D
    from cartesian_motion.kinematics import RobotState
    from cartesian_motion.spatial import Pose3D


def swept_distance_bound(pose_a: Pose3D, pose_b: Pose3D, link_extents: Point3D) -> float:
    """Estimate the distance traveled by any point of a rigid link moving between two poses.

    The rotational sweep is measured as r * sin(theta), where theta is the angle between the
        orientations and the radius r is the distance of the link frame from the global origin
        plus the diagonal of the link's bounding box. The translation of the link frame is
        added to the sweep.

    :param pose_a: Global pose of the link in the first state
    :param pose_b: Global pose of the link in the second state
    :param link_extents: (x,y,z) extents of the link's bounding box
    :return: Nonnegative estimate (meters) of the link's displacement
    :raises ValueError: If the poses are expressed in different reference frames
    """
    translation_m = euclidean_distance_3d_m(pose_a, pose_b)
    theta_rad = pose_a.orientation.angular_distance_rad(pose_b.orientation)

    radius_m = pose_a.position.norm + link_extents.norm
    return translation_m + radius_m * float(np.sin(theta_rad))


def compute_swept_distance(
    state_a: RobotState,
    state_b: RobotState,
    link_name: str,
    link_extents: Point3D,
) -> float:
    """Bound the displacement (meters) of the named link between two robot states."""
    return swept_distance_bound(
        state_a.get_link_pose(link_name),
        state_b.get_link_pose(link_name),
        link_extents,
    )
