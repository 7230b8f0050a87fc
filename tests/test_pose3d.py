"""Unit tests for Pose3D, a class representing poses in 3D space."""

import hypothesis.strategies as st
from hypothesis import given

from cartesian_motion.geometry import Point3D
from cartesian_motion.spatial import Pose3D

from .strategies.spatial_strategies import poses_3d


@given(poses_3d())
def test_pose3d_to_homogeneous_matrix_and_back(pose: Pose3D) -> None:
    """Verify that any Pose3D is unchanged after converting to and from a homogeneous matrix."""
    matrix = pose.to_homogeneous_matrix()
    result_pose = Pose3D.from_homogeneous_matrix(matrix, ref_frame=pose.ref_frame)

    assert matrix.shape == (4, 4)
    assert pose.approx_equal(result_pose, atol=1e-7)


@given(poses_3d())
def test_pose3d_identity_multiplication(pose: Pose3D) -> None:
    """Verify that any Pose3D is unchanged after multiplication by the identity pose."""
    identity_pose = Pose3D.identity()

    assert pose.approx_equal(identity_pose @ pose, atol=1e-7)
    assert pose.approx_equal(pose @ identity_pose, atol=1e-7)


@given(poses_3d(), st.text())
def test_pose3d_inverse_multiplication(pose: Pose3D, pose_frame: str) -> None:
    """Verify that multiplying any Pose3D by its inverse gives the identity transform."""
    inverse_pose = pose.inverse(pose_frame)
    left_product = inverse_pose @ pose
    right_product = pose @ inverse_pose

    # Expect that left-multiplying results in the pose's frame as the reference frame
    assert Pose3D.identity(pose_frame).approx_equal(left_product, atol=1e-6)
    assert Pose3D.identity(pose.ref_frame).approx_equal(right_product, atol=1e-6)


def test_relative_translation_is_rotated_by_pose() -> None:
    """Verify that composing a pose with a relative translation rotates the translation."""
    # Arrange - A pose at (1, 0, 0) yawed by 90 degrees, and a translation along its x-axis
    pose = Pose3D.from_xyz_rpy(x=1.0, yaw_rad=1.5707963267948966)
    relative = Pose3D.from_xyz_rpy(x=0.5)

    # Act/Assert - Expect the translation to be applied along the global y-axis
    composed = pose @ relative
    assert composed.position.approx_equal(Point3D(1.0, 0.5, 0.0), atol=1e-9)
    assert composed.orientation.approx_equal(pose.orientation)

