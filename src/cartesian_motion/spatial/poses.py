"""Define the 3D poses interpolated and composed when constructing Cartesian paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from cartesian_motion.geometry import Point3D
from cartesian_motion.spatial.frames import DEFAULT_FRAME
from cartesian_motion.spatial.rotations import EulerRPY, Quaternion

XYZ_RPY = Tuple[float, float, float, float, float, float]
"""Position (x, y, z) followed by fixed-frame Euler angles (roll, pitch, yaw)."""


@dataclass(frozen=True)
class Pose3D:
    """The position and orientation of a frame relative to a named reference frame."""

    position: Point3D
    orientation: Quaternion
    ref_frame: str = DEFAULT_FRAME

    def __matmul__(self, other: Pose3D) -> Pose3D:
        """Compose this pose with a pose expressed relative to it.

        pose_A_B @ pose_B_C yields pose_A_C, so the result takes this pose's reference frame.
            A relative end-effector goal is resolved this way.

        :param other: Pose expressed in the frame described by this pose
        :return: The same pose expressed in this pose's reference frame
        """
        if not isinstance(other, Pose3D):
            raise NotImplementedError(f"Cannot matrix-multiply Pose3D with: {other}")

        combined = self.to_homogeneous_matrix() @ other.to_homogeneous_matrix()
        return Pose3D.from_homogeneous_matrix(combined, self.ref_frame)

    def __str__(self) -> str:
        """Describe the pose by its XYZ-RPY values and reference frame."""
        values = ", ".join(f"{value:.3f}" for value in self.to_xyz_rpy())
        return f'Pose3D([{values}], ref_frame="{self.ref_frame}")'

    @classmethod
    def identity(cls, ref_frame: str = DEFAULT_FRAME) -> Pose3D:
        """Construct the pose coinciding with its reference frame."""
        return Pose3D(Point3D.identity(), Quaternion.identity(), ref_frame)

    @classmethod
    def from_xyz_rpy(
        cls,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        roll_rad: float = 0.0,
        pitch_rad: float = 0.0,
        yaw_rad: float = 0.0,
        ref_frame: str = DEFAULT_FRAME,
    ) -> Pose3D:
        """Construct a pose from a position (meters) and fixed-frame Euler angles (radians)."""
        orientation = EulerRPY(roll_rad, pitch_rad, yaw_rad).to_quaternion()
        return Pose3D(Point3D(x, y, z), orientation, ref_frame)

    def to_xyz_rpy(self) -> XYZ_RPY:
        """Collect the pose's position and Euler angles into a single 6-tuple."""
        return (*self.position.to_tuple(), *self.orientation.to_euler_rpy().to_tuple())

    @classmethod
    def from_homogeneous_matrix(cls, matrix: np.ndarray, ref_frame: str = DEFAULT_FRAME) -> Pose3D:
        """Construct the pose described by a 4x4 homogeneous transformation matrix."""
        if matrix.shape != (4, 4):
            raise ValueError(f"Expected a 4x4 matrix but received shape {matrix.shape}")

        position = Point3D.from_array(matrix[:3, 3])
        return Pose3D(position, Quaternion.from_homogeneous_matrix(matrix), ref_frame)

    def to_homogeneous_matrix(self) -> np.ndarray:
        """Construct the 4x4 homogeneous transformation matrix of the pose."""
        matrix = self.orientation.to_homogeneous_matrix()
        matrix[:3, 3] = self.position.to_array()
        return matrix

    def inverse(self, pose_frame: str) -> Pose3D:
        """Compute the pose of the reference frame relative to the frame this pose describes.

        :param pose_frame: Name of the frame described by this pose
        :return: Inverse pose, expressed relative to the given frame
        """
        inverse_matrix = np.linalg.inv(self.to_homogeneous_matrix())
        return Pose3D.from_homogeneous_matrix(inverse_matrix, pose_frame)

    def approx_equal(self, other: Pose3D, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Check whether two poses share a frame and approximately coincide."""
        return (
            self.ref_frame == other.ref_frame
            and self.position.approx_equal(other.position, rtol=rtol, atol=atol)
            and self.orientation.approx_equal(other.orientation, rtol=rtol, atol=atol)
        )
