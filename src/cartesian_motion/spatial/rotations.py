"""Define the orientation types used to interpolate end-effector poses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from pyquaternion import Quaternion as Q
from trimesh.transformations import euler_from_quaternion, quaternion_from_euler

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray


@dataclass(frozen=True)
class EulerRPY:
    """Fixed-frame roll, pitch, and yaw angles (radians) applied about the x, y, then z axes."""

    roll_rad: float
    pitch_rad: float
    yaw_rad: float

    def to_tuple(self) -> tuple[float, float, float]:
        """Collect the angles into a (roll, pitch, yaw) tuple."""
        return (float(self.roll_rad), float(self.pitch_rad), float(self.yaw_rad))

    def to_quaternion(self) -> Quaternion:
        """Compute the unit quaternion performing the same rotation."""
        w, x, y, z = quaternion_from_euler(self.roll_rad, self.pitch_rad, self.yaw_rad, axes="sxyz")
        return Quaternion(x=x, y=y, z=z, w=w)


@dataclass
class Quaternion:
    """An orientation stored as a unit quaternion, normalized on construction."""

    x: float
    y: float
    z: float
    w: float

    def __post_init__(self) -> None:
        """Scale the quaternion to unit length."""
        norm = float(np.linalg.norm(self.to_array()))
        if norm == 0:
            raise ValueError(f"A zero quaternion has no orientation: {self}")

        self.x, self.y, self.z, self.w = (float(v) / norm for v in self.to_array())

    @classmethod
    def _from_pyquaternion(cls, q: Q) -> Quaternion:
        """Convert from the pyquaternion representation, which stores w first."""
        return Quaternion(q.x, q.y, q.z, q.w)

    def _to_pyquaternion(self) -> Q:
        """Convert into the pyquaternion representation, which stores w first."""
        return Q(self.w, self.x, self.y, self.z)

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Compose two rotations using the Hamilton product (self applied after other)."""
        if not isinstance(other, Quaternion):
            raise TypeError(f"Cannot multiply a Quaternion with a {type(other)}: {other}.")
        return Quaternion._from_pyquaternion(self._to_pyquaternion() * other._to_pyquaternion())

    def conjugate(self) -> Quaternion:
        """Compute the conjugate, which for a unit quaternion is the inverse rotation."""
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def angular_distance_rad(self, other: Quaternion) -> float:
        """Compute the angle (radians, in [0, pi]) of the rotation between two orientations.

        The angle is 2 * atan2(|v|, |w|) for the relative rotation (v, w) = self * other^-1.
            Taking |w| treats a quaternion and its negation as the same orientation.

        Reference: https://math.stackexchange.com/a/167828
        """
        relative = self * other.conjugate()
        vector_norm = float(np.linalg.norm([relative.x, relative.y, relative.z]))
        return 2.0 * float(np.arctan2(vector_norm, abs(relative.w)))

    def slerp(self, other: Quaternion, fraction: float) -> Quaternion:
        """Interpolate from this orientation toward another at constant angular velocity.

        :param other: Orientation reached when the fraction equals one
        :param fraction: Interpolation parameter in [0, 1]
        :return: Orientation along the shortest arc between the two orientations
        """
        if not 0.0 <= fraction <= 1.0:
            raise ValueError(f"Slerp fraction must be within [0, 1], got {fraction}")

        q = Q.slerp(self._to_pyquaternion(), other._to_pyquaternion(), amount=fraction)
        return Quaternion._from_pyquaternion(q)

    @classmethod
    def identity(cls) -> Quaternion:
        """Construct the orientation of a frame aligned with its reference frame."""
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(cls, axis: Sequence[float], angle_rad: float) -> Quaternion:
        """Construct the rotation by an angle (radians) about an axis (normalized internally)."""
        q = Q(axis=np.asarray(axis, dtype=np.float64), angle=angle_rad)
        return Quaternion._from_pyquaternion(q)

    def to_array(self) -> NDArray[np.float64]:
        """Collect the components into a NumPy array ordered [x, y, z, w]."""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    def to_euler_rpy(self) -> EulerRPY:
        """Compute fixed-frame roll, pitch, and yaw angles performing the same rotation."""
        roll, pitch, yaw = euler_from_quaternion([self.w, self.x, self.y, self.z], axes="sxyz")
        return EulerRPY(roll, pitch, yaw)

    @classmethod
    def from_homogeneous_matrix(cls, matrix: NDArray[np.float64]) -> Quaternion:
        """Extract the rotation of a 4x4 homogeneous transformation matrix."""
        if matrix.shape != (4, 4):
            raise ValueError(f"Expected a 4x4 homogeneous matrix, got shape {matrix.shape}")
        return Quaternion._from_pyquaternion(Q(matrix=matrix[:3, :3], atol=1e-07))

    def to_homogeneous_matrix(self) -> NDArray[np.float64]:
        """Construct the 4x4 homogeneous transformation matrix of this rotation (no translation)."""
        return self._to_pyquaternion().transformation_matrix

    def approx_equal(self, other: Quaternion, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Check whether two quaternions represent approximately the same orientation.

        Negated quaternions are considered equal, as they encode the same rotation.
        """
        ours = self.to_array()
        theirs = other.to_array()
        return bool(
            np.allclose(ours, theirs, rtol=rtol, atol=atol)
            or np.allclose(-ours, theirs, rtol=rtol, atol=atol),
        )
