"""Define 3D points, used both for positions and for the extents of link geometry."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import NDArray


@dataclass(frozen=True)
class Point3D:
    """An (x,y,z) position or displacement (meters)."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        """Iterate over the x, y, and z coordinates in order."""
        yield from astuple(self)

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D.from_array(self.to_array() + other.to_array())

    def __sub__(self, other: Point3D) -> Point3D:
        return Point3D.from_array(self.to_array() - other.to_array())

    def __mul__(self, scalar: float) -> Point3D:
        """Scale every coordinate by the given factor (e.g., to interpolate positions)."""
        return Point3D.from_array(self.to_array() * scalar)

    __rmul__ = __mul__

    @classmethod
    def identity(cls) -> Point3D:
        """Construct the origin, i.e., the point of a zero translation."""
        return Point3D(0.0, 0.0, 0.0)

    @property
    def norm(self) -> float:
        """Compute the point's Euclidean distance (meters) from the origin."""
        return float(np.linalg.norm(self.to_array()))

    def distance_to(self, other: Point3D) -> float:
        """Compute the straight-line distance (meters) to another point."""
        return (self - other).norm

    @classmethod
    def from_array(cls, arr: NDArray) -> Point3D:
        """Construct a point from a NumPy array holding three coordinates."""
        flat = np.asarray(arr, dtype=np.float64).reshape(-1)
        if flat.shape != (3,):
            raise ValueError(f"Cannot construct Point3D from an array of shape {np.shape(arr)}.")
        return cls(float(flat[0]), float(flat[1]), float(flat[2]))

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_tuple(self) -> tuple[float, float, float]:
        return (float(self.x), float(self.y), float(self.z))

    def approx_equal(self, other: Point3D, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Check whether another point is within the given tolerances of this one."""
        return bool(np.allclose(self.to_array(), other.to_array(), rtol=rtol, atol=atol))
