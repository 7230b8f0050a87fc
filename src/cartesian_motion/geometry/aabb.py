"""Define axis-aligned bounding boxes, used to measure the size of robot links."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from cartesian_motion.geometry.points import Point3D

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class AxisAlignedBoundingBox:
    """A box spanning from its minimum to its maximum (x,y,z) corner."""

    min_xyz: Point3D
    max_xyz: Point3D

    def __post_init__(self) -> None:
        """Verify that no minimum coordinate exceeds the corresponding maximum coordinate."""
        if np.any(self.min_xyz.to_array() > self.max_xyz.to_array()):
            raise ValueError(f"AABB minimum {self.min_xyz} exceeds its maximum {self.max_xyz}")

    @classmethod
    def union(cls, aabbs: Iterable[AxisAlignedBoundingBox]) -> AxisAlignedBoundingBox | None:
        """Compute the smallest box containing every given box (None if none are given)."""
        corners = [(aabb.min_xyz.to_array(), aabb.max_xyz.to_array()) for aabb in aabbs]
        if not corners:
            return None

        mins, maxs = zip(*corners)
        return AxisAlignedBoundingBox(
            min_xyz=Point3D.from_array(np.min(mins, axis=0)),
            max_xyz=Point3D.from_array(np.max(maxs, axis=0)),
        )

    @property
    def extents(self) -> Point3D:
        """Get the (x,y,z) side lengths (meters) of the box."""
        return self.max_xyz - self.min_xyz
