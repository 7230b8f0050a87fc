"""Define primitive shapes approximating link geometry, centered on their link's frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from cartesian_motion.geometry import AxisAlignedBoundingBox, Point3D


class PrimitiveShape(Protocol):
    """A shape symmetric about the origin of its link frame."""

    @property
    def half_extents(self) -> Point3D:
        """Get the distances (meters) from the shape's center to its bounding-box faces."""
        ...

    @property
    def aabb(self) -> AxisAlignedBoundingBox:
        """Get the axis-aligned bounding box (AABB) of the shape in its link frame."""
        half = self.half_extents
        return AxisAlignedBoundingBox(min_xyz=-1.0 * half, max_xyz=half)


@dataclass(frozen=True)
class Box(PrimitiveShape):
    """A box with side lengths (meters) along its link's x, y, and z axes."""

    x_m: float
    y_m: float
    z_m: float

    @property
    def half_extents(self) -> Point3D:
        """Get half of each side length of the box."""
        return 0.5 * Point3D(self.x_m, self.y_m, self.z_m)


@dataclass(frozen=True)
class Sphere(PrimitiveShape):
    radius_m: float

    @property
    def half_extents(self) -> Point3D:
        """Get the sphere's radius along every axis."""
        return Point3D(self.radius_m, self.radius_m, self.radius_m)


@dataclass(frozen=True)
class Cylinder(PrimitiveShape):
    """A cylinder whose axis is its link's z-axis."""

    height_m: float
    radius_m: float

    @property
    def half_extents(self) -> Point3D:
        """Get the radius across the axis and half the height along it."""
        return Point3D(self.radius_m, self.radius_m, self.height_m / 2.0)


def create_primitive_shape(data: dict[str, Any]) -> PrimitiveShape:
    """Create a primitive shape from its YAML data, e.g. {"type": "sphere", "radius": 0.1}.

    :raises KeyError: If the data doesn't specify a shape type
    :raises ValueError: If the shape type is unknown
    """
    shape_type = data.get("type")
    if shape_type is None:
        raise KeyError(f"Cannot construct a primitive shape without a 'type' key: {data}")

    if shape_type == "box":
        return Box(x_m=data["x"], y_m=data["y"], z_m=data["z"])
    if shape_type == "sphere":
        return Sphere(radius_m=data["radius"])
    if shape_type == "cylinder":
        return Cylinder(height_m=data["height"], radius_m=data["radius"])

    raise ValueError(f"Unknown primitive shape type: {shape_type}")
